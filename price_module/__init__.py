"""
🚗 price_module - линейная регрессия цены автомобиля по пробегу

Градиентный спуск на стандартизированном пробеге, обратный пересчёт
коэффициентов, сохранение и предсказание.
"""

__version__ = '1.0.0'
