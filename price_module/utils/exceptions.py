#!/usr/bin/env python3
"""
🚨 Исключения для системы предсказания цены по пробегу

Каждый тип ошибки отделён, чтобы вызывающий код мог выбрать реакцию:
пересобрать данные, уменьшить learning rate или проверить файл модели.
"""


class PriceModelError(Exception):
    """Базовое исключение системы"""
    pass


class InputError(PriceModelError):
    """Некорректные входные данные: пустой датасет, битая строка CSV, нечитаемый файл"""

    def __init__(self, message: str, row: int = None):
        self.row = row
        if row is not None:
            message = f"строка {row}: {message}"
        super().__init__(message)


class NumericDegeneracyError(PriceModelError):
    """Вырожденные данные: нулевое стандартное отклонение или нулевая дисперсия цены"""
    pass


class DivergenceError(PriceModelError):
    """Градиентный спуск разошёлся (NaN/inf в градиентах, loss или коэффициентах)"""

    def __init__(self, message: str, epoch: int = None):
        self.epoch = epoch
        if epoch is not None:
            message = f"эпоха {epoch}: {message}"
        super().__init__(message)


class PersistenceError(PriceModelError):
    """Ошибка записи или чтения файла модели"""
    pass
