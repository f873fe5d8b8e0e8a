"""
🧩 Systems модуль - сборка полного цикла обучения
"""

from .regression_system import PriceRegressionSystem, TrainingResult

__all__ = [
    'PriceRegressionSystem',
    'TrainingResult'
]
