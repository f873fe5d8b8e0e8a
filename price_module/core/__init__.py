"""
🏗️ Core модуль - базовые компоненты модели цены

Содержит модель, оптимизатор, базовые модели, сохранение и предсказание.
"""

from .model import LinearModel, ParameterSpace, TrainingState, TrainingStatus
from .optimizer import GradientDescentOptimizer
from .baseline import BaselineModels
from .model_manager import ModelManager
from .predictor import PricePredictor, PricePrediction

__all__ = [
    'LinearModel',
    'ParameterSpace',
    'TrainingState',
    'TrainingStatus',
    'GradientDescentOptimizer',
    'BaselineModels',
    'ModelManager',
    'PricePredictor',
    'PricePrediction'
]
