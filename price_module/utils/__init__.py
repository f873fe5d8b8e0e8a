"""
🔧 Utils модуль - утилиты и вспомогательные функции

Содержит конфигурацию, логирование, исключения и валидацию.
"""

from .config import Config, DataConfig, TrainingConfig
from .logger import Logger, get_logger
from .exceptions import (
    PriceModelError,
    InputError,
    NumericDegeneracyError,
    DivergenceError,
    PersistenceError,
)
from .validators import DataValidator, ModelValidator, ConfigValidator

__all__ = [
    'Config',
    'DataConfig',
    'TrainingConfig',
    'Logger',
    'get_logger',
    'PriceModelError',
    'InputError',
    'NumericDegeneracyError',
    'DivergenceError',
    'PersistenceError',
    'DataValidator',
    'ModelValidator',
    'ConfigValidator'
]
