#!/usr/bin/env python3
"""
✅ Система валидации для модели цены по пробегу

Валидация данных, коэффициентов модели и конфигурации на всех этапах.
"""

import numpy as np
import pandas as pd
from typing import Dict, Any

from .exceptions import InputError, NumericDegeneracyError

REQUIRED_COLUMNS = ['mileage', 'price']
LOSS_METRICS = ('mae', 'mse')

class DataValidator:
    """Валидатор данных"""

    @staticmethod
    def validate_samples(df: pd.DataFrame) -> bool:
        """
        Валидация таблицы образцов (mileage, price)

        Args:
            df: DataFrame с колонками mileage и price

        Returns:
            True если данные валидны

        Raises:
            InputError: если данные невалидны
        """
        missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            raise InputError(f"Отсутствуют необходимые колонки: {missing_columns}")

        if df.empty:
            raise InputError("Датасет пуст: нужна хотя бы одна строка данных")

        for col in REQUIRED_COLUMNS:
            if not pd.api.types.is_numeric_dtype(df[col]):
                raise InputError(f"Колонка {col} должна быть числовой")

            values = df[col].to_numpy(dtype=float)
            bad = np.flatnonzero(~np.isfinite(values))
            if bad.size:
                raise InputError(f"Колонка {col} содержит NaN или inf", row=int(bad[0]) + 1)

        return True

    @staticmethod
    def validate_spread(values: np.ndarray, name: str = 'mileage') -> bool:
        """
        Проверка, что значения не все одинаковые

        Raises:
            NumericDegeneracyError: если все значения совпадают
        """
        if values.size < 2 or np.all(values == values[0]):
            raise NumericDegeneracyError(
                f"Все значения '{name}' одинаковы ({values.size} шт.): стандартное отклонение равно 0"
            )
        return True

class ModelValidator:
    """Валидатор коэффициентов и метаданных модели"""

    @staticmethod
    def validate_coefficients(theta0: float, theta1: float) -> bool:
        """Коэффициенты должны быть конечными числами"""
        if not (np.isfinite(theta0) and np.isfinite(theta1)):
            raise InputError(f"Коэффициенты модели не конечны: theta0={theta0}, theta1={theta1}")
        return True

    @staticmethod
    def validate_metadata(metadata: Dict[str, Any]) -> bool:
        """
        Валидация метаданных модели

        Args:
            metadata: Словарь с метаданными

        Returns:
            True если метаданные валидны
        """
        required_fields = ['theta0', 'theta1', 'status', 'epochs', 'saved_at']
        missing_fields = [field for field in required_fields if field not in metadata]

        if missing_fields:
            raise InputError(f"Отсутствуют обязательные поля в метаданных: {missing_fields}")

        if not isinstance(metadata['epochs'], int):
            raise InputError("Поле 'epochs' должно быть целым числом")

        return True

    @staticmethod
    def validate_mileage(mileage: float) -> bool:
        """Пробег для предсказания: конечный и неотрицательный"""
        if mileage is None or not np.isfinite(mileage):
            raise InputError(f"Пробег должен быть конечным числом: {mileage}")
        if mileage < 0:
            raise InputError(f"Пробег не может быть отрицательным: {mileage}")
        return True

class ConfigValidator:
    """Валидатор конфигурации"""

    @staticmethod
    def validate_training_config(training) -> bool:
        """
        Валидация параметров обучения

        Raises:
            ValueError: при некорректных параметрах
        """
        if not np.isfinite(training.learning_rate) or training.learning_rate <= 0:
            raise ValueError(f"learning_rate должен быть положительным: {training.learning_rate}")

        if not isinstance(training.max_epoch, int) or training.max_epoch <= 0:
            raise ValueError(f"max_epoch должен быть положительным целым: {training.max_epoch}")

        if not np.isfinite(training.tolerance) or training.tolerance < 0:
            raise ValueError(f"tolerance должен быть неотрицательным: {training.tolerance}")

        if training.loss_metric not in LOSS_METRICS:
            raise ValueError(f"Неподдерживаемая метрика loss: {training.loss_metric} (ожидается {LOSS_METRICS})")

        if not isinstance(training.log_every, int) or training.log_every < 0:
            raise ValueError(f"log_every должен быть неотрицательным целым: {training.log_every}")

        return True

    @staticmethod
    def validate_config(config) -> bool:
        """Валидация основной конфигурации"""
        ConfigValidator.validate_training_config(config.training)

        if not config.thetas_file:
            raise ValueError("thetas_file не может быть пустым")

        if not config.data.delimiter:
            raise ValueError("delimiter не может быть пустым")

        return True
