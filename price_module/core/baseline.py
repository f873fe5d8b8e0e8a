#!/usr/bin/env python3
"""
📊 Baseline Models - базовые модели для сравнения

Аналитическое решение МНК (scikit-learn LinearRegression) и константная
модель (DummyRegressor) для сравнения с градиентным спуском.
"""

import numpy as np
from typing import Dict, Any
from sklearn.dummy import DummyRegressor
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_squared_error, mean_absolute_error, r2_score
import logging

from ..data_collector.dataset import DataSet
from .model import LinearModel, ParameterSpace

class BaselineModels:
    """
    Класс для создания и оценки базовых моделей
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def ordinary_least_squares(dataset: DataSet) -> LinearModel:
        """
        МНК по сырым данным

        Returns:
            LinearModel в сыром пространстве
        """
        X = np.asarray(dataset.mileage, dtype=float).reshape(-1, 1)
        lr = LinearRegression()
        lr.fit(X, dataset.price)
        return LinearModel(float(lr.intercept_), float(lr.coef_[0]), ParameterSpace.RAW)

    @staticmethod
    def _score(y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, float]:
        return {
            'rmse': float(np.sqrt(mean_squared_error(y_true, y_pred))),
            'mae': float(mean_absolute_error(y_true, y_pred)),
            'r2': float(r2_score(y_true, y_pred))
        }

    def compare(self, dataset: DataSet, model: LinearModel) -> Dict[str, Any]:
        """
        Сравнение модели градиентного спуска с базовыми

        Args:
            dataset: Сырые образцы
            model: Модель в сыром пространстве

        Returns:
            Словарь с метриками моделей и расхождением коэффициентов с МНК
        """
        model.require_space(ParameterSpace.RAW)
        X = np.asarray(dataset.mileage, dtype=float).reshape(-1, 1)
        y = dataset.price

        baselines = {}

        # 1. Dummy Regressor (среднее значение)
        dummy_mean = DummyRegressor(strategy='mean')
        dummy_mean.fit(X, y)
        baselines['dummy_mean'] = self._score(y, dummy_mean.predict(X))

        # 2. МНК
        ols = self.ordinary_least_squares(dataset)
        baselines['ordinary_least_squares'] = self._score(y, ols.predict(dataset.mileage))

        # 3. Градиентный спуск
        baselines['gradient_descent'] = self._score(y, model.predict(dataset.mileage))

        gap = {
            'theta0': abs(model.theta0 - ols.theta0),
            'theta1': abs(model.theta1 - ols.theta1),
        }
        if gap['theta1'] > 1e-3 * max(abs(ols.theta1), 1e-12):
            self.logger.warning(f"Градиентный спуск далёк от МНК: {gap}")

        return {
            'models': baselines,
            'ols_coefficients': {'theta0': ols.theta0, 'theta1': ols.theta1},
            'coefficient_gap': gap,
        }
