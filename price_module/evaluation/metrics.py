#!/usr/bin/env python3
"""
📊 Regression Metrics - метрики качества модели цены

R², MAE, MSE, RMSE по сырым данным и финальным коэффициентам.
Функции чистые: модель не меняется, повторный вызов даёт тот же результат.
"""

from dataclasses import dataclass, asdict
from typing import Dict

import numpy as np

from ..core.model import LinearModel, ParameterSpace
from ..data_collector.dataset import DataSet
from ..utils.exceptions import InputError, NumericDegeneracyError

@dataclass(frozen=True)
class RegressionMetrics:
    """Результат оценки модели"""
    r2: float
    mae: float
    mse: float
    rmse: float
    mean_price: float
    ss_res: float
    ss_tot: float
    n_samples: int

    @property
    def explained_variance_pct(self) -> float:
        return self.r2 * 100

    @property
    def fit_quality(self) -> str:
        return MetricsEvaluator.fit_quality(self.r2)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

class MetricsEvaluator:
    """Класс для расчета метрик регрессии"""

    @staticmethod
    def residuals(dataset: DataSet, model: LinearModel) -> np.ndarray:
        """price - prediction для каждого образца"""
        model.require_space(ParameterSpace.RAW)
        return dataset.price - model.predict(dataset.mileage)

    def evaluate(self, dataset: DataSet, model: LinearModel) -> RegressionMetrics:
        """
        Рассчитать все метрики

        Args:
            dataset: Сырые образцы
            model: Коэффициенты в сыром пространстве

        Returns:
            RegressionMetrics

        Raises:
            InputError: пустой датасет
            NumericDegeneracyError: все цены одинаковы (R² не определён)
        """
        n = len(dataset)
        if n == 0:
            raise InputError("Нельзя оценить модель на пустом датасете")

        price = dataset.price
        residual = self.residuals(dataset, model)

        mean_price = float(np.sum(price) / n)
        ss_res = float(np.sum(residual ** 2))
        ss_tot = float(np.sum((price - mean_price) ** 2))

        if ss_tot == 0:
            raise NumericDegeneracyError("Все цены одинаковы: полная дисперсия равна 0, R² не определён")

        mse = ss_res / n
        return RegressionMetrics(
            r2=1 - ss_res / ss_tot,
            mae=float(np.sum(np.abs(residual)) / n),
            mse=mse,
            rmse=float(np.sqrt(mse)),
            mean_price=mean_price,
            ss_res=ss_res,
            ss_tot=ss_tot,
            n_samples=n,
        )

    @staticmethod
    def fit_quality(r2: float) -> str:
        """Словесная оценка качества по R²"""
        if r2 > 0.9:
            return 'excellent'
        elif r2 > 0.7:
            return 'good'
        elif r2 > 0.5:
            return 'moderate'
        return 'poor'
