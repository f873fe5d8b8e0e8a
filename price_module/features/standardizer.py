#!/usr/bin/env python3
"""
📐 Standardizer - стандартизация пробега и обратный пересчёт коэффициентов

z = (x - mean) / std, где std - стандартное отклонение генеральной
совокупности (деление на n). Цена переносится без изменений.

Обратный пересчёт: подставляя z = (x - mean) / std в price = θ0 + θ1·z,
получаем price = (θ0 - θ1·mean/std) + (θ1/std)·x.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.model import LinearModel, ParameterSpace
from ..data_collector.dataset import DataSet
from ..utils.exceptions import InputError, NumericDegeneracyError
from ..utils.validators import DataValidator

@dataclass(frozen=True)
class StandardizedDataSet:
    """Стандартизированный пробег и исходная цена, в порядке исходного датасета"""
    mileage_z: np.ndarray
    price: np.ndarray
    mean: float
    stddev: float

    def __len__(self) -> int:
        return len(self.price)

class Standardizer:
    """
    Стандартизация независимой переменной

    fit() запоминает mean/std, transform() строит стандартизированную копию,
    unscale() переводит коэффициенты обратно в сырые единицы пробега.
    """

    def __init__(self):
        self.mean: Optional[float] = None
        self.stddev: Optional[float] = None

    @property
    def is_fitted(self) -> bool:
        return self.mean is not None

    def fit(self, dataset: DataSet) -> 'Standardizer':
        """
        Вычислить среднее и стандартное отклонение пробега

        Raises:
            InputError: пустой датасет
            NumericDegeneracyError: все значения пробега одинаковы (в т.ч. один образец)
        """
        mileage = np.asarray(dataset.mileage, dtype=float)
        if mileage.size == 0:
            raise InputError("Нельзя стандартизировать пустой датасет")

        DataValidator.validate_spread(mileage, 'mileage')

        mean = float(np.sum(mileage) / mileage.size)
        stddev = float(np.sqrt(np.sum((mileage - mean) ** 2) / mileage.size))

        if stddev == 0 or not np.isfinite(stddev):
            raise NumericDegeneracyError(f"Стандартное отклонение пробега некорректно: {stddev}")

        self.mean = mean
        self.stddev = stddev
        return self

    def _check_fitted(self):
        if not self.is_fitted:
            raise RuntimeError("Standardizer не обучен: сначала вызовите fit()")

    def transform(self, dataset: DataSet) -> StandardizedDataSet:
        """Стандартизированная копия датасета"""
        self._check_fitted()
        mileage_z = (np.asarray(dataset.mileage, dtype=float) - self.mean) / self.stddev
        price = np.array(dataset.price, dtype=float)
        mileage_z.setflags(write=False)
        price.setflags(write=False)
        return StandardizedDataSet(mileage_z=mileage_z, price=price,
                                   mean=self.mean, stddev=self.stddev)

    def fit_transform(self, dataset: DataSet) -> StandardizedDataSet:
        return self.fit(dataset).transform(dataset)

    def unscale(self, model: LinearModel) -> LinearModel:
        """Коэффициенты из стандартизированного пространства в сырое"""
        self._check_fitted()
        model.require_space(ParameterSpace.STANDARDIZED)

        theta1 = model.theta1 / self.stddev
        theta0 = model.theta0 - theta1 * self.mean
        return LinearModel(theta0, theta1, ParameterSpace.RAW)

    def scale(self, model: LinearModel) -> LinearModel:
        """Обратная операция к unscale()"""
        self._check_fitted()
        model.require_space(ParameterSpace.RAW)

        theta1 = model.theta1 * self.stddev
        theta0 = model.theta0 + model.theta1 * self.mean
        return LinearModel(theta0, theta1, ParameterSpace.STANDARDIZED)

    def to_dict(self) -> dict:
        return {'mean': self.mean, 'stddev': self.stddev}
