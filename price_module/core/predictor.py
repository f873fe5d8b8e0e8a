#!/usr/bin/env python3
"""
🔮 PricePredictor - оценка цены по пробегу

price = theta0 + theta1 * mileage. Отрицательная оценка не ошибка:
цена обрезается до 0 и помечается как вне диапазона.
"""

from dataclasses import dataclass
from typing import Sequence, List

import numpy as np

from ..utils.validators import ModelValidator
from .model import LinearModel, ParameterSpace

@dataclass(frozen=True)
class PricePrediction:
    """Результат предсказания"""
    mileage: float
    raw_price: float
    price: float
    out_of_range: bool

class PricePredictor:
    """Предсказание цены по сохранённым коэффициентам"""

    def __init__(self, model: LinearModel):
        self.model = model.require_space(ParameterSpace.RAW)

    def estimate_price(self, mileage: float) -> PricePrediction:
        """
        Оценка цены для одного пробега

        Raises:
            InputError: пробег отрицательный или не число
        """
        ModelValidator.validate_mileage(mileage)
        raw_price = float(self.model.predict(float(mileage)))
        out_of_range = raw_price < 0
        return PricePrediction(
            mileage=float(mileage),
            raw_price=raw_price,
            price=0.0 if out_of_range else raw_price,
            out_of_range=out_of_range,
        )

    def estimate_prices(self, mileages: Sequence[float]) -> List[PricePrediction]:
        return [self.estimate_price(m) for m in np.asarray(mileages, dtype=float)]
