#!/usr/bin/env python3
"""
📦 DataSet - неизменяемый набор пар (пробег, цена)

Одна запись на строку: пробег и цена хранятся в одной таблице,
поэтому пара образца i не может рассинхронизироваться.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Optional

import numpy as np
import pandas as pd

from ..utils.validators import DataValidator

@dataclass(frozen=True)
class Sample:
    """Один образец: пробег и цена в исходных единицах"""
    mileage: float
    price: float

class DataSet:
    """
    Упорядоченный неизменяемый набор образцов

    Создаётся один раз из входных данных и больше не меняется:
    наружу отдаются только read-only массивы.
    """

    def __init__(self, df: pd.DataFrame, source: Optional[str] = None):
        DataValidator.validate_samples(df)
        frame = df[['mileage', 'price']].astype(float).reset_index(drop=True)
        self._frame = frame
        self._mileage = self._readonly(frame['mileage'].to_numpy(copy=True))
        self._price = self._readonly(frame['price'].to_numpy(copy=True))
        self.source = source

    @staticmethod
    def _readonly(values: np.ndarray) -> np.ndarray:
        values.setflags(write=False)
        return values

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, float]], source: Optional[str] = None) -> 'DataSet':
        """Создать датасет из последовательности пар (пробег, цена)"""
        rows = [(float(mileage), float(price)) for mileage, price in pairs]
        return cls(pd.DataFrame(rows, columns=['mileage', 'price']), source=source)

    @classmethod
    def from_arrays(cls, mileage: Sequence[float], price: Sequence[float],
                    source: Optional[str] = None) -> 'DataSet':
        """Создать датасет из двух последовательностей одинаковой длины"""
        mileage = np.asarray(mileage, dtype=float)
        price = np.asarray(price, dtype=float)
        if mileage.shape != price.shape or mileage.ndim != 1:
            raise ValueError(f"Размерности mileage {mileage.shape} и price {price.shape} не совпадают")
        return cls(pd.DataFrame({'mileage': mileage, 'price': price}), source=source)

    @property
    def mileage(self) -> np.ndarray:
        return self._mileage

    @property
    def price(self) -> np.ndarray:
        return self._price

    def to_frame(self) -> pd.DataFrame:
        """Копия данных в виде DataFrame"""
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._frame)

    def __iter__(self) -> Iterator[Sample]:
        for mileage, price in zip(self._mileage, self._price):
            yield Sample(float(mileage), float(price))

    def __getitem__(self, index: int) -> Sample:
        return Sample(float(self._mileage[index]), float(self._price[index]))

    def __repr__(self) -> str:
        return f"DataSet(n={len(self)}, source={self.source!r})"
