#!/usr/bin/env python3
"""
🧮 Модель и состояние обучения

LinearModel хранит (theta0, theta1) вместе с пространством, в котором
коэффициенты действительны: стандартизированный пробег или сырой пробег.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

import numpy as np

class ParameterSpace(Enum):
    """Пространство, в котором действительны коэффициенты"""
    STANDARDIZED = 'standardized'
    RAW = 'raw'

class TrainingStatus(Enum):
    """Состояния оптимизатора; CONVERGED и MAX_EPOCH_REACHED терминальные"""
    RUNNING = 'running'
    CONVERGED = 'converged'
    MAX_EPOCH_REACHED = 'max_epoch_reached'

    @property
    def is_terminal(self) -> bool:
        return self is not TrainingStatus.RUNNING

@dataclass(frozen=True)
class LinearModel:
    """price = theta0 + theta1 * x"""
    theta0: float
    theta1: float
    space: ParameterSpace = ParameterSpace.RAW

    @classmethod
    def zeros(cls, space: ParameterSpace = ParameterSpace.STANDARDIZED) -> 'LinearModel':
        return cls(0.0, 0.0, space)

    def predict(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        return self.theta0 + self.theta1 * x

    def require_space(self, space: ParameterSpace) -> 'LinearModel':
        """Вернуть себя, если коэффициенты в нужном пространстве, иначе ValueError"""
        if self.space is not space:
            raise ValueError(
                f"Ожидается модель в пространстве '{space.value}', получена '{self.space.value}'"
            )
        return self

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.theta0) and np.isfinite(self.theta1))

    def to_dict(self) -> dict:
        return {'theta0': self.theta0, 'theta1': self.theta1, 'space': self.space.value}

@dataclass
class TrainingState:
    """
    Состояние одного запуска обучения

    Модель всегда в стандартизированном пространстве; loss_history
    только дополняется.
    """
    model: LinearModel = field(default_factory=LinearModel.zeros)
    loss_history: List[float] = field(default_factory=list)
    epoch: int = 0
    status: TrainingStatus = TrainingStatus.RUNNING

    def record(self, model: LinearModel, loss: float):
        if self.status.is_terminal:
            raise RuntimeError(f"Обучение уже завершено: {self.status.value}")
        self.model = model.require_space(ParameterSpace.STANDARDIZED)
        self.loss_history.append(float(loss))
        self.epoch += 1

    def finish(self, status: TrainingStatus):
        if not status.is_terminal:
            raise ValueError("Завершить обучение можно только терминальным состоянием")
        self.status = status

    @property
    def final_loss(self) -> float:
        return self.loss_history[-1] if self.loss_history else float('nan')
