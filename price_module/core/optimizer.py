#!/usr/bin/env python3
"""
📉 GradientDescentOptimizer - пакетный градиентный спуск для двух коэффициентов

За эпоху по всем стандартизированным образцам:
    residual = θ0 + θ1·z - price
    grad0 = Σ residual,  grad1 = Σ residual·z
    θ0 -= lr·grad0,      θ1 -= lr·grad1

grad0/grad1 - градиент суммы квадратов остатков без множителя 2/n, а
отслеживаемый loss по умолчанию - средняя абсолютная ошибка (MAE).
Метрика и оптимизируемая функция различаются; loss_metric='mse'
переключает только отслеживаемую метрику, сам шаг не меняется.

Суммы считаются numpy (попарное суммирование): результат детерминирован
для одной сборки numpy, но может отличаться в последних битах от
последовательного суммирования слева направо.
"""

from typing import TYPE_CHECKING, Callable, Optional, Tuple

import numpy as np

from ..utils.config import TrainingConfig
from ..utils.exceptions import DivergenceError, InputError
from ..utils.logger import Logger
from ..utils.validators import ConfigValidator
from .model import LinearModel, ParameterSpace, TrainingState, TrainingStatus

if TYPE_CHECKING:
    from ..features.standardizer import StandardizedDataSet

EpochCallback = Callable[[int, float], None]

class GradientDescentOptimizer:
    """
    Оптимизатор (θ0, θ1) в стандартизированном пространстве

    Состояния: RUNNING → CONVERGED (|loss[n] - loss[n-1]| < tolerance)
    или RUNNING → MAX_EPOCH_REACHED (исчерпан max_epoch). Оба терминальные.
    """

    def __init__(self, config: Optional[TrainingConfig] = None,
                 logger: Optional[Logger] = None,
                 on_epoch: Optional[EpochCallback] = None):
        """
        Args:
            config: Параметры обучения (learning_rate, max_epoch, tolerance, ...)
            logger: Логгер для прогресса (опционально)
            on_epoch: Вызывается после каждой эпохи с (номер эпохи, loss)
        """
        self.config = config or TrainingConfig()
        ConfigValidator.validate_training_config(self.config)
        self.logger = logger
        self.on_epoch = on_epoch

    def compute_gradients(self, model: LinearModel,
                          data: 'StandardizedDataSet') -> Tuple[float, float, float]:
        """
        Градиенты и loss в текущей точке

        Returns:
            (grad0, grad1, loss)
        """
        model.require_space(ParameterSpace.STANDARDIZED)
        z = data.mileage_z

        # Переполнение ловит _check_finite
        with np.errstate(over='ignore', invalid='ignore'):
            residual = model.theta0 + model.theta1 * z - data.price
            grad0 = float(np.sum(residual))
            grad1 = float(np.sum(residual * z))

            if self.config.loss_metric == 'mse':
                loss = float(np.sum(residual ** 2) / residual.size)
            else:
                loss = float(np.sum(np.abs(residual)) / residual.size)

        return grad0, grad1, loss

    def step(self, state: TrainingState, data: 'StandardizedDataSet') -> TrainingState:
        """
        Одна эпоха: градиенты, обновление, запись loss, проверка остановки
        """
        if state.status.is_terminal:
            raise RuntimeError(f"Обучение уже завершено: {state.status.value}")

        lr = self.config.learning_rate
        grad0, grad1, loss = self.compute_gradients(state.model, data)

        model = LinearModel(
            state.model.theta0 - lr * grad0,
            state.model.theta1 - lr * grad1,
            ParameterSpace.STANDARDIZED,
        )

        if self.config.check_divergence:
            self._check_finite(state.epoch, grad0, grad1, loss, model)

        state.record(model, loss)
        epoch = state.epoch - 1

        if self.on_epoch is not None:
            self.on_epoch(epoch, loss)

        history = state.loss_history
        if len(history) > 1 and abs(history[-1] - history[-2]) < self.config.tolerance:
            state.finish(TrainingStatus.CONVERGED)
            if self.logger:
                self.logger.log_convergence(epoch, loss)
        elif state.epoch >= self.config.max_epoch:
            state.finish(TrainingStatus.MAX_EPOCH_REACHED)
            if self.logger:
                self.logger.warning(f"Достигнут лимит эпох {self.config.max_epoch} без сходимости "
                                    f"(loss: {loss:.6f})")
        elif self.logger and self.config.log_every and epoch % self.config.log_every == 0:
            self.logger.log_epoch(epoch, loss)

        return state

    def fit(self, data: 'StandardizedDataSet',
            initial: Optional[LinearModel] = None) -> TrainingState:
        """
        Обучение до сходимости или лимита эпох

        Args:
            data: Стандартизированный датасет
            initial: Начальная модель (по умолчанию (0, 0))

        Returns:
            Терминальное TrainingState с моделью в стандартизированном пространстве

        Raises:
            InputError: пустой датасет
            DivergenceError: градиенты, loss или коэффициенты стали NaN/inf
        """
        if len(data) == 0:
            raise InputError("Нельзя обучать на пустом датасете")

        state = TrainingState(model=initial or LinearModel.zeros())
        state.model.require_space(ParameterSpace.STANDARDIZED)

        try:
            while not state.status.is_terminal:
                self.step(state, data)
        except DivergenceError as e:
            if self.logger:
                self.logger.log_error("градиентный спуск", e)
                self.logger.info("💡 Попробуйте уменьшить learning_rate")
            raise

        return state

    @staticmethod
    def _check_finite(epoch: int, grad0: float, grad1: float, loss: float, model: LinearModel):
        if not (np.isfinite(grad0) and np.isfinite(grad1)):
            raise DivergenceError(f"градиент не конечен: grad0={grad0}, grad1={grad1}", epoch=epoch)
        if not np.isfinite(loss):
            raise DivergenceError(f"loss не конечен: {loss}", epoch=epoch)
        if not model.is_finite():
            raise DivergenceError(
                f"коэффициенты не конечны: theta0={model.theta0}, theta1={model.theta1}", epoch=epoch
            )
