#!/usr/bin/env python3
"""
📈 RegressionPlotter - графики данных и линии регрессии

Только потребитель: получает сырые данные и модель, пишет PNG.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from ..core.model import LinearModel, ParameterSpace
from ..data_collector.dataset import DataSet
from ..utils.exceptions import PersistenceError
from ..utils.logger import Logger, get_logger

class RegressionPlotter:
    """Построение графиков для модели цены по пробегу"""

    def __init__(self, output_dir: Union[str, Path] = 'plots', logger: Optional[Logger] = None):
        self.output_dir = Path(output_dir)
        self.logger = logger or get_logger('RegressionPlotter')

    def _save(self, fig, filename: str) -> str:
        path = self.output_dir / filename
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            fig.tight_layout()
            fig.savefig(path, dpi=150, bbox_inches='tight')
        except (OSError, ValueError) as e:
            error = PersistenceError(f"Не удалось сохранить график {path}: {e}")
            self.logger.log_error("сохранение графика", error)
            raise error from e
        finally:
            plt.close(fig)

        self.logger.info(f"🖼️  График сохранён: {path}")
        return str(path)

    @staticmethod
    def _scatter(ax, dataset: DataSet, size: float):
        ax.scatter(dataset.mileage, dataset.price, s=size, color='#ff0080',
                   edgecolor='k', linewidth=0.5, label='Data points')
        ax.set_xlabel('Mileage (km)', fontsize=12)
        ax.set_ylabel('Price', fontsize=12)
        ax.grid(True, alpha=0.3)

    def plot_data_points(self, dataset: DataSet, filename: str = 'data_distribution.png') -> str:
        """Только точки данных"""
        fig, ax = plt.subplots(figsize=(8, 6))
        self._scatter(ax, dataset, size=40)
        ax.set_title('Car Price vs Mileage (Data Distribution)', fontsize=14, fontweight='bold')
        return self._save(fig, filename)

    def plot_regression(self, dataset: DataSet, model: LinearModel,
                        filename: str = 'regression_with_line.png') -> str:
        """Точки данных и линия регрессии в сыром пространстве"""
        model.require_space(ParameterSpace.RAW)

        fig, ax = plt.subplots(figsize=(8, 6))
        self._scatter(ax, dataset, size=25)

        x = np.array([np.min(dataset.mileage), np.max(dataset.mileage)])
        ax.plot(x, model.predict(x), color='r', linewidth=2, label='Regression line')
        ax.set_title('Linear Regression: Car Price vs Mileage', fontsize=14, fontweight='bold')
        ax.legend()
        return self._save(fig, filename)

    def plot_loss_history(self, loss_history: Sequence[float],
                          filename: str = 'loss_history.png') -> str:
        """Кривая loss по эпохам"""
        fig, ax = plt.subplots(figsize=(8, 6))
        ax.plot(np.arange(len(loss_history)), loss_history, color='steelblue', linewidth=2)
        ax.set_xlabel('Epoch', fontsize=12)
        ax.set_ylabel('Loss', fontsize=12)
        ax.set_title('Training Loss', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)
        return self._save(fig, filename)
