#!/usr/bin/env python3
"""
📈 PriceRegressionSystem - полный цикл обучения модели цены по пробегу

DataSet → Standardizer → GradientDescentOptimizer → Standardizer.unscale
→ MetricsEvaluator → ModelManager.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.baseline import BaselineModels
from ..core.model import LinearModel, TrainingState
from ..core.model_manager import ModelManager
from ..core.optimizer import EpochCallback, GradientDescentOptimizer
from ..data_collector.data_manager import DataManager
from ..data_collector.dataset import DataSet
from ..evaluation.metrics import MetricsEvaluator, RegressionMetrics
from ..features.standardizer import Standardizer
from ..utils.config import Config
from ..utils.exceptions import PriceModelError
from ..utils.logger import Logger
from ..utils.validators import ConfigValidator

@dataclass
class TrainingResult:
    """Итог обучения: модель в сыром пространстве и всё, что к ней привело"""
    model: LinearModel
    standardized_model: LinearModel
    state: TrainingState
    mean: float
    stddev: float
    duration: float
    metrics: Optional[RegressionMetrics] = None
    baseline: Optional[Dict[str, Any]] = None
    plots: List[str] = field(default_factory=list)
    data_summary: Optional[Dict[str, float]] = None

    @property
    def status(self) -> str:
        return self.state.status.value

    @property
    def epochs(self) -> int:
        return self.state.epoch

    def to_metadata(self) -> Dict[str, Any]:
        """Метаданные для сохранения рядом с коэффициентами"""
        return {
            'status': self.status,
            'epochs': self.epochs,
            'final_loss': self.state.final_loss,
            'data': self.data_summary,
            'standardization': {'mean': self.mean, 'stddev': self.stddev},
            'standardized_model': self.standardized_model.to_dict(),
            'metrics': self.metrics.to_dict() if self.metrics else None,
            'baseline': self.baseline,
            'duration': self.duration,
        }

class PriceRegressionSystem:
    """
    Система обучения и сохранения модели цены

    Координирует работу:
    - DataManager: загрузка датасета
    - Standardizer + GradientDescentOptimizer: обучение
    - MetricsEvaluator / BaselineModels: отчётность
    - ModelManager: сохранение коэффициентов
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Инициализация системы

        Args:
            config: Конфигурация системы
        """
        self.config = config or Config()
        ConfigValidator.validate_config(self.config)

        log_file = None
        if self.config.log_to_file:
            log_file = str(Path(self.config.logs_root) / f"price_model_{time.strftime('%Y%m%d')}.log")
        self.logger = Logger(
            name='PriceRegressionSystem',
            level=self.config.log_level,
            log_file=log_file,
            log_format=self.config.log_format
        )

        self.data_manager = DataManager(self.config)
        self.model_manager = ModelManager(self.config)
        self.evaluator = MetricsEvaluator()
        self.baselines = BaselineModels()

    def load_data(self, path: Optional[Union[str, Path]] = None) -> DataSet:
        return self.data_manager.load_dataset(path)

    def train(self, dataset: DataSet, on_epoch: Optional[EpochCallback] = None) -> TrainingResult:
        """
        Обучение на сырых образцах

        Args:
            dataset: Сырые образцы
            on_epoch: Колбэк прогресса (эпоха, loss)

        Returns:
            TrainingResult с моделью в сыром пространстве
        """
        training = self.config.training
        self.logger.log_training_start({
            'samples': len(dataset),
            'learning_rate': training.learning_rate,
            'max_epoch': training.max_epoch,
            'tolerance': training.tolerance,
            'loss_metric': training.loss_metric,
        })
        start = time.time()

        standardizer = Standardizer()
        try:
            standardized = standardizer.fit_transform(dataset)
        except PriceModelError as e:
            self.logger.log_error("стандартизация", e)
            raise
        self.logger.log_standardization(standardizer.mean, standardizer.stddev)

        optimizer = GradientDescentOptimizer(training, logger=self.logger, on_epoch=on_epoch)
        state = optimizer.fit(standardized)

        raw_model = standardizer.unscale(state.model)
        duration = time.time() - start

        self.logger.log_training_end(state.status.value, {
            'theta0': raw_model.theta0,
            'theta1': raw_model.theta1,
        })
        self.logger.log_performance("Обучение", duration)

        return TrainingResult(
            model=raw_model,
            standardized_model=state.model,
            state=state,
            mean=standardizer.mean,
            stddev=standardizer.stddev,
            duration=duration,
        )

    def evaluate(self, dataset: DataSet, result: TrainingResult) -> TrainingResult:
        """Метрики и сравнение с базовыми моделями (по настройкам конфигурации)"""
        if self.config.compute_metrics:
            try:
                result.metrics = self.evaluator.evaluate(dataset, result.model)
            except PriceModelError as e:
                self.logger.log_error("расчёт метрик", e)
                raise
            metrics = result.metrics
            self.logger.log_metrics({
                'r2': metrics.r2,
                'explained_variance_pct': metrics.explained_variance_pct,
                'mae': metrics.mae,
                'rmse': metrics.rmse,
                'mean_price': metrics.mean_price,
                'fit_quality': metrics.fit_quality,
            })

        if self.config.compare_baseline:
            result.baseline = self.baselines.compare(dataset, result.model)
            ols = result.baseline['ols_coefficients']
            self.logger.info(f"📐 МНК: θ0={ols['theta0']:.6f}, θ1={ols['theta1']:.6f}")

        return result

    def make_plots(self, dataset: DataSet, result: TrainingResult) -> List[str]:
        """Графики данных, регрессии и loss"""
        from ..visualization.plotter import RegressionPlotter

        plotter = RegressionPlotter(self.config.plots_root, logger=self.logger)
        result.plots = [
            plotter.plot_data_points(dataset),
            plotter.plot_regression(dataset, result.model),
            plotter.plot_loss_history(result.state.loss_history),
        ]
        return result.plots

    def save(self, result: TrainingResult, path: Optional[Union[str, Path]] = None) -> str:
        """Сохранение коэффициентов, метаданных и (опционально) запуска в MLflow"""
        metadata = result.to_metadata()
        metadata['config'] = dict(vars(self.config.training))
        model_path = self.model_manager.save_model(result.model, metadata, path)

        if self.config.track_experiments:
            metrics = {'final_loss': result.state.final_loss, 'epochs': float(result.epochs),
                       'theta0': result.model.theta0, 'theta1': result.model.theta1}
            if result.metrics:
                metrics.update({'r2': result.metrics.r2, 'mae': result.metrics.mae,
                                'rmse': result.metrics.rmse})
            params = dict(vars(self.config.training))
            params['status'] = result.status
            self.model_manager.log_experiment(params, metrics, artifact_path=model_path)

        return model_path

    def run_experiment(self, data_path: Optional[Union[str, Path]] = None,
                       output_path: Optional[Union[str, Path]] = None,
                       on_epoch: Optional[EpochCallback] = None) -> TrainingResult:
        """
        Запуск полного цикла: загрузка, обучение, оценка, графики, сохранение

        Returns:
            TrainingResult
        """
        self.logger.info("📊 Шаг 1: Загрузка данных...")
        dataset = self.load_data(data_path)

        self.logger.info("🤖 Шаг 2: Обучение модели...")
        result = self.train(dataset, on_epoch=on_epoch)
        result.data_summary = self.data_manager.describe(dataset)

        self.logger.info("📏 Шаг 3: Оценка модели...")
        self.evaluate(dataset, result)

        if self.config.make_plots:
            self.logger.info("🖼️  Шаг 4: Графики...")
            self.make_plots(dataset, result)

        self.logger.info("💾 Шаг 5: Сохранение модели...")
        self.save(result, output_path)

        self.logger.info("✅ Эксперимент завершен успешно")
        return result
