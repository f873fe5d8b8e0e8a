#!/usr/bin/env python3
"""
🤖 ModelManager - сохранение и загрузка коэффициентов

Файл коэффициентов - одна строка "theta0,theta1" (сырое пространство,
полная точность float), рядом JSON с метаданными обучения.
Опционально - логирование запуска в MLflow.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import mlflow

from ..utils.config import Config
from ..utils.exceptions import InputError, PersistenceError
from ..utils.logger import Logger
from ..utils.validators import ModelValidator
from .model import LinearModel, ParameterSpace

DELIMITER = ','

class ModelManager:
    """
    Менеджер модели
    - Сохранение/загрузка коэффициентов и метаданных
    - Валидация файлов модели
    - Интеграция с MLflow
    """

    def __init__(self, config: Config):
        self.config = config
        self.logger = Logger('ModelManager', level=config.log_level)

    @staticmethod
    def meta_path_for(thetas_path: Union[str, Path]) -> Path:
        thetas_path = Path(thetas_path)
        return thetas_path.with_name(thetas_path.name + '.meta.json')

    @staticmethod
    def format_thetas(model: LinearModel) -> str:
        """Текстовое представление: theta0,theta1"""
        model.require_space(ParameterSpace.RAW)
        return f"{model.theta0!r}{DELIMITER}{model.theta1!r}"

    @staticmethod
    def parse_thetas(text: str) -> LinearModel:
        """
        Разбор строки "theta0,theta1"

        Raises:
            PersistenceError: пустое содержимое или неверный формат
        """
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            raise PersistenceError("Файл коэффициентов пуст")

        parts = lines[0].split(DELIMITER)
        if len(parts) != 2:
            raise PersistenceError(f"Неверный формат коэффициентов: {lines[0]!r}")

        values = []
        for name, part in zip(('theta0', 'theta1'), parts):
            try:
                values.append(float(part.strip()))
            except ValueError as e:
                raise PersistenceError(f"Неверное значение {name}: {part.strip()!r}") from e

        try:
            ModelValidator.validate_coefficients(*values)
        except InputError as e:
            raise PersistenceError(str(e)) from e

        return LinearModel(values[0], values[1], ParameterSpace.RAW)

    def save_model(self, model: LinearModel, metadata: Optional[Dict[str, Any]] = None,
                   path: Optional[Union[str, Path]] = None) -> str:
        """
        Сохранение коэффициентов и метаданных

        Args:
            model: Модель в сыром пространстве
            metadata: Метаданные обучения (опционально)
            path: Путь к файлу коэффициентов (по умолчанию config.thetas_path)

        Returns:
            Путь к файлу коэффициентов
        """
        model.require_space(ParameterSpace.RAW)
        model_path = Path(path or self.config.thetas_path)
        meta_path = self.meta_path_for(model_path)

        meta = dict(metadata or {})
        meta.update({
            'theta0': model.theta0,
            'theta1': model.theta1,
            'saved_at': datetime.now().isoformat(),
        })
        meta.setdefault('status', 'unknown')
        meta.setdefault('epochs', 0)

        try:
            model_path.parent.mkdir(parents=True, exist_ok=True)
            model_path.write_text(self.format_thetas(model))
            with open(meta_path, 'w') as f:
                json.dump(meta, f, indent=2, default=str)
        except OSError as e:
            error = PersistenceError(f"Не удалось сохранить модель в {model_path}: {e}")
            self.logger.log_error("сохранение модели", error)
            raise error from e

        self.logger.log_model_saving(str(model_path))
        return str(model_path)

    def load_model(self, path: Optional[Union[str, Path]] = None) -> LinearModel:
        """
        Загрузка коэффициентов

        Returns:
            LinearModel в сыром пространстве

        Raises:
            PersistenceError: файл не найден, не читается или повреждён
        """
        model_path = Path(path or self.config.thetas_path)

        try:
            text = model_path.read_text()
        except OSError as e:
            error = PersistenceError(f"Не удалось прочитать файл модели {model_path}: {e}")
            self.logger.log_error("загрузка модели", error)
            raise error from e

        try:
            model = self.parse_thetas(text)
        except PersistenceError as e:
            self.logger.log_error(f"загрузка модели {model_path}", e)
            raise

        self.logger.info(f"✅ Модель загружена: θ0={model.theta0:.6f}, θ1={model.theta1:.6f}")
        return model

    def load_metadata(self, path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """Загрузка метаданных модели"""
        meta_path = self.meta_path_for(path or self.config.thetas_path)

        try:
            with open(meta_path, 'r') as f:
                metadata = json.load(f)
            ModelValidator.validate_metadata(metadata)
        except (OSError, json.JSONDecodeError, InputError) as e:
            error = PersistenceError(f"Метаданные модели недоступны ({meta_path}): {e}")
            self.logger.log_error("загрузка метаданных", error)
            raise error from e

        return metadata

    def get_model_info(self, path: Optional[Union[str, Path]] = None) -> Optional[Dict[str, Any]]:
        """Метаданные модели или None, если модели нет"""
        model_path = Path(path or self.config.thetas_path)
        if not model_path.exists():
            return None
        return self.load_metadata(model_path)

    def log_experiment(self, params: Dict[str, Any], metrics: Dict[str, float],
                       artifact_path: Optional[str] = None) -> Optional[str]:
        """
        Логирование запуска в MLflow (если включено в конфигурации)

        Returns:
            run_id или None, если трекинг выключен
        """
        if not self.config.track_experiments:
            return None

        try:
            mlflow.set_tracking_uri(self.config.mlflow_tracking_uri)
            mlflow.set_experiment(self.config.mlflow_experiment_name)
            with mlflow.start_run() as run:
                mlflow.log_params(params)
                mlflow.log_metrics(metrics)
                if artifact_path:
                    mlflow.log_artifact(artifact_path)
                run_id = run.info.run_id
        except Exception as e:
            error = PersistenceError(f"Не удалось записать запуск в MLflow: {e}")
            self.logger.log_error("MLflow", error)
            raise error from e

        self.logger.info(f"🧪 Запуск записан в MLflow: {run_id}")
        return run_id
