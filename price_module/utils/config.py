#!/usr/bin/env python3
"""
⚙️ Система конфигурации для модели цены по пробегу

Централизованное управление настройками: данные, обучение, пути, логирование.
"""

import json
from typing import Dict, Optional, Any
from dataclasses import dataclass, field, asdict
from pathlib import Path

@dataclass
class DataConfig:
    """Источник данных: CSV с колонками пробега и цены"""
    data_path: str = 'data/data.csv'
    mileage_column: str = 'km'
    price_column: str = 'price'
    delimiter: str = ','

@dataclass
class TrainingConfig:
    """Конфигурация градиентного спуска"""
    learning_rate: float = 0.001
    max_epoch: int = 1000
    tolerance: float = 1e-7
    loss_metric: str = 'mae'  # mae, mse - только отслеживаемая метрика, градиент всегда квадратичный
    log_every: int = 50
    check_divergence: bool = True

@dataclass
class Config:
    """Пути, логирование, трекинг и параметры обучения"""
    # Пути
    models_root: str = 'models'
    thetas_file: str = 'thetas'
    logs_root: str = 'logs'
    plots_root: str = 'plots'

    # Логирование
    log_level: str = 'INFO'
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    log_to_file: bool = False

    # Трекинг экспериментов
    track_experiments: bool = False
    mlflow_tracking_uri: str = 'file:./mlruns'
    mlflow_experiment_name: str = 'mileage_price'

    # Отчётность
    compute_metrics: bool = True
    compare_baseline: bool = True
    make_plots: bool = False

    # Вложенные разделы
    data: DataConfig = field(default_factory=DataConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)

    @property
    def thetas_path(self) -> Path:
        """Полный путь к файлу с коэффициентами"""
        return Path(self.models_root) / self.thetas_file

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Конфигурация из словаря; отсутствующие ключи получают значения по умолчанию"""
        config_dict = dict(config_dict)

        # Вложенные разделы приходят из JSON как словари
        if isinstance(config_dict.get('data'), dict):
            config_dict['data'] = DataConfig(**config_dict['data'])
        if isinstance(config_dict.get('training'), dict):
            config_dict['training'] = TrainingConfig(**config_dict['training'])

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Словарь, пригодный для json.dump"""
        return asdict(self)

    def save(self, path: str):
        """Запись конфигурации в JSON"""
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'Config':
        """Чтение конфигурации из JSON"""
        with open(path, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    def with_training(self, **overrides: Optional[Any]) -> 'Config':
        """Копия конфигурации с переопределёнными параметрами обучения (None игнорируется)"""
        training = asdict(self.training)
        training.update({key: value for key, value in overrides.items() if value is not None})
        config_dict = self.to_dict()
        config_dict['training'] = training
        return Config.from_dict(config_dict)

# Конфигурация по умолчанию
DEFAULT_CONFIG = Config()
