#!/usr/bin/env python3
"""
📝 Логирование для модели цены по пробегу

Обёртка над logging: цветная консоль, необязательный файл логов и
готовые сообщения для этапов обучения (данные, эпохи, метрики, сохранение).
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

class ColoredFormatter(logging.Formatter):
    """Консольный форматтер: цвет уровня и значок перед сообщением"""

    RESET = '\033[0m'
    STYLES = {
        'DEBUG': ('\033[36m', '🔍'),
        'INFO': ('\033[32m', 'ℹ️ '),
        'WARNING': ('\033[33m', '⚠️ '),
        'ERROR': ('\033[31m', '❌'),
        'CRITICAL': ('\033[35m', '🚨'),
    }

    def format(self, record):
        style = self.STYLES.get(record.levelname)
        if style is None:
            return super().format(record)

        # Запись общая для всех обработчиков, поэтому меняем только копию
        color, badge = style
        styled = logging.makeLogRecord(record.__dict__)
        styled.msg = f"{badge} {record.msg}"
        styled.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(styled)

class Logger:
    """Логгер компонентов: консоль всегда, файл - если указан путь"""

    def __init__(self, name: str = 'PriceModel', level: str = 'INFO',
                 log_file: Optional[str] = None, log_format: Optional[str] = None):
        """
        Args:
            name: Имя логгера (по нему logging находит общий экземпляр)
            level: DEBUG / INFO / WARNING / ERROR / CRITICAL
            log_file: Файл логов, каталог создаётся при необходимости
            log_format: Формат строки logging (по умолчанию DEFAULT_FORMAT)
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.upper())
        log_format = log_format or DEFAULT_FORMAT

        # Повторное создание с тем же именем не должно дублировать вывод
        self._drop_handlers()

        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(ColoredFormatter(log_format))
        self.logger.addHandler(stream)

        if log_file:
            self._attach_file(Path(log_file), log_format)

    def _drop_handlers(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def _attach_file(self, path: Path, log_format: str):
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
        handler.setFormatter(logging.Formatter(log_format))
        self.logger.addHandler(handler)

    def debug(self, message: str):
        self.logger.debug(message)

    def info(self, message: str):
        self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def critical(self, message: str):
        self.logger.critical(message)

    def log_data_loading(self, source: str, rows: int):
        """Источник и размер загруженного датасета"""
        self.info(f"📊 Датасет: {source} ({rows:,} образцов)")

    def log_standardization(self, mean: float, stddev: float):
        self.info(f"📐 Стандартизация пробега: mean={mean:.4f}, std={stddev:.4f}")

    def log_training_start(self, params: Dict[str, Any]):
        """Параметры запуска градиентного спуска"""
        self.info("🚀 Градиентный спуск: старт")
        for key, value in params.items():
            self.info(f"   🔧 {key} = {value}")

    def log_epoch(self, epoch: int, loss: float):
        self.info(f"⏳ Эпоха {epoch}\tloss: {loss:.7f}")

    def log_convergence(self, epoch: int, loss: float):
        self.info(f"🎯 Сходимость на эпохе {epoch} (loss: {loss:.6f})")

    def log_training_end(self, status: str, coefficients: Dict[str, float]):
        """Итоговый статус и коэффициенты в сыром пространстве"""
        self.info(f"✅ Градиентный спуск завершён: {status}")
        for name, value in coefficients.items():
            self.info(f"   📊 {name} = {value:.6f}")

    def log_metrics(self, metrics: Dict[str, Any]):
        self.info("📏 Точность модели:")
        for name, value in metrics.items():
            shown = f"{value:.6f}" if isinstance(value, float) else value
            self.info(f"   📊 {name} = {shown}")

    def log_model_saving(self, model_path: str):
        self.info(f"💾 Коэффициенты записаны: {model_path}")

    def log_error(self, operation: str, error: Exception):
        """
        Ошибка этапа с типом исключения

        Тип пишется отдельной DEBUG-строкой, чтобы в обычном режиме
        вывод оставался коротким.
        """
        self.error(f"{operation}: {error}")
        self.debug(f"{operation}: {type(error).__name__}")

    def log_performance(self, operation: str, duration: float):
        """Длительность этапа в удобных единицах"""
        if duration < 1:
            shown = f"{duration * 1000:.1f} мс"
        elif duration < 60:
            shown = f"{duration:.2f} с"
        else:
            shown = f"{int(duration // 60)} мин {duration % 60:.1f} с"
        self.info(f"⚡ {operation}: {shown}")

def get_logger(name: Optional[str] = None, level: str = 'INFO') -> Logger:
    """Логгер с консольным выводом и уровнем по умолчанию"""
    return Logger(name or 'PriceModel', level=level)
