#!/usr/bin/env python3
"""
🚀 Простой интерфейс для обучения модели цены по пробегу

- Загрузка датасета (CSV: пробег, цена)
- Градиентный спуск на стандартизированном пробеге
- Метрики качества и сравнение с МНК
- Сохранение коэффициентов (theta0,theta1) и метаданных
"""

import argparse
import sys
from typing import List, Optional

from price_module.systems.regression_system import PriceRegressionSystem
from price_module.core.model_manager import ModelManager
from price_module.utils.config import Config
from price_module.utils.exceptions import PriceModelError

def build_config(args: argparse.Namespace) -> Config:
    """Конфигурация из файла (если указан) с переопределениями из командной строки"""
    config = Config.load(args.config) if args.config else Config()

    if args.data:
        config.data.data_path = args.data
    if args.log_level:
        config.log_level = args.log_level
    if args.plots:
        config.make_plots = True
    if args.track:
        config.track_experiments = True

    return config.with_training(
        learning_rate=args.learning_rate,
        max_epoch=args.epochs,
        tolerance=args.tolerance,
        loss_metric=args.loss_metric,
    )

def train(config: Config, output: Optional[str] = None) -> bool:
    """
    Обучение модели

    Args:
        config: Конфигурация системы
        output: Путь для файла коэффициентов (по умолчанию из конфигурации)
    """
    print("🤖 Обучение модели цены по пробегу")
    print(f"   Данные: {config.data.data_path}")

    try:
        system = PriceRegressionSystem(config)
        result = system.run_experiment(output_path=output)
    except (PriceModelError, ValueError) as e:
        print(f"\n❌ Ошибка обучения ({type(e).__name__}): {e}", file=sys.stderr)
        return False

    print("\n📊 Результаты обучения:")
    print(f"   Статус: {result.status} (эпох: {result.epochs})")
    print(f"   θ0 = {result.model.theta0:.6f}")
    print(f"   θ1 = {result.model.theta1:.6f}")

    summary = result.data_summary
    if summary:
        print(f"   Образцов: {summary['rows']}, пробег {summary['mileage_min']:.0f}-{summary['mileage_max']:.0f} км, "
              f"цена {summary['price_min']:.0f}-{summary['price_max']:.0f}")

    if result.metrics:
        metrics = result.metrics
        print("\n=== Model Precision Metrics ===")
        print(f"   R²:   {metrics.r2:.4f} ({metrics.explained_variance_pct:.2f}% дисперсии)")
        print(f"   MAE:  {metrics.mae:.2f}")
        print(f"   RMSE: {metrics.rmse:.2f}")
        print(f"   Средняя цена: {metrics.mean_price:.2f}")
        print(f"   Качество: {metrics.fit_quality}")

    for plot in result.plots:
        print(f"   🖼️  {plot}")

    return True

def show_info(config: Config, path: Optional[str] = None) -> bool:
    """Информация о сохранённой модели"""
    manager = ModelManager(config)
    try:
        info = manager.get_model_info(path)
    except PriceModelError as e:
        print(f"❌ Ошибка получения информации: {e}", file=sys.stderr)
        return False

    if info is None:
        print(f"❌ Модель не найдена: {path or config.thetas_path}")
        return False

    print("✅ Модель найдена:")
    print(f"   θ0: {info['theta0']}")
    print(f"   θ1: {info['theta1']}")
    print(f"   Статус: {info['status']} (эпох: {info['epochs']})")
    print(f"   Дата обучения: {info['saved_at']}")

    data = info.get('data') or {}
    if data:
        print(f"   Образцов: {data['rows']}, пробег {data['mileage_min']:.0f}-{data['mileage_max']:.0f} км")

    metrics = info.get('metrics') or {}
    if metrics:
        print("\n📈 Метрики:")
        for metric in ('r2', 'mae', 'rmse'):
            if metric in metrics:
                print(f"   {metric.upper()}: {metrics[metric]:.6f}")
    return True

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='🚀 Обучение модели цены автомобиля по пробегу')
    parser.add_argument('action', nargs='?', choices=['train', 'info'], default='train',
                        help='Действие: train - обучение, info - информация о модели')
    parser.add_argument('--data', '-d', help='CSV с данными (по умолчанию: data/data.csv)')
    parser.add_argument('--output', '-o', help='Файл коэффициентов (по умолчанию: models/thetas)')
    parser.add_argument('--config', '-c', help='JSON файл конфигурации')
    parser.add_argument('--learning-rate', '--lr', type=float, dest='learning_rate',
                        help='Learning rate (по умолчанию: 0.001)')
    parser.add_argument('--epochs', type=int, help='Максимум эпох (по умолчанию: 1000)')
    parser.add_argument('--tolerance', type=float, help='Порог сходимости (по умолчанию: 1e-7)')
    parser.add_argument('--loss-metric', choices=['mae', 'mse'], dest='loss_metric',
                        help='Отслеживаемая метрика loss (по умолчанию: mae)')
    parser.add_argument('--plots', action='store_true', help='Сохранить графики')
    parser.add_argument('--track', action='store_true', help='Записать запуск в MLflow')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        dest='log_level', help='Уровень логирования')

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError, TypeError) as e:
        print(f"❌ Ошибка конфигурации: {e}", file=sys.stderr)
        return 1

    if args.action == 'info':
        return 0 if show_info(config, args.output) else 1

    print("🚀 Запуск обучения модели")
    print("=" * 50)
    if train(config, args.output):
        print("\n✅ Обучение завершено успешно!")
        return 0

    print("\n❌ Обучение завершено с ошибками")
    return 1

if __name__ == "__main__":
    sys.exit(main())
