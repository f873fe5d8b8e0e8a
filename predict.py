#!/usr/bin/env python3
"""
🔮 Простой интерфейс для предсказаний

Загрузка сохранённых коэффициентов и оценка цены для введённого пробега.
"""

import argparse
import sys
from typing import List, Optional

from price_module.core.model_manager import ModelManager
from price_module.core.predictor import PricePredictor
from price_module.utils.config import Config
from price_module.utils.exceptions import PriceModelError

def read_mileage(prompt: str = "Enter the mileage of the car: ") -> float:
    """Запрос пробега у пользователя"""
    text = input(prompt)
    try:
        return float(text.strip())
    except ValueError:
        raise ValueError(f"Invalid mileage. Please enter a number: {text.strip()!r}")

def get_prediction(mileage: Optional[float], model_path: Optional[str] = None,
                   config: Optional[Config] = None) -> bool:
    """
    Предсказание цены

    Args:
        mileage: Пробег (None - спросить у пользователя)
        model_path: Файл коэффициентов
        config: Конфигурация
    """
    config = config or Config(log_level='WARNING')

    try:
        model = ModelManager(config).load_model(model_path)
        print(f"Model loaded: θ0={model.theta0:.6f}, θ1={model.theta1:.6f}\n")

        if mileage is None:
            mileage = read_mileage()

        prediction = PricePredictor(model).estimate_price(mileage)
    except (PriceModelError, ValueError, EOFError) as e:
        print(f"❌ Ошибка: {e}", file=sys.stderr)
        return False

    if prediction.out_of_range:
        print(f"Estimated price: 0 (model predicts negative value: {prediction.raw_price:.2f})")
        print("Note: This car has very high mileage beyond training data range.")
    else:
        print(f"Estimated price for {prediction.mileage:.0f} km: {prediction.price:.2f}")
    return True

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='🔮 Оценка цены автомобиля по пробегу')
    parser.add_argument('mileage', nargs='?', type=float,
                        help='Пробег в км (если не указан - будет запрошен)')
    parser.add_argument('--model', '-m', help='Файл коэффициентов (по умолчанию: models/thetas)')
    parser.add_argument('--config', '-c', help='JSON файл конфигурации')

    args = parser.parse_args(argv)

    try:
        config = Config.load(args.config) if args.config else Config(log_level='WARNING')
    except (OSError, ValueError, TypeError) as e:
        print(f"❌ Ошибка конфигурации: {e}", file=sys.stderr)
        return 1

    return 0 if get_prediction(args.mileage, args.model, config) else 1

if __name__ == "__main__":
    sys.exit(main())
