#!/usr/bin/env python3
"""
📊 DataManager - загрузка данных

Чтение CSV (заголовок + строки пробег,цена) и сборка неизменяемого DataSet.
Битая или пустая строка обрывает загрузку сразу, в ошибке указан номер строки данных
(1 - первая строка после заголовка).
"""

import re
from typing import Dict, List, Optional, Union
from pathlib import Path

import numpy as np
import pandas as pd

from ..utils.config import Config
from ..utils.logger import Logger
from ..utils.exceptions import InputError
from .dataset import DataSet

# pandas сообщает физическую строку файла: "Expected 2 fields in line 3, saw 3"
PARSER_LINE = re.compile(r"line (\d+)")

class DataManager:
    """
    Менеджер данных

    Отвечает за:
    - Чтение датасета из CSV
    - Выбор колонок пробега и цены
    - Построчную проверку числовых значений
    """

    def __init__(self, config: Config):
        """
        Инициализация менеджера данных

        Args:
            config: Конфигурация системы
        """
        self.config = config
        self.logger = Logger('DataManager', level=config.log_level)

    def load_dataset(self, path: Optional[Union[str, Path]] = None) -> DataSet:
        """
        Загрузка датасета из CSV

        Args:
            path: Путь к CSV (по умолчанию config.data.data_path)

        Returns:
            DataSet с образцами в порядке файла

        Raises:
            InputError: файл не найден/не читается, битая строка, пустой датасет
        """
        path = Path(path or self.config.data.data_path)

        try:
            raw = self._read_csv(path)
            frame = self._parse_rows(raw)
            dataset = DataSet(frame, source=str(path))
        except InputError as e:
            self.logger.log_error(f"загрузка {path}", e)
            raise

        self.logger.log_data_loading(str(path), len(dataset))
        return dataset

    def _read_csv(self, path: Path) -> pd.DataFrame:
        """Чтение без интерпретации: заголовок - первая строка таблицы, все поля - строки"""
        if not path.is_file():
            raise InputError(f"Файл данных не найден: {path}")

        try:
            return pd.read_csv(
                path,
                sep=self.config.data.delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                skip_blank_lines=False,
            )
        except pd.errors.EmptyDataError as e:
            raise InputError(f"Файл данных пуст: {path}") from e
        except pd.errors.ParserError as e:
            raise InputError(f"Неверное количество полей в {path}: {e}",
                             row=self._parser_error_row(e)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Не удалось прочитать {path}: {e}") from e

    @staticmethod
    def _parser_error_row(error: pd.errors.ParserError) -> Optional[int]:
        """Номер строки данных из сообщения парсера (строка файла 1 - заголовок)"""
        match = PARSER_LINE.search(str(error))
        return int(match.group(1)) - 1 if match else None

    def _select_columns(self, header: List[str]) -> Dict[str, int]:
        data_config = self.config.data

        if data_config.mileage_column in header and data_config.price_column in header:
            return {
                'mileage': header.index(data_config.mileage_column),
                'price': header.index(data_config.price_column),
            }

        if len(header) != 2:
            raise InputError(f"Ожидается 2 колонки (пробег, цена), найдено {len(header)}: {header}")

        self.logger.debug(f"Колонки {data_config.mileage_column}/{data_config.price_column} "
                          f"не найдены, используем {header}")
        return {'mileage': 0, 'price': 1}

    def _parse_rows(self, raw: pd.DataFrame) -> pd.DataFrame:
        header = [str(value).strip() for value in raw.iloc[0].fillna('')]
        body = raw.iloc[1:].reset_index(drop=True)
        mapping = self._select_columns(header)
        parsed = {}

        for name, position in mapping.items():
            text = body.iloc[:, position]
            cleaned = text.astype(str).str.strip()
            missing = text.isna() | (cleaned == '')
            values = pd.to_numeric(cleaned.where(~missing), errors='coerce').astype(float)
            bad = np.flatnonzero((missing | ~np.isfinite(values)).to_numpy())

            if bad.size:
                index = int(bad[0])
                if missing.iloc[index]:
                    reason = 'отсутствует значение'
                else:
                    reason = f"не конечное число: {text.iloc[index]!r}"
                raise InputError(f"{name}: {reason}", row=index + 1)

            parsed[name] = values

        return pd.DataFrame(parsed, columns=['mileage', 'price'])

    def describe(self, dataset: DataSet) -> Dict[str, float]:
        """Краткая статистика датасета"""
        return {
            'rows': len(dataset),
            'mileage_min': float(np.min(dataset.mileage)),
            'mileage_max': float(np.max(dataset.mileage)),
            'price_min': float(np.min(dataset.price)),
            'price_max': float(np.max(dataset.price)),
            'price_mean': float(np.mean(dataset.price)),
        }
