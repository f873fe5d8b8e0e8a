"""
📊 Data Collector модуль - загрузка и хранение образцов
"""

from .dataset import DataSet, Sample
from .data_manager import DataManager

__all__ = [
    'DataSet',
    'Sample',
    'DataManager'
]
