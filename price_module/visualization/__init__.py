"""
📈 Visualization модуль - графики данных, регрессии и обучения
"""

from .plotter import RegressionPlotter

__all__ = [
    'RegressionPlotter'
]
