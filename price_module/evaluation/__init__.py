"""
📏 Evaluation Module - оценка качества модели цены
"""

from .metrics import MetricsEvaluator, RegressionMetrics

__all__ = [
    'MetricsEvaluator',
    'RegressionMetrics'
]
