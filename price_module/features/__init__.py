"""
Features module: стандартизация пробега
"""

from .standardizer import Standardizer, StandardizedDataSet

__all__ = [
    'Standardizer',
    'StandardizedDataSet'
]
