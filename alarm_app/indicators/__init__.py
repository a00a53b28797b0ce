"""Primitive technical indicators over a PriceSeries"""

from .bollinger import BollingerBands, bollinger_bands, bollinger_values
from .change import daily_change_percent
from .moving_average import sma, sma_values
from .rsi import RSIState, rsi, rsi_values

__all__ = [
    "BollingerBands",
    "RSIState",
    "bollinger_bands",
    "bollinger_values",
    "daily_change_percent",
    "rsi",
    "rsi_values",
    "sma",
    "sma_values",
]
