"""Bollinger Bands with population standard deviation"""

import math
from dataclasses import dataclass
from typing import Optional

from ..data.models import PriceSeries
from .moving_average import _check_period, sma_values


@dataclass(frozen=True)
class BollingerBands:
    """Bands at one index"""
    middle: float
    upper: float
    lower: float

    @property
    def width(self) -> float:
        """Distance between the upper and lower band"""
        return self.upper - self.lower


def bollinger_values(
    series: PriceSeries,
    period: int = 20,
    std_dev: float = 2.0
) -> tuple[Optional[BollingerBands], ...]:
    """
    Calculate Bollinger Bands at every index

    middle = SMA(period); upper/lower = middle ± std_dev * σ, where σ is the
    population standard deviation of the same window.

    Returns:
        One BollingerBands per index, None below ``period`` points
    """
    _check_period(period, "bollinger")

    def compute() -> tuple[Optional[BollingerBands], ...]:
        closes = series.closes
        middles = sma_values(series, period)
        bands: list[Optional[BollingerBands]] = []

        for index, middle in enumerate(middles):
            if middle is None:
                bands.append(None)
                continue
            window = closes[index - period + 1:index + 1]
            variance = math.fsum((close - middle) ** 2 for close in window) / period
            deviation = math.sqrt(variance)
            bands.append(BollingerBands(
                middle=middle,
                upper=middle + std_dev * deviation,
                lower=middle - std_dev * deviation,
            ))
        return tuple(bands)

    return series.derived(("bollinger", period, float(std_dev)), compute)


def bollinger_bands(
    series: PriceSeries,
    index: int,
    period: int = 20,
    std_dev: float = 2.0
) -> Optional[BollingerBands]:
    """Bands at ``index``, None if fewer than ``period`` points or out of range"""
    if not series.has_index(index):
        return None
    return bollinger_values(series, period, std_dev)[index]
