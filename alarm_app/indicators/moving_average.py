"""Simple moving average over closing prices"""

import math
from typing import Optional

from ..data.models import PriceSeries
from ..errors import IndicatorCalculationError


def _check_period(period: int, name: str = "sma") -> None:
    if not isinstance(period, int) or period <= 0:
        raise IndicatorCalculationError(
            f"Period must be a positive integer, got {period!r}",
            indicator_name=name,
            calculation_input={"period": period}
        )


def sma_values(series: PriceSeries, period: int) -> tuple[Optional[float], ...]:
    """
    Calculate the SMA at every index of the series

    Each value is an exact window sum (``math.fsum``) rather than a running
    total, so equal windows always produce equal averages.

    Args:
        series: Price series
        period: Number of closes in the window

    Returns:
        One value per index, None where fewer than ``period`` closes exist
    """
    _check_period(period)

    def compute() -> tuple[Optional[float], ...]:
        closes = series.closes
        values: list[Optional[float]] = [None] * min(period - 1, len(closes))
        for end in range(period, len(closes) + 1):
            values.append(math.fsum(closes[end - period:end]) / period)
        return tuple(values)

    return series.derived(("sma", period), compute)


def sma(series: PriceSeries, index: int, period: int) -> Optional[float]:
    """
    Arithmetic mean of the ``period`` closes ending at ``index``

    Returns:
        SMA value or None if index + 1 < period or index is out of range
    """
    if not series.has_index(index):
        return None
    return sma_values(series, period)[index]
