"""Daily close-to-close percentage change"""

from typing import Optional

from ..data.models import PriceSeries


def daily_change_percent(series: PriceSeries, index: int) -> Optional[float]:
    """
    Percentage change from the previous close

    pct = (close[i] - close[i-1]) / close[i-1] * 100

    Returns:
        Change in percent, None at index 0 or out of range
    """
    if index < 1 or not series.has_index(index):
        return None

    previous_close = series.closes[index - 1]
    current_close = series.closes[index]
    return (current_close - previous_close) / previous_close * 100.0
