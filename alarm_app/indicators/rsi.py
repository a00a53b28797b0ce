"""Wilder's Relative Strength Index"""

from dataclasses import dataclass
from typing import Optional

from ..data.models import PriceSeries
from .moving_average import _check_period


@dataclass
class RSIState:
    """
    Running Wilder averages threaded through a single forward pass.

    Unlike the windowed indicators, each RSI value depends on the previous
    smoothed averages, so the state has to be advanced delta by delta from
    the start of the series.
    """

    period: int
    avg_gain: float = 0.0
    avg_loss: float = 0.0
    deltas_seen: int = 0
    _seed_gain: float = 0.0
    _seed_loss: float = 0.0

    @property
    def ready(self) -> bool:
        """True once the first ``period`` deltas have seeded the averages."""
        return self.deltas_seen >= self.period

    def update(self, delta: float) -> Optional[float]:
        """
        Advance the state by one close-to-close change

        Args:
            delta: close[i] - close[i-1]

        Returns:
            RSI after this delta, or None while still seeding
        """
        gain = delta if delta > 0 else 0.0
        loss = -delta if delta < 0 else 0.0
        self.deltas_seen += 1

        if self.deltas_seen < self.period:
            self._seed_gain += gain
            self._seed_loss += loss
            return None

        if self.deltas_seen == self.period:
            self.avg_gain = (self._seed_gain + gain) / self.period
            self.avg_loss = (self._seed_loss + loss) / self.period
        else:
            self.avg_gain = (self.avg_gain * (self.period - 1) + gain) / self.period
            self.avg_loss = (self.avg_loss * (self.period - 1) + loss) / self.period

        return self.value

    @property
    def value(self) -> Optional[float]:
        """Current RSI, 100 when there are no losses."""
        if not self.ready:
            return None
        if self.avg_loss == 0:
            return 100.0
        rs = self.avg_gain / self.avg_loss
        return 100.0 - (100.0 / (1.0 + rs))


def rsi_values(series: PriceSeries, period: int = 14) -> tuple[Optional[float], ...]:
    """
    Calculate RSI at every index in one left-to-right pass

    Args:
        series: Price series
        period: RSI period (default 14)

    Returns:
        One value per index, None below index ``period``
    """
    _check_period(period, "rsi")

    def compute() -> tuple[Optional[float], ...]:
        closes = series.closes
        if not closes:
            return ()

        state = RSIState(period=period)
        values: list[Optional[float]] = [None]
        for previous, current in zip(closes, closes[1:]):
            values.append(state.update(current - previous))
        return tuple(values)

    return series.derived(("rsi", period), compute)


def rsi(series: PriceSeries, index: int, period: int = 14) -> Optional[float]:
    """
    RSI at ``index``

    Returns:
        RSI value or None with fewer than ``period + 1`` points up to index
    """
    if not series.has_index(index):
        return None
    return rsi_values(series, period)[index]
