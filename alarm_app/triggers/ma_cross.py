"""
Moving-average crossover detectors.

MA pair detectors compare a short SMA against a long SMA: ``above`` and
``below`` describe the relationship on a day, ``cross-up`` and
``cross-down`` require the relationship to flip from the previous day.
The price-cross detector compares the close itself against one SMA.
"""

from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Any

from ..catalogue.models import TriggerKind
from ..catalogue.naming import ma_cross_name, price_cross_name
from ..config.defaults import MACrossParams, PriceCrossParams
from ..data.models import PriceSeries
from ..indicators.moving_average import sma_values
from .base import Detector, TriggerCheck


class MADirection(str, Enum):
    """Relationship between the short and long average."""
    ABOVE = "above"
    BELOW = "below"
    CROSS_UP = "cross-up"
    CROSS_DOWN = "cross-down"

    @property
    def is_cross(self) -> bool:
        return self in (MADirection.CROSS_UP, MADirection.CROSS_DOWN)


@dataclass(frozen=True)
class MACrossDetector(Detector):
    """Short SMA above, below or crossing the long SMA."""

    short_period: int
    long_period: int
    direction: MADirection

    kind = TriggerKind.MA_CROSS

    def __post_init__(self):
        object.__setattr__(self, "direction", MADirection(self.direction))
        if not 0 < self.short_period < self.long_period:
            raise ValueError(
                f"Periods must satisfy 0 < short < long, got {self.short_period}/{self.long_period}"
            )

    @property
    def alarm_name(self) -> str:
        return ma_cross_name(self.short_period, self.direction.value, self.long_period)

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "ma1_period": self.short_period,
            "ma2_period": self.long_period,
            "direction": self.direction.value,
        }

    @property
    def min_index(self) -> int:
        # Crosses also need both averages defined at i - 1
        if self.direction.is_cross:
            return self.long_period
        return self.long_period - 1

    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        short_ma = sma_values(series, self.short_period)[index]
        long_ma = sma_values(series, self.long_period)[index]
        details: dict[str, Any] = {"short_ma": short_ma, "long_ma": long_ma}

        if self.direction == MADirection.ABOVE:
            triggered = short_ma > long_ma
        elif self.direction == MADirection.BELOW:
            triggered = short_ma < long_ma
        else:
            prev_short = sma_values(series, self.short_period)[index - 1]
            prev_long = sma_values(series, self.long_period)[index - 1]
            details.update(prev_short_ma=prev_short, prev_long_ma=prev_long)
            if self.direction == MADirection.CROSS_UP:
                triggered = prev_short <= prev_long and short_ma > long_ma
            else:
                triggered = prev_short >= prev_long and short_ma < long_ma

        return TriggerCheck(
            is_triggered=triggered,
            value=short_ma,
            threshold=long_ma,
            details=details,
        )


@dataclass(frozen=True)
class PriceCrossDetector(Detector):
    """Close crossing up through (or down through) one SMA."""

    period: int
    direction: MADirection

    kind = TriggerKind.PRICE_CROSS_MA

    def __post_init__(self):
        object.__setattr__(self, "direction", MADirection(self.direction))
        if not self.direction.is_cross:
            raise ValueError(f"Price cross direction must be a cross, got {self.direction.value}")
        if self.period <= 0:
            raise ValueError(f"period must be positive, got {self.period}")

    @property
    def alarm_name(self) -> str:
        return price_cross_name(self.direction.value, self.period)

    @property
    def parameters(self) -> dict[str, Any]:
        return {"ma_period": self.period, "direction": self.direction.value}

    @property
    def min_index(self) -> int:
        return self.period

    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        averages = sma_values(series, self.period)
        close = series.closes[index]
        prev_close = series.closes[index - 1]
        current_ma = averages[index]
        prev_ma = averages[index - 1]

        if self.direction == MADirection.CROSS_UP:
            triggered = prev_close <= prev_ma and close > current_ma
        else:
            triggered = prev_close >= prev_ma and close < current_ma

        return TriggerCheck(
            is_triggered=triggered,
            value=close,
            threshold=current_ma,
            details={"prev_close": prev_close, "prev_ma": prev_ma},
        )


def ma_cross_detectors(params: MACrossParams) -> list[MACrossDetector]:
    """Every short < long pair of the grid in every direction."""
    return [
        MACrossDetector(short_period=short, long_period=long, direction=MADirection(direction))
        for short, long in combinations(sorted(params.periods), 2)
        for direction in params.directions
    ]


def price_cross_detectors(params: PriceCrossParams) -> list[PriceCrossDetector]:
    """Close-crosses-MA detectors, empty unless enabled."""
    if not params.enabled:
        return []
    return [
        PriceCrossDetector(period=period, direction=direction)
        for period in params.periods
        for direction in (MADirection.CROSS_UP, MADirection.CROSS_DOWN)
    ]
