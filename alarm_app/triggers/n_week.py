"""
N-week low and high detectors.

A week is always 5 trading days. The window for index i is the days + 1
closes ending at i, so it slides with i rather than being pinned to the
latest data. The fluctuation tolerance widens the trigger zone by a
percentage of the window's close range.
"""

from dataclasses import dataclass
from typing import Any

from ..catalogue.models import TriggerKind
from ..catalogue.naming import n_week_high_name, n_week_low_name
from ..config.defaults import NWeekParams
from ..data.models import PriceSeries
from .base import Detector, TriggerCheck

LOW = "low"
HIGH = "high"

TRADING_DAYS_PER_WEEK = 5


@dataclass(frozen=True)
class NWeekDetector(Detector):
    """Close at or near the N-week low (or high)."""

    side: str
    weeks: int
    fluctuation: float

    def __post_init__(self):
        if self.side not in (LOW, HIGH):
            raise ValueError(f"side must be '{LOW}' or '{HIGH}', got {self.side!r}")
        if self.weeks <= 0:
            raise ValueError(f"weeks must be positive, got {self.weeks}")

    @property
    def kind(self) -> TriggerKind:
        return TriggerKind.N_WEEK_LOW if self.side == LOW else TriggerKind.N_WEEK_HIGH

    @property
    def days(self) -> int:
        return self.weeks * TRADING_DAYS_PER_WEEK

    @property
    def alarm_name(self) -> str:
        if self.side == LOW:
            return n_week_low_name(self.weeks, self.fluctuation)
        return n_week_high_name(self.weeks, self.fluctuation)

    @property
    def parameters(self) -> dict[str, Any]:
        return {"weeks": self.weeks, "fluctuation": self.fluctuation}

    @property
    def min_index(self) -> int:
        return self.days

    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        window = series.closes[index - self.days:index + 1]
        window_low = min(window)
        window_high = max(window)
        price_range = window_high - window_low
        close = series.closes[index]

        if self.side == LOW:
            threshold = window_low + price_range * (self.fluctuation / 100)
            triggered = close <= threshold
        else:
            threshold = window_high - price_range * (self.fluctuation / 100)
            triggered = close >= threshold

        return TriggerCheck(
            is_triggered=triggered,
            value=close,
            threshold=threshold,
            details={
                "window_low": window_low,
                "window_high": window_high,
                "range": price_range,
            },
        )


def n_week_detectors(side: str, params: NWeekParams) -> list[NWeekDetector]:
    """Expand the weeks x fluctuation grid for one side."""
    return [
        NWeekDetector(
            side=side,
            weeks=weeks,
            fluctuation=fluctuation,
        )
        for weeks in params.weeks
        for fluctuation in params.fluctuations
    ]
