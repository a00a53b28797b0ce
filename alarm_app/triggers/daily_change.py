"""Daily loss and gain detectors."""

from dataclasses import dataclass
from typing import Any

from ..catalogue.models import TriggerKind
from ..catalogue.naming import daily_gain_name, daily_loss_name
from ..config.defaults import DailyChangeParams
from ..data.models import PriceSeries
from ..indicators.change import daily_change_percent
from .base import Detector, TriggerCheck

LOSS = "loss"
GAIN = "gain"


@dataclass(frozen=True)
class DailyChangeDetector(Detector):
    """Close-to-close move of at least threshold percent."""

    side: str
    threshold: float

    def __post_init__(self):
        if self.side not in (LOSS, GAIN):
            raise ValueError(f"side must be '{LOSS}' or '{GAIN}', got {self.side!r}")

    @property
    def kind(self) -> TriggerKind:
        return TriggerKind.DAILY_LOSS if self.side == LOSS else TriggerKind.DAILY_GAIN

    @property
    def alarm_name(self) -> str:
        if self.side == LOSS:
            return daily_loss_name(self.threshold)
        return daily_gain_name(self.threshold)

    @property
    def parameters(self) -> dict[str, Any]:
        return {"threshold": self.threshold}

    @property
    def min_index(self) -> int:
        return 1

    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        change = daily_change_percent(series, index)
        if self.side == LOSS:
            triggered = change <= -self.threshold
        else:
            triggered = change >= self.threshold

        return TriggerCheck(
            is_triggered=triggered,
            value=change,
            threshold=-self.threshold if self.side == LOSS else self.threshold,
        )


def daily_change_detectors(params: DailyChangeParams) -> list[DailyChangeDetector]:
    """Loss and gain detectors for every threshold."""
    return [
        DailyChangeDetector(side=side, threshold=threshold)
        for side in (LOSS, GAIN)
        for threshold in params.thresholds
    ]
