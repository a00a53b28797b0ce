"""RSI oversold and overbought detectors."""

from dataclasses import dataclass
from typing import Any

from ..catalogue.models import TriggerKind
from ..catalogue.naming import rsi_overbought_name, rsi_oversold_name
from ..config.defaults import RSIParams
from ..data.models import PriceSeries
from ..indicators.rsi import rsi_values
from .base import Detector, TriggerCheck

OVERSOLD = "oversold"
OVERBOUGHT = "overbought"


@dataclass(frozen=True)
class RSIDetector(Detector):
    """RSI at or beyond a threshold.

    The RSI series is computed once per PriceSeries in a single forward
    pass and shared by every threshold scanning it.
    """

    side: str
    threshold: float
    period: int = 14

    def __post_init__(self):
        if self.side not in (OVERSOLD, OVERBOUGHT):
            raise ValueError(f"side must be '{OVERSOLD}' or '{OVERBOUGHT}', got {self.side!r}")

    @property
    def kind(self) -> TriggerKind:
        return TriggerKind.RSI_OVERSOLD if self.side == OVERSOLD else TriggerKind.RSI_OVERBOUGHT

    @property
    def alarm_name(self) -> str:
        if self.side == OVERSOLD:
            return rsi_oversold_name(self.threshold)
        return rsi_overbought_name(self.threshold)

    @property
    def parameters(self) -> dict[str, Any]:
        return {"threshold": self.threshold, "period": self.period}

    @property
    def min_index(self) -> int:
        return self.period

    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        value = rsi_values(series, self.period)[index]
        if self.side == OVERSOLD:
            triggered = value <= self.threshold
        else:
            triggered = value >= self.threshold

        return TriggerCheck(is_triggered=triggered, value=value, threshold=self.threshold)


def rsi_detectors(params: RSIParams) -> list[RSIDetector]:
    """Oversold and overbought detectors for every threshold."""
    oversold = [
        RSIDetector(side=OVERSOLD, threshold=threshold, period=params.period)
        for threshold in params.oversold_thresholds
    ]
    overbought = [
        RSIDetector(side=OVERBOUGHT, threshold=threshold, period=params.period)
        for threshold in params.overbought_thresholds
    ]
    return oversold + overbought
