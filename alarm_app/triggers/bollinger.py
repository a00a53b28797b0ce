"""Bollinger band touch detectors."""

from dataclasses import dataclass
from typing import Any

from ..catalogue.models import TriggerKind
from ..catalogue.naming import bb_lower_name, bb_upper_name
from ..config.defaults import BollingerParams
from ..data.models import PriceSeries
from ..indicators.bollinger import bollinger_values
from .base import Detector, TriggerCheck

LOWER = "lower"
UPPER = "upper"


@dataclass(frozen=True)
class BollingerTouchDetector(Detector):
    """Close touching, crossing or near a band.

    ``distance_percent`` moves the threshold inward by that share of the
    band width; 0 means the close must reach the raw band.
    """

    side: str
    distance_percent: float
    period: int = 20
    std_dev: float = 2.0

    def __post_init__(self):
        if self.side not in (LOWER, UPPER):
            raise ValueError(f"side must be '{LOWER}' or '{UPPER}', got {self.side!r}")

    @property
    def kind(self) -> TriggerKind:
        return TriggerKind.BB_LOWER if self.side == LOWER else TriggerKind.BB_UPPER

    @property
    def alarm_name(self) -> str:
        if self.side == LOWER:
            return bb_lower_name(self.period, self.std_dev, self.distance_percent)
        return bb_upper_name(self.period, self.std_dev, self.distance_percent)

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "std_dev": self.std_dev,
            "distance_percent": self.distance_percent,
        }

    @property
    def min_index(self) -> int:
        return self.period - 1

    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        bands = bollinger_values(series, self.period, self.std_dev)[index]
        close = series.closes[index]
        offset = bands.width * (self.distance_percent / 100)

        if self.side == LOWER:
            threshold = bands.lower + offset
            triggered = close <= threshold
        else:
            threshold = bands.upper - offset
            triggered = close >= threshold

        return TriggerCheck(
            is_triggered=triggered,
            value=close,
            threshold=threshold,
            details={"middle": bands.middle, "upper": bands.upper, "lower": bands.lower},
        )


def bollinger_detectors(params: BollingerParams) -> list[BollingerTouchDetector]:
    """Lower and upper detectors for every distance."""
    return [
        BollingerTouchDetector(
            side=side,
            distance_percent=distance,
            period=params.period,
            std_dev=params.std_dev,
        )
        for side in (LOWER, UPPER)
        for distance in params.distance_percents
    ]
