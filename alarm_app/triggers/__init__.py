"""Parameterized trigger detectors built on the primitive indicators"""

from .base import Detector, TriggerCheck, backward_scan
from .bollinger import BollingerTouchDetector, bollinger_detectors
from .daily_change import DailyChangeDetector, daily_change_detectors
from .ma_cross import (
    MACrossDetector,
    MADirection,
    PriceCrossDetector,
    ma_cross_detectors,
    price_cross_detectors,
)
from .n_week import NWeekDetector, n_week_detectors
from .rsi import RSIDetector, rsi_detectors

__all__ = [
    "BollingerTouchDetector",
    "DailyChangeDetector",
    "Detector",
    "MACrossDetector",
    "MADirection",
    "NWeekDetector",
    "PriceCrossDetector",
    "RSIDetector",
    "TriggerCheck",
    "backward_scan",
    "bollinger_detectors",
    "daily_change_detectors",
    "ma_cross_detectors",
    "n_week_detectors",
    "price_cross_detectors",
    "rsi_detectors",
]
