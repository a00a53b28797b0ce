"""Pytest configuration and shared fixtures."""

import math
import pytest
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Sequence

from alarm_app.data.models import PricePoint, PriceSeries
from alarm_app.persistence.catalogue_store import CatalogueStore

START_DATE = date(2024, 1, 1)


def series_from_closes(
    closes: Sequence[float],
    symbol: str = "TEST",
    start: date = START_DATE
) -> PriceSeries:
    """One point per consecutive day, open/high/low equal to the close."""
    return PriceSeries(
        symbol=symbol,
        points=tuple(
            PricePoint(
                date=start + timedelta(days=i),
                open=close,
                high=close,
                low=close,
                close=close,
                volume=1000,
            )
            for i, close in enumerate(closes)
        ),
    )


def wave_closes(count: int) -> List[float]:
    """Deterministic oscillating closes with a slow drift."""
    return [round(100 + 10 * math.sin(i / 7) + i * 0.05, 4) for i in range(count)]


def rows_from_closes(closes: Sequence[float], start: date = START_DATE) -> List[Dict[str, Any]]:
    """Raw price rows as they arrive from upstream."""
    return [
        {
            "date": (start + timedelta(days=i)).isoformat(),
            "open": close,
            "high": close + 1,
            "low": close - 1,
            "close": close,
            "volume": 1000,
        }
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def make_series() -> Callable[..., PriceSeries]:
    """Factory building a PriceSeries from a list of closes."""
    return series_from_closes


@pytest.fixture
def rising_series() -> PriceSeries:
    """30 strictly rising closes, 100 to 129."""
    return series_from_closes([100.0 + i for i in range(30)])


@pytest.fixture
def falling_series() -> PriceSeries:
    """30 strictly falling closes, 130 to 101."""
    return series_from_closes([130.0 - i for i in range(30)])


@pytest.fixture
def wave_series() -> PriceSeries:
    """300 points of oscillating prices, long enough for every default alarm."""
    return series_from_closes(wave_closes(300), symbol="WAVE")


@pytest.fixture
def sample_price_row() -> Dict[str, Any]:
    """Sample raw price row for testing."""
    return {
        "date": "2024-03-15",
        "open": "101.5",
        "high": "103.0",
        "low": "100.25",
        "close": "102.75",
        "volume": "125000",
    }


@pytest.fixture
def store(tmp_path) -> CatalogueStore:
    """Catalogue store backed by a temporary database."""
    return CatalogueStore(str(tmp_path / "catalogues.db"))


@pytest.fixture
def make_rows() -> Callable[..., List[Dict[str, Any]]]:
    """Factory building raw price rows from a list of closes."""
    return rows_from_closes


@pytest.fixture
def make_wave() -> Callable[[int], List[float]]:
    """Factory for deterministic oscillating closes."""
    return wave_closes
