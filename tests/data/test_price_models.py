"""Tests for price data models and validators."""

import pytest
from datetime import date

from alarm_app.data.models import PricePoint, PriceSeries
from alarm_app.data.validators import ValidationError, validate_price_point
from alarm_app.errors import TemporalDataError


def _point(day: int, close: float = 10.0) -> PricePoint:
    return PricePoint(date=date(2024, 1, day), open=close, high=close, low=close, close=close, volume=100)


class TestPriceSeries:
    """Test PriceSeries."""

    def test_requires_increasing_dates(self):
        """Out-of-order points are rejected."""
        with pytest.raises(TemporalDataError) as exc_info:
            PriceSeries(symbol="ABC", points=(_point(2), _point(1)))
        assert exc_info.value.date == date(2024, 1, 1)
        assert exc_info.value.previous_date == date(2024, 1, 2)

    def test_rejects_duplicate_dates(self):
        """Two points on one date are rejected."""
        with pytest.raises(TemporalDataError):
            PriceSeries(symbol="ABC", points=(_point(1), _point(1)))

    def test_from_points_sorts(self):
        """from_points accepts any order."""
        series = PriceSeries.from_points("ABC", [_point(3, 13.0), _point(1, 11.0), _point(2, 12.0)])
        assert series.closes == (11.0, 12.0, 13.0)
        assert series.last_date == date(2024, 1, 3)

    def test_list_points_become_tuple(self):
        """Points are stored immutably."""
        series = PriceSeries(symbol="ABC", points=[_point(1)])
        assert isinstance(series.points, tuple)

    def test_sequence_access(self):
        """Indexing and iteration follow date order."""
        series = PriceSeries.from_points("ABC", [_point(1), _point(2)])
        assert len(series) == 2
        assert series[1].date == date(2024, 1, 2)
        assert [p.date.day for p in series] == [1, 2]
        assert series.has_index(1)
        assert not series.has_index(2)
        assert not series.has_index(-1)

    def test_empty_series(self):
        """An empty series has no last date."""
        assert PriceSeries(symbol="ABC").last_date is None

    def test_derived_memoized(self):
        """Factories run once per key."""
        series = PriceSeries.from_points("ABC", [_point(1)])
        calls = []

        def factory():
            calls.append(1)
            return "value"

        assert series.derived("key", factory) == "value"
        assert series.derived("key", factory) == "value"
        assert len(calls) == 1

    def test_equality_ignores_cache(self):
        """Memoized values do not affect equality."""
        first = PriceSeries.from_points("ABC", [_point(1)])
        second = PriceSeries.from_points("ABC", [_point(1)])
        first.derived("key", lambda: 1)
        assert first == second


class TestValidatePricePoint:
    """Test validate_price_point."""

    def test_valid_point(self):
        """A consistent bar passes."""
        validate_price_point(PricePoint(date(2024, 1, 1), 10.0, 11.0, 9.0, 10.5, 100))

    def test_low_above_open(self):
        """Low must not exceed open or close."""
        with pytest.raises(ValidationError):
            validate_price_point(PricePoint(date(2024, 1, 1), 10.0, 11.0, 10.2, 10.5, 100))

    def test_negative_volume(self):
        """Volume must be non-negative."""
        with pytest.raises(ValidationError):
            validate_price_point(PricePoint(date(2024, 1, 1), 10.0, 11.0, 9.0, 10.5, -1))
