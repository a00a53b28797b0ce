"""Tests for the simple moving average."""

import pytest

from alarm_app.errors import IndicatorCalculationError
from alarm_app.indicators.moving_average import sma, sma_values


class TestSMA:
    """Test sma at a single index."""

    def test_basic_average(self, make_series):
        """Should average the period closes ending at index."""
        series = make_series([1.0, 2.0, 3.0, 4.0, 5.0])
        assert sma(series, 4, 3) == 4.0
        assert sma(series, 2, 3) == 2.0

    def test_undefined_with_short_history(self, make_series):
        """Should return None when fewer than period closes exist."""
        series = make_series([1.0, 2.0, 3.0])
        assert sma(series, 1, 3) is None
        assert sma(series, 0, 1) == 1.0

    def test_out_of_range_index(self, make_series):
        """Should return None for indexes outside the series."""
        series = make_series([1.0, 2.0, 3.0])
        assert sma(series, 3, 2) is None
        assert sma(series, -1, 2) is None

    def test_invalid_period(self, make_series):
        """Should reject non-positive periods."""
        series = make_series([1.0, 2.0, 3.0])
        with pytest.raises(IndicatorCalculationError) as exc_info:
            sma(series, 2, 0)
        assert exc_info.value.indicator_name == "sma"


class TestSMAValues:
    """Test the full SMA series."""

    def test_length_matches_series(self, make_series):
        """Should produce one value per index."""
        series = make_series([1.0, 2.0, 3.0, 4.0])
        values = sma_values(series, 2)
        assert values == (None, 1.5, 2.5, 3.5)

    def test_period_longer_than_series(self, make_series):
        """Should be all None when the period exceeds the series."""
        series = make_series([1.0, 2.0])
        assert sma_values(series, 5) == (None, None)

    def test_equal_windows_equal_averages(self, make_series):
        """Identical windows at different positions give identical values."""
        series = make_series([0.1, 0.2, 0.3, 0.1, 0.2, 0.3])
        values = sma_values(series, 3)
        assert values[2] == values[5]

    def test_values_memoized_per_series(self, make_series):
        """Should compute each period once per series."""
        series = make_series([1.0, 2.0, 3.0, 4.0])
        assert sma_values(series, 2) is sma_values(series, 2)
        assert sma_values(series, 2) is not sma_values(series, 3)
