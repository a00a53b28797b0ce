"""Tests for N-week low and high detectors."""

import pytest

from alarm_app.catalogue.models import TriggerKind
from alarm_app.config.defaults import NWeekParams
from alarm_app.triggers.n_week import HIGH, LOW, NWeekDetector, n_week_detectors


class TestNWeekDetector:
    """Test NWeekDetector."""

    def test_alarm_names(self):
        """Should follow the public naming contract."""
        assert NWeekDetector(side=LOW, weeks=52, fluctuation=10).alarm_name == "52WeekLow10Fluctuation"
        assert NWeekDetector(side=HIGH, weeks=4, fluctuation=0).alarm_name == "4WeekHigh0Fluctuation"

    def test_kind_and_parameters(self):
        """Should report its family and parameters."""
        detector = NWeekDetector(side=LOW, weeks=8, fluctuation=20)
        assert detector.kind == TriggerKind.N_WEEK_LOW
        assert detector.parameters == {"weeks": 8, "fluctuation": 20}
        assert detector.days == 40
        assert detector.min_index == 40

    def test_week_length_is_fixed(self):
        """A week is always 5 samples; neither detector nor grid can change it."""
        with pytest.raises(TypeError):
            NWeekDetector(side=LOW, weeks=4, fluctuation=0, days_per_week=7)
        assert "days_per_week" not in NWeekParams.__dataclass_fields__
        assert all(d.days == d.weeks * 5 for d in n_week_detectors(HIGH, NWeekParams()))

    def test_invalid_side(self):
        """Should reject unknown sides."""
        with pytest.raises(ValueError):
            NWeekDetector(side="middle", weeks=4, fluctuation=0)

    def test_insufficient_with_exactly_days_points(self, make_series):
        """20 points cannot evaluate a 4-week window."""
        detector = NWeekDetector(side=LOW, weeks=4, fluctuation=0)
        trigger = detector.evaluate(make_series([100.0 - i for i in range(20)]))
        assert trigger.insufficient_data
        assert trigger.previous_triggered_date is None

    def test_first_evaluable_index(self, make_series):
        """21 points make index 20 the first evaluable index."""
        series = make_series([100.0 - i for i in range(21)])
        detector = NWeekDetector(side=LOW, weeks=4, fluctuation=0)
        assert detector.check(series, 19).insufficient
        assert detector.is_triggered(series, 20)
        assert detector.evaluate(series).previous_triggered_date == series[20].date

    @pytest.mark.parametrize("k", range(20, 30))
    def test_backward_scan_finds_low_at_k(self, make_series, k):
        """A single new low at k is the most recent trigger."""
        closes = [100.0] * 30
        closes[k] = 50.0
        series = make_series(closes)
        detector = NWeekDetector(side=LOW, weeks=4, fluctuation=0)
        assert detector.most_recent_trigger_date(series) == series[k].date

    def test_fluctuation_widens_zone(self, make_series):
        """A close near the low only triggers with enough tolerance."""
        closes = [80.0] + [100.0] * 19 + [85.0]
        series = make_series(closes)

        for fluctuation in (0, 10, 20):
            detector = NWeekDetector(side=LOW, weeks=4, fluctuation=fluctuation)
            assert not detector.is_triggered(series, 20)

        detector = NWeekDetector(side=LOW, weeks=4, fluctuation=30)
        check = detector.check(series, 20)
        assert check.is_triggered
        assert check.threshold == pytest.approx(86.0)
        assert check.details["window_low"] == 80.0
        assert check.details["window_high"] == 100.0
        assert check.details["range"] == 20.0

    def test_high_on_rising_series(self, rising_series):
        """Rising closes set a new high every day."""
        detector = NWeekDetector(side=HIGH, weeks=4, fluctuation=0)
        assert detector.most_recent_trigger_date(rising_series) == rising_series.last_date

    def test_low_never_on_rising_series(self, rising_series):
        """Rising closes never touch the low with zero tolerance."""
        detector = NWeekDetector(side=LOW, weeks=4, fluctuation=0)
        trigger = detector.evaluate(rising_series)
        assert trigger.previous_triggered_date is None
        assert not trigger.insufficient_data


class TestNWeekDetectors:
    """Test grid expansion."""

    def test_default_grid(self):
        """6 weeks x 3 fluctuations per side."""
        detectors = n_week_detectors(LOW, NWeekParams())
        assert len(detectors) == 18
        assert len({d.alarm_name for d in detectors}) == 18
        assert all(d.side == LOW for d in detectors)
