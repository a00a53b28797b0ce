"""Tests for carrying stored dates into a fresh catalogue."""

from datetime import date

from alarm_app.catalogue.merge import merge_catalogues
from alarm_app.catalogue.models import AlarmCatalogue, Trigger, TriggerKind

OLD = date(2024, 1, 2)
NEW = date(2024, 3, 1)


def _catalogue(entries, as_of=NEW):
    return AlarmCatalogue.from_triggers(
        "ABC",
        [
            Trigger(
                alarm_name=name,
                kind=TriggerKind.RSI_OVERSOLD,
                previous_triggered_date=triggered,
                insufficient_data=insufficient,
            )
            for name, triggered, insufficient in entries
        ],
        as_of=as_of,
    )


class TestMergeCatalogues:
    """Test merge_catalogues."""

    def test_no_previous(self):
        """Without a stored catalogue the fresh one is used as is."""
        fresh = _catalogue([("A", None, False)])
        assert merge_catalogues(None, fresh) is fresh

    def test_keeps_previous_date_when_fresh_has_none(self):
        """A date lost by the rebuild is carried over."""
        previous = _catalogue([("A", OLD, False)], as_of=OLD)
        fresh = _catalogue([("A", None, False)])
        assert merge_catalogues(previous, fresh)["A"].previous_triggered_date == OLD

    def test_fresh_date_wins(self):
        """A previous date never replaces a fresh one."""
        previous = _catalogue([("A", OLD, False)], as_of=OLD)
        fresh = _catalogue([("A", NEW, False)])
        assert merge_catalogues(previous, fresh)["A"].previous_triggered_date == NEW

    def test_insufficient_fresh_entry_takes_previous_date(self):
        """A carried date clears the insufficient flag."""
        previous = _catalogue([("A", OLD, False)], as_of=OLD)
        fresh = _catalogue([("A", None, True)])
        merged = merge_catalogues(previous, fresh)["A"]
        assert merged.previous_triggered_date == OLD
        assert not merged.insufficient_data

    def test_names_come_from_fresh(self):
        """Alarms dropped from the grid are dropped from the result."""
        previous = _catalogue([("A", OLD, False), ("GONE", OLD, False)], as_of=OLD)
        fresh = _catalogue([("A", None, False), ("NEW", None, True)])
        merged = merge_catalogues(previous, fresh)

        assert merged.alarm_names == ["A", "NEW"]
        assert merged["NEW"].insufficient_data
        assert merged.as_of == NEW
