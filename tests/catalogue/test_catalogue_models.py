"""Tests for Trigger and AlarmCatalogue."""

import json
import pytest
from datetime import date

from alarm_app.catalogue.models import AlarmCatalogue, Trigger, TriggerKind
from alarm_app.errors import MalformedDataError


def _trigger(name: str, triggered: date = None, insufficient: bool = False) -> Trigger:
    return Trigger(
        alarm_name=name,
        kind=TriggerKind.DAILY_LOSS,
        parameters={"threshold": 1},
        previous_triggered_date=triggered,
        insufficient_data=insufficient,
    )


class TestTrigger:
    """Test Trigger."""

    def test_insufficient_cannot_have_date(self):
        """insufficient_data implies no triggered date."""
        with pytest.raises(ValueError):
            _trigger("DailyLoss1Percent", date(2024, 1, 2), insufficient=True)

    def test_triggered_on(self):
        """Should compare the most recent date exactly."""
        trigger = _trigger("DailyLoss1Percent", date(2024, 1, 2))
        assert trigger.has_triggered
        assert trigger.triggered_on(date(2024, 1, 2))
        assert not trigger.triggered_on(date(2024, 1, 3))

    def test_dict_round_trip(self):
        """to_dict/from_dict preserve every field."""
        trigger = _trigger("DailyLoss1Percent", date(2024, 1, 2))
        data = trigger.to_dict()

        assert data["previous_triggered_date"] == "2024-01-02"
        assert data["kind"] == "daily-loss"
        assert Trigger.from_dict(data) == trigger

    def test_from_dict_accepts_stored_timestamps(self):
        """Timestamps stored by older writers reduce to their date."""
        trigger = Trigger.from_dict({
            "alarm_name": "DailyLoss1Percent",
            "kind": "daily-loss",
            "previous_triggered_date": "2025-10-27T07:00:00.000Z",
        })
        assert trigger.previous_triggered_date == date(2025, 10, 27)

    def test_from_dict_rejects_unknown_kind(self):
        """Unknown kinds are malformed documents."""
        with pytest.raises(MalformedDataError):
            Trigger.from_dict({"alarm_name": "X", "kind": "moon-phase"})

    def test_from_dict_rejects_missing_name(self):
        """Entries without a name are malformed."""
        with pytest.raises(MalformedDataError):
            Trigger.from_dict({"kind": "daily-loss"})


class TestAlarmCatalogue:
    """Test AlarmCatalogue."""

    def test_sorted_by_name(self):
        """Entries are held in name order regardless of input order."""
        catalogue = AlarmCatalogue.from_triggers("ABC", [_trigger("B"), _trigger("A"), _trigger("C")])
        assert catalogue.alarm_names == ["A", "B", "C"]
        assert [t.alarm_name for t in catalogue] == ["A", "B", "C"]

    def test_duplicate_names_rejected(self):
        """Two triggers cannot share a name."""
        with pytest.raises(ValueError):
            AlarmCatalogue.from_triggers("ABC", [_trigger("A"), _trigger("A")])

    def test_container_protocol(self):
        """Lookup by name."""
        catalogue = AlarmCatalogue.from_triggers("ABC", [_trigger("A")])
        assert "A" in catalogue
        assert "Z" not in catalogue
        assert catalogue["A"].alarm_name == "A"
        assert catalogue.get("Z") is None
        assert len(catalogue) == 1

    def test_triggered_on(self):
        """Should list entries whose most recent date matches."""
        day = date(2024, 1, 2)
        catalogue = AlarmCatalogue.from_triggers(
            "ABC", [_trigger("A", day), _trigger("B", date(2024, 1, 1)), _trigger("C")]
        )
        assert [t.alarm_name for t in catalogue.triggered_on(day)] == ["A"]

    def test_document_round_trip(self):
        """to_document/from_document preserve the catalogue."""
        catalogue = AlarmCatalogue.from_triggers(
            "ABC",
            [_trigger("A", date(2024, 1, 2)), _trigger("B", insufficient=True)],
            as_of=date(2024, 1, 5),
        )
        document = catalogue.to_document()

        assert document["id"] == "ABC"
        assert document["as_of"] == "2024-01-05"
        assert len(document["alarm_list"]) == 2
        assert AlarmCatalogue.from_document(document) == catalogue

    def test_json_is_canonical(self):
        """Insertion order does not affect the serialized bytes."""
        first = AlarmCatalogue.from_triggers("ABC", [_trigger("A"), _trigger("B")])
        second = AlarmCatalogue.from_triggers("ABC", [_trigger("B"), _trigger("A")])
        assert first.to_json() == second.to_json()
        assert AlarmCatalogue.from_json(first.to_json()) == first
        assert json.loads(first.to_json())["symbol"] == "ABC"

    def test_from_json_invalid(self):
        """Invalid JSON is a malformed document."""
        with pytest.raises(MalformedDataError):
            AlarmCatalogue.from_json("{not json")

    def test_from_document_without_symbol(self):
        """A document must name its symbol."""
        with pytest.raises(MalformedDataError):
            AlarmCatalogue.from_document({"alarm_list": []})
