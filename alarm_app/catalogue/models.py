"""
Alarm catalogue data models.

A Trigger is the output unit of one parameterized detector; an
AlarmCatalogue is every Trigger computed for one symbol in one build.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from ..errors import MalformedDataError
from ..utils.time import format_date, parse_date


class TriggerKind(str, Enum):
    """Detector family that produced a trigger."""
    N_WEEK_LOW = "n-week-low"
    N_WEEK_HIGH = "n-week-high"
    MA_CROSS = "ma-cross"
    DAILY_LOSS = "daily-loss"
    DAILY_GAIN = "daily-gain"
    RSI_OVERSOLD = "rsi-oversold"
    RSI_OVERBOUGHT = "rsi-overbought"
    BB_LOWER = "bb-lower"
    BB_UPPER = "bb-upper"
    PRICE_CROSS_MA = "price-cross-ma"


@dataclass(frozen=True)
class Trigger:
    """Most recent date one named condition held over a price series."""

    alarm_name: str
    kind: TriggerKind
    parameters: dict[str, Any] = field(default_factory=dict)
    previous_triggered_date: Optional[date] = None
    insufficient_data: bool = False

    def __post_init__(self):
        """A trigger without enough history cannot have fired."""
        if self.insufficient_data and self.previous_triggered_date is not None:
            raise ValueError(
                f"{self.alarm_name}: insufficient_data trigger cannot have a triggered date"
            )

    @property
    def has_triggered(self) -> bool:
        """True if the condition held at least once."""
        return self.previous_triggered_date is not None

    def triggered_on(self, target_date: date) -> bool:
        """True if the most recent trigger fell on target_date."""
        return self.previous_triggered_date == target_date

    def to_dict(self) -> dict[str, Any]:
        """Serialize for a catalogue document."""
        return {
            "alarm_name": self.alarm_name,
            "kind": self.kind.value,
            "parameters": dict(self.parameters),
            "previous_triggered_date": format_date(self.previous_triggered_date),
            "insufficient_data": self.insufficient_data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trigger":
        """Deserialize from a catalogue document entry."""
        try:
            raw_date = data.get("previous_triggered_date")
            return cls(
                alarm_name=data["alarm_name"],
                kind=TriggerKind(data["kind"]),
                parameters=dict(data.get("parameters") or {}),
                previous_triggered_date=parse_date(raw_date) if raw_date else None,
                insufficient_data=bool(data.get("insufficient_data", False)),
            )
        except (KeyError, ValueError) as e:
            raise MalformedDataError(
                f"Invalid trigger entry: {e}",
                raw_data=str(data),
                expected_format="trigger document"
            ) from e


@dataclass(frozen=True)
class AlarmCatalogue:
    """
    Every alarm computed for one symbol, keyed by alarm name.

    Triggers are held in alarm-name order, so two builds over the same
    series serialize identically no matter how the grids were enumerated.
    """

    symbol: str
    triggers: dict[str, Trigger] = field(default_factory=dict)
    as_of: Optional[date] = None         # last date of the series

    def __post_init__(self):
        """Sort triggers by alarm name."""
        object.__setattr__(
            self, "triggers", {name: self.triggers[name] for name in sorted(self.triggers)}
        )

    @classmethod
    def from_triggers(
        cls,
        symbol: str,
        triggers: Iterable[Trigger],
        as_of: Optional[date] = None
    ) -> "AlarmCatalogue":
        """
        Build a catalogue from triggers.

        Raises:
            ValueError: If two triggers share an alarm name
        """
        by_name: dict[str, Trigger] = {}
        for trigger in triggers:
            if trigger.alarm_name in by_name:
                raise ValueError(f"Duplicate alarm name: {trigger.alarm_name}")
            by_name[trigger.alarm_name] = trigger
        return cls(symbol=symbol, triggers=by_name, as_of=as_of)

    def __len__(self) -> int:
        return len(self.triggers)

    def __contains__(self, alarm_name: object) -> bool:
        return alarm_name in self.triggers

    def __getitem__(self, alarm_name: str) -> Trigger:
        return self.triggers[alarm_name]

    def __iter__(self) -> Iterator[Trigger]:
        return iter(self.triggers.values())

    def get(self, alarm_name: str) -> Optional[Trigger]:
        """Trigger by name, None if the catalogue does not carry it."""
        return self.triggers.get(alarm_name)

    @property
    def alarm_names(self) -> list[str]:
        """All alarm names in order."""
        return list(self.triggers)

    def triggered_on(self, target_date: date) -> list[Trigger]:
        """Triggers whose most recent date is target_date."""
        return [t for t in self.triggers.values() if t.triggered_on(target_date)]

    def by_kind(self, kind: TriggerKind) -> list[Trigger]:
        """Triggers produced by one detector family."""
        return [t for t in self.triggers.values() if t.kind == kind]

    def to_document(self) -> dict[str, Any]:
        """Serialize as a storage document keyed by symbol."""
        return {
            "id": self.symbol,
            "symbol": self.symbol,
            "as_of": format_date(self.as_of),
            "alarm_list": [trigger.to_dict() for trigger in self.triggers.values()],
        }

    def to_json(self) -> str:
        """Canonical JSON form; identical catalogues give identical bytes."""
        return json.dumps(self.to_document(), sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "AlarmCatalogue":
        """Deserialize a storage document."""
        symbol = document.get("symbol") or document.get("id")
        if not symbol:
            raise MalformedDataError(
                "Catalogue document has no symbol",
                raw_data=str(document)[:200],
                expected_format="catalogue document"
            )

        raw_as_of = document.get("as_of")
        triggers = [Trigger.from_dict(entry) for entry in document.get("alarm_list") or []]
        try:
            return cls.from_triggers(symbol, triggers, as_of=parse_date(raw_as_of) if raw_as_of else None)
        except ValueError as e:
            raise MalformedDataError(str(e), raw_data=symbol, expected_format="catalogue document") from e

    @classmethod
    def from_json(cls, payload: str) -> "AlarmCatalogue":
        """Deserialize canonical JSON."""
        try:
            document = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedDataError(
                f"Catalogue JSON is invalid: {e}",
                raw_data=payload[:200],
                expected_format="json"
            ) from e
        return cls.from_document(document)
