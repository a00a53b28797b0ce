"""
Composite same-day matching of alarms for user notifications.

A user watch names one or more alarms per symbol. The watch fires on a
date only when every named alarm's most recent trigger date is that date.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional, Union

from ..catalogue.models import AlarmCatalogue
from ..errors import MalformedDataError
from ..logging.config import get_alert_logger, log_alert_decision
from ..utils.time import parse_date, parse_target_date, utc_today

logger = get_alert_logger(__name__)

CatalogueLookup = Callable[[str], Optional[AlarmCatalogue]]


def matches(
    catalogue: AlarmCatalogue,
    alarm_names: Iterable[str],
    target_date: Optional[date] = None
) -> bool:
    """
    Check same-day co-occurrence of alarms in one symbol's catalogue.

    Args:
        catalogue: Catalogue for the symbol
        alarm_names: Alarms that must all have fired
        target_date: Day to check, defaults to today in UTC

    Returns:
        True iff every alarm is present and last fired on target_date.
        An empty set of names never matches.
    """
    if target_date is None:
        target_date = utc_today()

    names = list(alarm_names)
    if not names:
        return False

    for name in names:
        trigger = catalogue.get(name)
        if trigger is None or not trigger.triggered_on(target_date):
            return False
    return True


def _mismatch_reason(catalogue: AlarmCatalogue, names: Iterable[str], target_date: date) -> Optional[str]:
    for name in sorted(names):
        trigger = catalogue.get(name)
        if trigger is None:
            return f"alarm not in catalogue: {name}"
        if trigger.previous_triggered_date is None:
            return f"alarm never triggered: {name}"
        if trigger.previous_triggered_date != target_date:
            return f"{name} last triggered {trigger.previous_triggered_date.isoformat()}"
    return None


@dataclass(frozen=True)
class WatchItem:
    """One symbol and the alarms that must co-occur on it."""
    symbol: str
    alarm_names: frozenset[str] = frozenset()


@dataclass(frozen=True)
class UserWatch:
    """A user's composite watch conditions."""

    user_id: str
    items: tuple[WatchItem, ...] = ()

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "UserWatch":
        """
        Read a user document.

        Expected shape: ``{"user_id": ..., "alert_list": [{"symbol": ...,
        "alarm_names": [...]}, ...]}``.
        """
        user_id = document.get("user_id") or document.get("id")
        if not user_id:
            raise MalformedDataError(
                "User watch document has no user_id",
                raw_data=str(document)[:200],
                expected_format="user watch document"
            )

        items = []
        for entry in document.get("alert_list") or []:
            symbol = entry.get("symbol")
            names = entry.get("alarm_names") or []
            items.append(WatchItem(
                symbol=str(symbol).upper() if symbol else "",
                alarm_names=frozenset(names),
            ))
        return cls(user_id=str(user_id), items=tuple(items))


@dataclass(frozen=True)
class TriggeredAlert:
    """A watch item that matched."""
    symbol: str
    alarm_names: frozenset[str]
    triggered_date: date


@dataclass(frozen=True)
class AlertCheckResult:
    """Outcome of checking all of one user's watch items."""

    user_id: str
    check_date: date
    total_alerts: int
    triggered_alerts: list[TriggeredAlert] = field(default_factory=list)
    skipped_symbols: list[str] = field(default_factory=list)

    @property
    def triggered_count(self) -> int:
        return len(self.triggered_alerts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "check_date": self.check_date.isoformat(),
            "total_alerts": self.total_alerts,
            "triggered_count": self.triggered_count,
            "triggered_alerts": [
                {
                    "symbol": alert.symbol,
                    "alarm_names": sorted(alert.alarm_names),
                    "triggered_date": alert.triggered_date.isoformat(),
                }
                for alert in self.triggered_alerts
            ],
        }


def resolve_target_date(target_date: Union[date, str, None]) -> date:
    """
    Normalize a target date argument.

    Raises:
        MalformedDataError: If a string target is not ``YYYY-MM-DD``
    """
    if isinstance(target_date, datetime):
        return parse_date(target_date)
    if isinstance(target_date, date):
        return target_date
    try:
        return parse_target_date(target_date)
    except ValueError as e:
        raise MalformedDataError(str(e), raw_data=str(target_date), expected_format="YYYY-MM-DD") from e


def check_user_watch(
    watch: UserWatch,
    catalogue_lookup: CatalogueLookup,
    target_date: Union[date, str, None] = None
) -> AlertCheckResult:
    """
    Check every watch item of a user against stored catalogues.

    Items with no symbol or no alarm names are ignored. Symbols without a
    catalogue are reported in ``skipped_symbols`` and never match.

    Args:
        watch: The user's watch conditions
        catalogue_lookup: Returns the stored catalogue for a symbol
        target_date: Day to check, defaults to today in UTC

    Returns:
        AlertCheckResult listing the matched items
    """
    check_date = resolve_target_date(target_date)
    triggered: list[TriggeredAlert] = []
    skipped: list[str] = []

    for item in watch.items:
        if not item.symbol or not item.alarm_names:
            continue

        catalogue = catalogue_lookup(item.symbol)
        if catalogue is None:
            logger.warning("No alarm catalogue for watched symbol", user_id=watch.user_id, symbol=item.symbol)
            skipped.append(item.symbol)
            continue

        matched = matches(catalogue, item.alarm_names, check_date)
        log_alert_decision(
            logger,
            user_id=watch.user_id,
            symbol=item.symbol,
            alarm_names=item.alarm_names,
            matched=matched,
            target_date=check_date,
            reason=None if matched else _mismatch_reason(catalogue, item.alarm_names, check_date),
        )

        if matched:
            triggered.append(TriggeredAlert(
                symbol=item.symbol,
                alarm_names=item.alarm_names,
                triggered_date=check_date,
            ))

    return AlertCheckResult(
        user_id=watch.user_id,
        check_date=check_date,
        total_alerts=len(watch.items),
        triggered_alerts=triggered,
        skipped_symbols=skipped,
    )
