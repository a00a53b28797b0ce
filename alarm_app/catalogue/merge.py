"""Optional carry-over of previously stored trigger dates.

A full rebuild is the baseline and is what the engine does by default. When
upstream history has been truncated, a rebuild can lose dates that were
known before; merging keeps those dates for alarms the fresh build could
not date.
"""

from dataclasses import replace
from typing import Optional

from .models import AlarmCatalogue


def merge_catalogues(previous: Optional[AlarmCatalogue], fresh: AlarmCatalogue) -> AlarmCatalogue:
    """
    Merge a fresh catalogue with the previously stored one.

    Alarm names come from the fresh catalogue only; an alarm dropped from
    the grid is dropped from the result. A previous date is kept only where
    the fresh entry has none and the previous entry had one, and it never
    replaces a fresh date.

    Args:
        previous: Stored catalogue, or None
        fresh: Catalogue from a full rebuild

    Returns:
        Merged catalogue
    """
    if previous is None:
        return fresh

    merged = {}
    for name, trigger in fresh.triggers.items():
        old = previous.get(name)
        if trigger.previous_triggered_date is None and old is not None and old.previous_triggered_date:
            trigger = replace(
                trigger,
                previous_triggered_date=old.previous_triggered_date,
                insufficient_data=False,
            )
        merged[name] = trigger

    return AlarmCatalogue(symbol=fresh.symbol, triggers=merged, as_of=fresh.as_of)
