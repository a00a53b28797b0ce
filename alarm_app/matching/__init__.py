"""Composite same-day alarm matching for user watches."""

from .composite import (
    AlertCheckResult,
    TriggeredAlert,
    UserWatch,
    WatchItem,
    check_user_watch,
    matches,
)

__all__ = [
    "AlertCheckResult",
    "TriggeredAlert",
    "UserWatch",
    "WatchItem",
    "check_user_watch",
    "matches",
]
