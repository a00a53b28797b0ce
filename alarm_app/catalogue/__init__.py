"""Alarm catalogue models, canonical names, builder and merge."""

from .models import AlarmCatalogue, Trigger, TriggerKind

__all__ = ["AlarmCatalogue", "Trigger", "TriggerKind"]
