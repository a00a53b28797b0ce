"""
Base detector and backward scan shared by every trigger family.

A detector is one point of a family's parameter grid. It answers two
questions about a PriceSeries: does the condition hold at index i, and
what is the most recent date it held.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional

from ..catalogue.models import Trigger, TriggerKind
from ..data.models import PriceSeries


@dataclass(frozen=True)
class TriggerCheck:
    """Outcome of evaluating one detector at one index."""
    is_triggered: bool
    insufficient: bool = False
    value: Optional[float] = None        # Indicator value compared against threshold
    threshold: Optional[float] = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def insufficient_data(cls) -> "TriggerCheck":
        """Result for an index without enough history."""
        return cls(is_triggered=False, insufficient=True)


def backward_scan(
    series: PriceSeries,
    first_index: int,
    predicate: Callable[[int], bool]
) -> Optional[int]:
    """
    Find the most recent index at or after first_index where predicate holds.

    Scans from the last index toward first_index and stops at the first hit;
    nothing later than that hit can exist.

    Args:
        series: Price series to scan
        first_index: Earliest index worth evaluating
        predicate: Condition evaluated per index

    Returns:
        Index of the most recent hit, None if the condition never held
    """
    for index in range(len(series) - 1, max(first_index, 0) - 1, -1):
        if predicate(index):
            return index
    return None


class Detector(ABC):
    """One parameterized trigger condition."""

    kind: TriggerKind

    @property
    @abstractmethod
    def alarm_name(self) -> str:
        """Canonical alarm name for this parameterization."""

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """Parameters recorded alongside the trigger."""

    @property
    @abstractmethod
    def min_index(self) -> int:
        """First index at which the condition can be evaluated."""

    @abstractmethod
    def _check(self, series: PriceSeries, index: int) -> TriggerCheck:
        """Evaluate at an index known to have sufficient history."""

    def check(self, series: PriceSeries, index: int) -> TriggerCheck:
        """Evaluate the condition at index."""
        if index < self.min_index or not series.has_index(index):
            return TriggerCheck.insufficient_data()
        return self._check(series, index)

    def is_triggered(self, series: PriceSeries, index: int) -> bool:
        """True if the condition holds at index."""
        return self.check(series, index).is_triggered

    def has_sufficient_data(self, series: PriceSeries) -> bool:
        """True if at least one index of the series can be evaluated."""
        return len(series) > self.min_index

    def most_recent_trigger_index(self, series: PriceSeries) -> Optional[int]:
        """Index of the most recent day the condition held."""
        if not self.has_sufficient_data(series):
            return None
        return backward_scan(series, self.min_index, lambda i: self._check(series, i).is_triggered)

    def most_recent_trigger_date(self, series: PriceSeries) -> Optional[date]:
        """Date of the most recent day the condition held."""
        index = self.most_recent_trigger_index(series)
        return series[index].date if index is not None else None

    def evaluate(self, series: PriceSeries) -> Trigger:
        """Produce the catalogue entry for this detector."""
        return Trigger(
            alarm_name=self.alarm_name,
            kind=self.kind,
            parameters=self.parameters,
            previous_triggered_date=self.most_recent_trigger_date(series),
            insufficient_data=not self.has_sufficient_data(series),
        )
