"""
Canonical data models for daily price history.

This module defines immutable data structures that represent clean, validated
daily bars after parsing from externally supplied rows.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Iterator, Optional

from ..errors import TemporalDataError


@dataclass(frozen=True)
class PricePoint:
    """One trading day of OHLCV data."""
    date: date          # Calendar day (UTC)
    open: float         # Opening price
    high: float         # High price
    low: float          # Low price
    close: float        # Closing price
    volume: int         # Shares traded


@dataclass(frozen=True)
class PriceSeries:
    """
    Ordered daily price history for one symbol.

    Dates are strictly increasing. The series never changes after
    construction; derived indicator values are memoized per series so every
    detector scanning it shares one computation.
    """

    symbol: str
    points: tuple[PricePoint, ...] = ()
    _derived: dict = field(default_factory=dict, init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        """Enforce strictly increasing dates."""
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

        for previous, current in zip(self.points, self.points[1:]):
            if current.date <= previous.date:
                raise TemporalDataError(
                    f"Price series for {self.symbol} is not strictly increasing by date",
                    date=current.date,
                    previous_date=previous.date,
                )

    @classmethod
    def from_points(cls, symbol: str, points: Iterable[PricePoint]) -> "PriceSeries":
        """Build a series from points that may arrive out of order."""
        return cls(symbol=symbol, points=tuple(sorted(points, key=lambda p: p.date)))

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> PricePoint:
        return self.points[index]

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    @property
    def closes(self) -> tuple[float, ...]:
        """Closing prices in date order."""
        return self.derived("closes", lambda: tuple(p.close for p in self.points))

    @property
    def dates(self) -> tuple[date, ...]:
        """Dates in order."""
        return self.derived("dates", lambda: tuple(p.date for p in self.points))

    @property
    def last_date(self) -> Optional[date]:
        """Most recent date, None if empty."""
        return self.points[-1].date if self.points else None

    def has_index(self, index: int) -> bool:
        """True if index addresses a point (negative indexes are not allowed)."""
        return 0 <= index < len(self.points)

    def derived(self, key: Any, factory: Callable[[], Any]) -> Any:
        """Get a memoized value derived from this series."""
        if key not in self._derived:
            self._derived[key] = factory()
        return self._derived[key]


@dataclass(frozen=True)
class SeriesBuildResult:
    """Result of building a series from raw rows."""

    series: PriceSeries
    total_rows: int = 0
    dropped_rows: int = 0
    duplicate_dates: int = 0

    @property
    def accepted_rows(self) -> int:
        """Rows that made it into the series."""
        return len(self.series)
