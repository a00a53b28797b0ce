"""
Parsers for converting externally supplied price rows into a PriceSeries.

Rows come from CSV or JSON sources upstream and arrive here as mappings.
Each malformed row is dropped with a debug log entry; the series is built
from whatever survives.
"""

import math
from typing import Any, Iterable, Mapping

from ..logging.config import get_logger
from ..utils.time import parse_date
from .models import PricePoint, PriceSeries, SeriesBuildResult
from .validators import ValidationError, validate_price_point

logger = get_logger(__name__)

REQUIRED_FIELDS = ("date", "open", "high", "low", "close", "volume")


class ParseError(Exception):
    """Raised when parsing fails due to invalid data format."""
    pass


class MissingFieldError(ParseError):
    """Raised when a required column is absent or empty."""
    pass


class InvalidPriceError(ParseError):
    """Raised when price data is invalid."""
    pass


class InvalidDateError(ParseError):
    """Raised when the date cannot be parsed."""
    pass


class InvalidVolumeError(ParseError):
    """Raised when volume data is invalid."""
    pass


class OHLCConsistencyError(ParseError):
    """Raised when OHLC prices are inconsistent."""
    pass


def _normalize_keys(row: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).strip().lower(): value for key, value in row.items()}


def _parse_price(name: str, raw: Any) -> float:
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError) as e:
        raise InvalidPriceError(f"Invalid {name} price: {raw!r}") from e

    if not math.isfinite(value) or value <= 0:
        raise InvalidPriceError(f"Invalid {name} price: {raw!r}")
    return value


def _parse_volume(raw: Any) -> int:
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError) as e:
        raise InvalidVolumeError(f"Invalid volume: {raw!r}") from e

    if not math.isfinite(value) or value < 0 or value != int(value):
        raise InvalidVolumeError(f"Invalid volume: {raw!r}")
    return int(value)


def parse_price_row(row: Mapping[str, Any]) -> PricePoint:
    """
    Parse one raw row into a validated PricePoint.

    Column names are matched case-insensitively. Dates may be ISO dates,
    ISO datetimes or day-first ``DD-MM-YYYY`` strings.

    Args:
        row: Mapping with date, open, high, low, close and volume

    Returns:
        Validated PricePoint

    Raises:
        ParseError: If the row is incomplete or malformed
    """
    if not isinstance(row, Mapping):
        raise ParseError(f"Price row must be a mapping, got {type(row).__name__}")

    fields = _normalize_keys(row)

    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingFieldError(f"Missing required field: {name}")

    try:
        day = parse_date(fields["date"])
    except ValueError as e:
        raise InvalidDateError(str(e)) from e

    point = PricePoint(
        date=day,
        open=_parse_price("open", fields["open"]),
        high=_parse_price("high", fields["high"]),
        low=_parse_price("low", fields["low"]),
        close=_parse_price("close", fields["close"]),
        volume=_parse_volume(fields["volume"]),
    )

    try:
        validate_price_point(point)
    except ValidationError as e:
        raise OHLCConsistencyError(str(e)) from e

    return point


def build_price_series(symbol: str, rows: Iterable[Mapping[str, Any]]) -> SeriesBuildResult:
    """
    Build an ordered, deduplicated PriceSeries from raw rows.

    Malformed rows are dropped, never repaired. When two rows share a date
    the first one seen is kept.

    Args:
        symbol: Symbol the rows belong to
        rows: Raw rows in any order

    Returns:
        SeriesBuildResult with the series and drop counts
    """
    by_date: dict = {}
    total = 0
    dropped = 0
    duplicates = 0

    for position, row in enumerate(rows):
        total += 1
        try:
            point = parse_price_row(row)
        except ParseError as e:
            dropped += 1
            logger.debug(
                "Dropping malformed price row",
                symbol=symbol,
                row_number=position,
                error=str(e),
                error_type=type(e).__name__
            )
            continue

        if point.date in by_date:
            duplicates += 1
            continue
        by_date[point.date] = point

    series = PriceSeries.from_points(symbol, by_date.values())

    if dropped or duplicates:
        logger.info(
            "Price rows dropped during series build",
            symbol=symbol,
            total_rows=total,
            dropped_rows=dropped,
            duplicate_dates=duplicates
        )

    return SeriesBuildResult(
        series=series,
        total_rows=total,
        dropped_rows=dropped,
        duplicate_dates=duplicates,
    )
