"""
Data validation for daily price points.

A point that fails validation is dropped by the series builder; nothing
here attempts to repair values.
"""

import math

from .models import PricePoint


class ValidationError(Exception):
    """Raised when price data validation fails."""
    pass


def validate_price_point(point: PricePoint) -> None:
    """
    Validate a single price point against integrity rules.

    Args:
        point: Parsed price point

    Raises:
        ValidationError: If validation fails
    """
    prices = (point.open, point.high, point.low, point.close)

    if not all(math.isfinite(price) for price in prices):
        raise ValidationError(f"Non-finite price on {point.date}")

    if not all(price > 0 for price in prices):
        raise ValidationError(f"All prices must be positive on {point.date}")

    # OHLC consistency
    if point.high < max(point.open, point.close):
        raise ValidationError(
            f"High {point.high} must be >= max(open {point.open}, close {point.close}) on {point.date}"
        )

    if point.low > min(point.open, point.close):
        raise ValidationError(
            f"Low {point.low} must be <= min(open {point.open}, close {point.close}) on {point.date}"
        )

    if point.volume < 0:
        raise ValidationError(f"Volume {point.volume} must be non-negative on {point.date}")
