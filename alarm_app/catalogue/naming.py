"""Canonical alarm names.

Alarm names are read by the notification side to match user watches, so
these templates must not change between builds.
"""

from typing import Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Render a parameter without a trailing ``.0`` (2.0 -> "2", 2.5 -> "2.5")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def direction_label(direction: str) -> str:
    """'cross-up' -> 'CrossUp', 'above' -> 'Above'."""
    return "".join(word[:1].upper() + word[1:] for word in direction.split("-"))


def n_week_low_name(weeks: int, fluctuation: Number) -> str:
    return f"{weeks}WeekLow{format_number(fluctuation)}Fluctuation"


def n_week_high_name(weeks: int, fluctuation: Number) -> str:
    return f"{weeks}WeekHigh{format_number(fluctuation)}Fluctuation"


def ma_cross_name(short_period: int, direction: str, long_period: int) -> str:
    return f"MA{short_period}{direction_label(direction)}MA{long_period}"


def daily_loss_name(threshold: Number) -> str:
    return f"DailyLoss{format_number(threshold)}Percent"


def daily_gain_name(threshold: Number) -> str:
    return f"DailyGain{format_number(threshold)}Percent"


def rsi_oversold_name(threshold: Number) -> str:
    return f"RSIOversold{format_number(threshold)}"


def rsi_overbought_name(threshold: Number) -> str:
    return f"RSIOverbought{format_number(threshold)}"


def bb_lower_name(period: int, std_dev: Number, distance_percent: Number) -> str:
    return f"BBLower{period}Period{format_number(std_dev)}StdDev{format_number(distance_percent)}Pct"


def bb_upper_name(period: int, std_dev: Number, distance_percent: Number) -> str:
    return f"BBUpper{period}Period{format_number(std_dev)}StdDev{format_number(distance_percent)}Pct"


def price_cross_name(direction: str, period: int) -> str:
    return f"Price{direction_label(direction)}MA{period}"
