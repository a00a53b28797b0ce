"""Default parameter grids for every alarm family.

This table is the single source of truth for which alarms exist. The
catalogue builder enumerates these grids; nothing else hardcodes them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NWeekParams:
    """N-week low/high grid."""
    weeks: tuple[int, ...] = (4, 8, 12, 24, 32, 52)
    fluctuations: tuple[int, ...] = (0, 10, 20)     # % of window range


@dataclass(frozen=True)
class MACrossParams:
    """Moving-average pair grid; every p1 < p2 pair is used."""
    periods: tuple[int, ...] = (10, 50, 100, 200)
    directions: tuple[str, ...] = ("above", "below", "cross-up", "cross-down")


@dataclass(frozen=True)
class DailyChangeParams:
    """Daily close-to-close change thresholds (percent)."""
    thresholds: tuple[int, ...] = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class RSIParams:
    """Wilder RSI parameters."""
    period: int = 14
    oversold_thresholds: tuple[int, ...] = (10, 20, 30)
    overbought_thresholds: tuple[int, ...] = (70, 80, 90)


@dataclass(frozen=True)
class BollingerParams:
    """Bollinger band touch parameters."""
    period: int = 20
    std_dev: float = 2.0
    distance_percents: tuple[int, ...] = (0, 5, 10)  # % of band width


@dataclass(frozen=True)
class PriceCrossParams:
    """Close-crosses-MA alarms, not part of the default catalogue."""
    enabled: bool = False
    periods: tuple[int, ...] = (10, 50, 100, 200)


@dataclass(frozen=True)
class SeriesParams:
    """Price series gating."""
    min_history_points: int = 0        # 0 disables the gate


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    n_week_low: NWeekParams
    n_week_high: NWeekParams
    ma_cross: MACrossParams
    daily_change: DailyChangeParams
    rsi: RSIParams
    bollinger: BollingerParams
    price_cross: PriceCrossParams
    series: SeriesParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        n_week_low=NWeekParams(),
        n_week_high=NWeekParams(),
        ma_cross=MACrossParams(),
        daily_change=DailyChangeParams(),
        rsi=RSIParams(),
        bollinger=BollingerParams(),
        price_cross=PriceCrossParams(),
        series=SeriesParams(),
    )
