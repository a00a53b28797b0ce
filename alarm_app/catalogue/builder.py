"""
Alarm catalogue builder.

Expands every detector family over its configured grid, evaluates each
detector against the whole series and collects the results into one
AlarmCatalogue per symbol. The build is a pure function of the series and
configuration.
"""

from typing import Callable, Optional, Sequence

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import PriceSeries
from ..errors import CatalogueBuildError
from ..logging.config import get_catalogue_logger, log_catalogue_build
from ..triggers.base import Detector
from ..triggers.bollinger import bollinger_detectors
from ..triggers.daily_change import daily_change_detectors
from ..triggers.ma_cross import ma_cross_detectors, price_cross_detectors
from ..triggers.n_week import HIGH, LOW, n_week_detectors
from ..triggers.rsi import rsi_detectors
from .models import AlarmCatalogue, Trigger

logger = get_catalogue_logger(__name__)

# family -> detector factory over that family's grid
FAMILY_TABLE: tuple[tuple[str, Callable[[DefaultConfig], list[Detector]]], ...] = (
    ("n_week_low", lambda config: n_week_detectors(LOW, config.n_week_low)),
    ("n_week_high", lambda config: n_week_detectors(HIGH, config.n_week_high)),
    ("ma_cross", lambda config: ma_cross_detectors(config.ma_cross)),
    ("daily_change", lambda config: daily_change_detectors(config.daily_change)),
    ("rsi", lambda config: rsi_detectors(config.rsi)),
    ("bollinger", lambda config: bollinger_detectors(config.bollinger)),
    ("price_cross", lambda config: price_cross_detectors(config.price_cross)),
)


class AlarmCatalogueBuilder:
    """Builds alarm catalogues from the configured parameter grids."""

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def detectors(self) -> dict[str, list[Detector]]:
        """Every configured detector, grouped by family."""
        return {family: factory(self.config) for family, factory in FAMILY_TABLE}

    def alarm_names(self) -> list[str]:
        """Every alarm name this configuration produces, sorted."""
        return sorted(
            detector.alarm_name
            for detectors in self.detectors().values()
            for detector in detectors
        )

    def _evaluate_family(
        self,
        series: PriceSeries,
        family: str,
        detectors: Sequence[Detector]
    ) -> list[Trigger]:
        try:
            triggers = [detector.evaluate(series) for detector in detectors]
        except Exception as e:
            raise CatalogueBuildError(
                f"Failed to evaluate {family} for {series.symbol}: {e}",
                symbol=series.symbol,
                family=family,
                context={"series_length": len(series)}
            ) from e

        logger.debug(
            "Family evaluated",
            symbol=series.symbol,
            family=family,
            alarm_count=len(triggers),
            triggered_count=sum(1 for t in triggers if t.has_triggered),
        )
        return triggers

    def build(self, series: PriceSeries) -> AlarmCatalogue:
        """
        Build the full catalogue for one series.

        Every grid combination yields an entry; combinations without enough
        history get ``insufficient_data=True`` and no date.

        Args:
            series: Complete price history for one symbol

        Returns:
            AlarmCatalogue keyed by alarm name

        Raises:
            CatalogueBuildError: If a detector fails or two alarms share a name
        """
        triggers: list[Trigger] = []
        for family, detectors in self.detectors().items():
            triggers.extend(self._evaluate_family(series, family, detectors))

        try:
            catalogue = AlarmCatalogue.from_triggers(series.symbol, triggers, as_of=series.last_date)
        except ValueError as e:
            raise CatalogueBuildError(str(e), symbol=series.symbol) from e

        log_catalogue_build(
            logger,
            symbol=series.symbol,
            alarm_count=len(catalogue),
            triggered_count=sum(1 for t in catalogue if t.has_triggered),
            insufficient_count=sum(1 for t in catalogue if t.insufficient_data),
            context={"series_length": len(series), "as_of": str(series.last_date)},
        )
        return catalogue


def build_catalogue(series: PriceSeries, config: Optional[DefaultConfig] = None) -> AlarmCatalogue:
    """Build a catalogue with the given or default configuration."""
    return AlarmCatalogueBuilder(config).build(series)
