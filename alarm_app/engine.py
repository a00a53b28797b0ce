"""
Main alarm engine coordinator.

Orchestrates the daily rebuild pipeline, coordinating price row ingestion,
catalogue building and persistence, and checks user watches against the
stored catalogues.

    Price Rows → PriceSeries → AlarmCatalogue → CatalogueStore → User Watches
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

import structlog

from .catalogue.builder import AlarmCatalogueBuilder
from .catalogue.merge import merge_catalogues
from .catalogue.models import AlarmCatalogue
from .config.loader import ConfigLoader
from .data.models import PriceSeries
from .data.parsers import build_price_series
from .data.validators import ValidationError as PriceValidationError, validate_price_point
from .errors import (
    CatalogueBuildError,
    DataQualityError,
    InsufficientDataError,
    MalformedDataError,
    MissingDataError,
    PersistenceError,
)
from .matching.composite import AlertCheckResult, UserWatch, check_user_watch
from .persistence.catalogue_store import CatalogueStore

logger = structlog.get_logger(__name__)

PriceRows = Iterable[Mapping[str, Any]]

SUCCESS = "success"
INSUFFICIENT_HISTORY = "insufficient_history"
ERROR = "error"


@dataclass(frozen=True)
class SymbolRebuildResult:
    """Outcome of rebuilding one symbol."""
    symbol: str
    status: str
    alarm_count: int = 0
    series_length: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS


@dataclass
class RebuildSummary:
    """Outcome of a batch rebuild."""
    results: list[SymbolRebuildResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.status == SUCCESS)

    @property
    def fail_count(self) -> int:
        return sum(1 for r in self.results if r.status == ERROR)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.status == INSUFFICIENT_HISTORY)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success_count": self.success_count,
            "fail_count": self.fail_count,
            "skipped_count": self.skipped_count,
            "results": [
                {
                    "symbol": r.symbol,
                    "status": r.status,
                    "alarm_count": r.alarm_count,
                    "series_length": r.series_length,
                    "error": r.error,
                }
                for r in self.results
            ],
        }


class AlarmEngine:
    """
    Main coordinator for the daily alarm rebuild.

    Each symbol is rebuilt from its complete price history. A failure in
    one symbol is recorded and never stops the others.
    """

    def __init__(
        self,
        store: Optional[CatalogueStore] = None,
        config_loader: Optional[ConfigLoader] = None,
        preserve_existing_dates: bool = False
    ) -> None:
        """
        Initialize the alarm engine.

        Args:
            store: Where catalogues are persisted; nothing is persisted if None
            config_loader: Source of per-symbol grid configuration
            preserve_existing_dates: Keep stored dates the fresh build cannot
                reproduce, see ``merge_catalogues``
        """
        self.logger = logger
        self.store = store
        self.config_loader = config_loader or ConfigLoader.create()
        self.preserve_existing_dates = preserve_existing_dates

        self.logger.info(
            "Alarm engine initialized",
            persistent=store is not None,
            preserve_existing_dates=preserve_existing_dates
        )

    def _to_series(self, symbol: str, data: Union[PriceSeries, PriceRows]) -> PriceSeries:
        """
        Turn raw rows or a ready series into a validated PriceSeries.

        Rows are parsed and filtered by ``build_price_series``. A series
        passed in directly skipped that step, so its points are checked here.

        Raises:
            MalformedDataError: If a point of a supplied series is invalid
        """
        if not isinstance(data, PriceSeries):
            return build_price_series(symbol, data).series

        for point in data:
            try:
                validate_price_point(point)
            except PriceValidationError as e:
                raise MalformedDataError(
                    f"Invalid price point for {data.symbol}: {e}",
                    raw_data=repr(point),
                    expected_format="low <= open,close <= high, positive prices, volume >= 0"
                ) from e
        return data

    def _check_history(self, series: PriceSeries, min_points: int) -> None:
        """
        Gate a series before it replaces a stored catalogue.

        Raises:
            MissingDataError: If no valid price rows survived parsing
            InsufficientDataError: If the series is shorter than min_points
        """
        if len(series) == 0:
            raise MissingDataError(
                f"No valid price rows for {series.symbol}",
                data_type="price_history"
            )
        if len(series) < min_points:
            raise InsufficientDataError(
                f"{series.symbol} has {len(series)} points, {min_points} required",
                required_count=min_points,
                available_count=len(series)
            )

    def build_catalogue(
        self,
        symbol: str,
        data: Union[PriceSeries, PriceRows],
        overrides: Optional[dict[str, Any]] = None
    ) -> AlarmCatalogue:
        """
        Build a symbol's catalogue without persisting it.

        Args:
            symbol: Symbol to build
            data: A PriceSeries or raw price rows
            overrides: Per-call grid overrides

        Returns:
            The freshly built catalogue

        Raises:
            CatalogueBuildError: If the build fails
            ValueError: If the merged configuration is invalid
            MalformedDataError: If a supplied PriceSeries holds an invalid point
        """
        symbol = symbol.upper()
        config = self.config_loader.build_config(symbol, overrides)
        series = self._to_series(symbol, data)
        return AlarmCatalogueBuilder(config).build(series)

    def rebuild_symbol(
        self,
        symbol: str,
        data: Union[PriceSeries, PriceRows],
        overrides: Optional[dict[str, Any]] = None
    ) -> SymbolRebuildResult:
        """
        Rebuild and persist one symbol's catalogue.

        Errors are captured in the result rather than raised.

        Returns:
            SymbolRebuildResult with status success, insufficient_history or error
        """
        symbol = symbol.upper()
        series_length = 0

        try:
            config = self.config_loader.build_config(symbol, overrides)
            series = self._to_series(symbol, data)
            series_length = len(series)
            self._check_history(series, config.series.min_history_points)

            catalogue = AlarmCatalogueBuilder(config).build(series)

            if self.store is not None:
                if self.preserve_existing_dates:
                    catalogue = merge_catalogues(self.store.get_catalogue(symbol), catalogue)
                self.store.store_catalogue(catalogue)

        except InsufficientDataError as e:
            self.logger.warning(
                "Skipping symbol with insufficient history",
                symbol=symbol,
                series_length=e.available_count,
                min_history_points=e.required_count
            )
            return SymbolRebuildResult(
                symbol=symbol,
                status=INSUFFICIENT_HISTORY,
                series_length=series_length,
                error=str(e),
            )
        except (CatalogueBuildError, PersistenceError, DataQualityError, ValueError) as e:
            self.logger.error(
                "Symbol rebuild failed",
                symbol=symbol,
                error=str(e),
                error_type=type(e).__name__
            )
            return SymbolRebuildResult(
                symbol=symbol,
                status=ERROR,
                series_length=series_length,
                error=str(e),
            )
        except Exception as e:
            self.logger.error(
                "Unexpected error during symbol rebuild",
                symbol=symbol,
                error=str(e),
                error_type=type(e).__name__
            )
            return SymbolRebuildResult(
                symbol=symbol,
                status=ERROR,
                series_length=series_length,
                error=f"{type(e).__name__}: {e}",
            )

        self.logger.info(
            "Symbol rebuilt",
            symbol=symbol,
            alarm_count=len(catalogue),
            as_of=str(catalogue.as_of)
        )
        return SymbolRebuildResult(
            symbol=symbol,
            status=SUCCESS,
            alarm_count=len(catalogue),
            series_length=series_length,
        )

    def rebuild_all(self, symbol_data: Mapping[str, Union[PriceSeries, PriceRows]]) -> RebuildSummary:
        """
        Rebuild every symbol, isolating failures per symbol.

        Args:
            symbol_data: Symbol to PriceSeries or raw price rows

        Returns:
            RebuildSummary with per-symbol results in symbol order
        """
        summary = RebuildSummary()
        for symbol in sorted(symbol_data):
            summary.results.append(self.rebuild_symbol(symbol, symbol_data[symbol]))

        self.logger.info(
            "Rebuild complete",
            total=len(summary.results),
            success_count=summary.success_count,
            fail_count=summary.fail_count,
            skipped_count=summary.skipped_count
        )
        return summary

    def check_user_alerts(
        self,
        watch: Union[UserWatch, dict[str, Any]],
        target_date: Union[date, str, None] = None
    ) -> AlertCheckResult:
        """
        Check a user's watch items against the stored catalogues.

        Args:
            watch: UserWatch or a user watch document
            target_date: Day to check, defaults to today in UTC

        Raises:
            PersistenceError: If the engine has no store
            MalformedDataError: If the watch document or target date is malformed
        """
        if self.store is None:
            raise PersistenceError(
                "Alert checks need a catalogue store",
                operation="check_user_alerts"
            )

        if not isinstance(watch, UserWatch):
            watch = UserWatch.from_document(watch)

        return check_user_watch(watch, self.store.get_catalogue, target_date)
