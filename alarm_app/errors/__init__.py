"""
Structured error classification for the alarm engine.

Data quality errors describe bad or short price history and are handled
gracefully; system failures stop a symbol's build or storage and are
reported to the caller.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    IndicatorCalculationError,
    CatalogueBuildError,
    PersistenceError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    "CatalogueBuildError",
    "PersistenceError",
]
