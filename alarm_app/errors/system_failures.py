"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that stop a symbol's catalogue from
being built or stored and must be reported to the caller.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class IndicatorCalculationError(SystemFailureError):
    """Critical error in an indicator calculation."""

    def __init__(self, message: str, indicator_name: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.indicator_name = indicator_name
        self.calculation_input = calculation_input


class CatalogueBuildError(SystemFailureError):
    """A symbol's alarm catalogue could not be built."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 family: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.family = family


class PersistenceError(SystemFailureError):
    """Database or file system persistence failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
