"""
Data quality error classifications for price history processing.

These exceptions help categorize the data problems that can occur while
turning externally supplied price rows into a usable series.
"""

import datetime
from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Date ordering issues in a price series."""

    def __init__(self, message: str, date: Optional[datetime.date] = None,
                 previous_date: Optional[datetime.date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.date = date
        self.previous_date = previous_date


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Not enough price history for a calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
