"""
Structured logging for catalogue builds and alert decisions.
"""
from .config import configure_logging, get_alert_logger, get_catalogue_logger, get_logger

__all__ = ["configure_logging", "get_alert_logger", "get_catalogue_logger", "get_logger"]
