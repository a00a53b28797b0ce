"""
Centralized logging configuration for the alarm engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from datetime import date
from typing import Any, Iterable, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_catalogue_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for alarm catalogue builds.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the catalogue subsystem
    """
    return get_logger(name).bind(subsystem="catalogue")


def get_alert_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for user alert decisions.

    Alert decisions are kept as an audit trail so a missed or duplicate
    notification can be traced back to the catalogue dates involved.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the alerts subsystem
    """
    return get_logger(name).bind(
        subsystem="alerts",
        audit_trail=True
    )


def log_catalogue_build(
    logger: FilteringBoundLogger,
    symbol: str,
    alarm_count: int,
    triggered_count: int,
    insufficient_count: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a finished catalogue build with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Symbol the catalogue was built for
        alarm_count: Number of alarms in the catalogue
        triggered_count: Alarms with a previous triggered date
        insufficient_count: Alarms that lacked enough history
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        alarm_count=alarm_count,
        triggered_count=triggered_count,
        insufficient_count=insufficient_count,
        event_type="catalogue_build"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Catalogue built")


def log_alert_decision(
    logger: FilteringBoundLogger,
    user_id: str,
    symbol: str,
    alarm_names: Iterable[str],
    matched: bool,
    target_date: date,
    reason: Optional[str] = None
) -> None:
    """
    Log a composite alert decision with standardized format.

    Args:
        logger: Structlog logger instance
        user_id: User owning the watch
        symbol: Symbol the watch applies to
        alarm_names: Alarm names that must co-occur
        matched: Whether every alarm fired on the target date
        target_date: Date that was checked
        reason: Why the watch did not match, if known
    """
    bound_logger = logger.bind(
        user_id=user_id,
        symbol=symbol,
        alarm_names=sorted(alarm_names),
        alert_result="MATCH" if matched else "NO_MATCH",
        target_date=target_date.isoformat(),
        event_type="alert_decision"
    )

    if reason:
        bound_logger = bound_logger.bind(reason=reason)

    if matched:
        bound_logger.info("Alert matched")
    else:
        bound_logger.debug("Alert not matched")
