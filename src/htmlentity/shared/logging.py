"""Structured logging utilities for the HTML entity codec.

Log records emitted through CorrelationLogger carry the codec component name
and an optional correlation ID in their ``extra`` mapping, so callers that run
many codec operations can tie log lines back to a request.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Logger that attaches component and correlation ID to every record."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name, defaults to the last part of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.info(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log an error with the active exception's traceback."""
        self.logger.exception(message, extra=self._get_extra(extra))

    def operation_summary(
        self,
        operation: str,
        statistics: Dict[str, Any],
        processing_time_ms: float,
        level: int = logging.DEBUG
    ) -> None:
        """Log the counters collected by one encode or decode call.

        Args:
            operation: ``encode`` or ``decode``
            statistics: Counters from CodedData.statistics, plus any extras
            processing_time_ms: Wall time of the call
            level: Log level for the summary record
        """
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(
            level,
            f"Completed {operation} operation",
            extra=self._get_extra({
                "operation": operation,
                "processing_time_ms": processing_time_ms,
                **statistics,
            }),
        )


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
