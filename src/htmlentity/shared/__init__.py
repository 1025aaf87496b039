"""Shared utilities for the HTML entity codec.

This module provides the result types and logging helpers used by every layer.
Configuration lives in ``htmlentity.shared.config``; it depends on the entity
layer and is imported from there directly.
"""

from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    CodedData,
    CodedUnit,
    InvalidEncodingError,
    UnitOrigin,
)

__all__ = [
    "CorrelationLogger",
    "get_logger",
    "CodedData",
    "CodedUnit",
    "InvalidEncodingError",
    "UnitOrigin",
]
