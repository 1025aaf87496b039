"""Character processing layer for the HTML entity codec.

This module regroups raw byte input into Unicode scalar values while passing
malformed sequences through unchanged.
"""

from .utf8 import (
    MAX_CODEPOINT,
    ByteInput,
    ScalarSegment,
    coerce_bytes,
    decode_sequence,
    is_scalar_value,
    iter_scalars,
)

__all__ = [
    "MAX_CODEPOINT",
    "ByteInput",
    "ScalarSegment",
    "coerce_bytes",
    "decode_sequence",
    "is_scalar_value",
    "iter_scalars",
]
