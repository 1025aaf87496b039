"""UTF-8 regrouping of raw byte input into Unicode scalar values.

The encoder needs to see whole code points, but it must never fail on input
that is not valid UTF-8. This module walks a byte buffer and yields one
segment per code point, or one segment per offending byte when a sequence is
malformed, so callers can pass the bad bytes through untouched.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

ByteInput = Union[bytes, bytearray, memoryview, str]

# UTF-8 byte constants
ASCII_MAX = 0x80
UTF8_CONTINUATION_MIN = 0x80
UTF8_CONTINUATION_MAX = 0xC0
UTF8_2BYTE_MIN = 0xC2  # 0xC0 and 0xC1 can only start overlong sequences
UTF8_2BYTE_MAX = 0xE0
UTF8_3BYTE_MAX = 0xF0
UTF8_4BYTE_MAX = 0xF5  # 0xF5.. would encode values above U+10FFFF

# Codepoint thresholds for overlong sequence detection
OVERLONG_3BYTE_THRESHOLD = 0x800
OVERLONG_4BYTE_THRESHOLD = 0x10000

# Unicode scalar value limits
SURROGATE_RANGE_START = 0xD800
SURROGATE_RANGE_END = 0xDFFF
MAX_CODEPOINT = 0x10FFFF


@dataclass(frozen=True)
class ScalarSegment:
    """A slice of the input covering one code point or one malformed byte.

    Attributes:
        start: Offset of the first byte of the segment
        end: Offset one past the last byte of the segment
        codepoint: Decoded scalar value, or None for a malformed byte
    """
    start: int
    end: int
    codepoint: Optional[int]

    @property
    def is_malformed(self) -> bool:
        """Check if this segment is a byte that does not start valid UTF-8."""
        return self.codepoint is None


def coerce_bytes(data: ByteInput) -> bytes:
    """Normalize codec input to ``bytes``, UTF-8 encoding text.

    Raises:
        TypeError: If ``data`` is neither text nor a bytes-like object
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        # surrogatepass keeps lone surrogates as bytes the encoder passes through
        return data.encode("utf-8", errors="surrogatepass")
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(
        f"Expected bytes-like object or str, got {type(data).__name__}"
    )


def is_scalar_value(codepoint: int) -> bool:
    """Check if an integer is a Unicode scalar value (no surrogates)."""
    if codepoint < 0 or codepoint > MAX_CODEPOINT:
        return False
    return not SURROGATE_RANGE_START <= codepoint <= SURROGATE_RANGE_END


def _is_continuation(byte: int) -> bool:
    return UTF8_CONTINUATION_MIN <= byte < UTF8_CONTINUATION_MAX


def _sequence_length(lead: int) -> int:
    """Return the declared length of a sequence, or 0 for an invalid lead byte."""
    if lead < ASCII_MAX:
        return 1
    if lead < UTF8_2BYTE_MIN:
        return 0
    if lead < UTF8_2BYTE_MAX:
        return 2
    if lead < UTF8_3BYTE_MAX:
        return 3
    if lead < UTF8_4BYTE_MAX:
        return 4
    return 0


def decode_sequence(data: bytes, pos: int) -> Optional[ScalarSegment]:
    """Decode the UTF-8 sequence starting at ``pos``.

    Args:
        data: Byte buffer
        pos: Offset of the lead byte

    Returns:
        ScalarSegment for a well-formed sequence, None if the bytes at ``pos``
        do not start one (bad lead byte, truncation, bad continuation,
        overlong form, encoded surrogate or value above U+10FFFF).
    """
    lead = data[pos]
    length = _sequence_length(lead)
    if length == 1:
        return ScalarSegment(pos, pos + 1, lead)
    if length == 0 or pos + length > len(data):
        return None

    tail = data[pos + 1:pos + length]
    if not all(_is_continuation(byte) for byte in tail):
        return None

    if length == 2:
        codepoint = ((lead & 0x1F) << 6) | (tail[0] & 0x3F)
    elif length == 3:
        codepoint = (
            ((lead & 0x0F) << 12) |
            ((tail[0] & 0x3F) << 6) |
            (tail[1] & 0x3F)
        )
        if codepoint < OVERLONG_3BYTE_THRESHOLD:
            return None
    else:
        codepoint = (
            ((lead & 0x07) << 18) |
            ((tail[0] & 0x3F) << 12) |
            ((tail[1] & 0x3F) << 6) |
            (tail[2] & 0x3F)
        )
        if codepoint < OVERLONG_4BYTE_THRESHOLD:
            return None

    if not is_scalar_value(codepoint):
        return None
    return ScalarSegment(pos, pos + length, codepoint)


def iter_scalars(data: bytes) -> Iterator[ScalarSegment]:
    """Split a byte buffer into code point segments.

    Malformed bytes are reported one at a time with ``codepoint=None`` and
    scanning resumes at the next byte, so the segments always tile the
    whole input.

    Args:
        data: Byte buffer to regroup

    Yields:
        ScalarSegment for each code point or malformed byte, in order
    """
    pos = 0
    total = len(data)
    while pos < total:
        segment = decode_sequence(data, pos)
        if segment is None:
            segment = ScalarSegment(pos, pos + 1, None)
        yield segment
        pos = segment.end
