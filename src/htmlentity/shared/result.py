"""Result objects for HTML entity encoding and decoding.

Both the encoder and the decoder produce a CodedData value: an ordered list of
units, each recording the bytes it contributes to the output and whether they
were copied from the input, produced by escaping a character, or produced by
resolving an entity reference.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, List, Tuple


class UnitOrigin(Enum):
    """Provenance of a coded unit."""

    LITERAL = auto()    # Copied unchanged from the input
    ENCODED = auto()    # Character replaced by an entity reference
    DECODED = auto()    # Entity reference replaced by its character


class InvalidEncodingError(ValueError):
    """Raised when coded bytes cannot be converted to text.

    Only the text and character conversions of CodedData raise this; encoding
    and decoding themselves never fail.
    """

    def __init__(self, message: str, position: int = -1) -> None:
        super().__init__(message)
        self.position = position


@dataclass(frozen=True)
class CodedUnit:
    """One segment of coded output.

    Attributes:
        data: Output bytes of this unit
        origin: Where the bytes came from
        source: Input bytes this unit replaced (equal to ``data`` for literals)
    """
    data: bytes
    origin: UnitOrigin
    source: bytes = b""

    @property
    def is_literal(self) -> bool:
        """Check if this unit was copied unchanged from the input."""
        return self.origin is UnitOrigin.LITERAL

    def __len__(self) -> int:
        return len(self.data)


@dataclass
class CodedData:
    """Ordered sequence of coded units with conversion helpers.

    Attributes:
        units: Output units in order
        statistics: Counters collected while producing the units
    """
    units: List[CodedUnit] = field(default_factory=list)
    statistics: Dict[str, int] = field(default_factory=dict)

    def __iter__(self) -> Iterator[CodedUnit]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def append_literal(self, chunk: bytes) -> None:
        """Append literal bytes, merging with a preceding literal unit."""
        if not chunk:
            return
        if self.units and self.units[-1].origin is UnitOrigin.LITERAL:
            merged = self.units[-1].data + chunk
            self.units[-1] = CodedUnit(merged, UnitOrigin.LITERAL, merged)
        else:
            chunk = bytes(chunk)
            self.units.append(CodedUnit(chunk, UnitOrigin.LITERAL, chunk))

    def append_replacement(
        self, output: bytes, origin: UnitOrigin, source: bytes
    ) -> None:
        """Append a unit produced by escaping or unescaping."""
        self.units.append(CodedUnit(bytes(output), origin, bytes(source)))

    def count(self, origin: UnitOrigin) -> int:
        """Count units with the given origin."""
        return sum(1 for unit in self.units if unit.origin is origin)

    @property
    def literal_count(self) -> int:
        return self.count(UnitOrigin.LITERAL)

    @property
    def encoded_count(self) -> int:
        return self.count(UnitOrigin.ENCODED)

    @property
    def decoded_count(self) -> int:
        return self.count(UnitOrigin.DECODED)

    @property
    def replaced_count(self) -> int:
        """Number of units that are not literal pass-through."""
        return len(self.units) - self.literal_count

    @property
    def source_length(self) -> int:
        """Total number of input bytes covered by the units."""
        return sum(len(unit.source) for unit in self.units)

    def origins(self) -> Tuple[UnitOrigin, ...]:
        return tuple(unit.origin for unit in self.units)

    def to_bytes(self) -> bytes:
        """Concatenate the bytes of all units."""
        return b"".join(unit.data for unit in self.units)

    def to_text(self, errors: str = "strict") -> str:
        """Convert the coded bytes to a string.

        Args:
            errors: Codec error handler; anything other than ``strict`` makes
                the conversion lossy but infallible

        Returns:
            Decoded text

        Raises:
            InvalidEncodingError: If the bytes are not valid UTF-8 and
                ``errors`` is ``strict``
        """
        data = self.to_bytes()
        try:
            return data.decode("utf-8", errors=errors)
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(
                f"Coded data is not valid UTF-8 at byte {e.start}: {e.reason}",
                position=e.start,
            ) from e

    def to_characters(self, errors: str = "strict") -> List[str]:
        """Convert the coded bytes to a list of single characters.

        Raises:
            InvalidEncodingError: If the bytes are not valid UTF-8
        """
        return list(self.to_text(errors))

    def to_codepoints(self, errors: str = "strict") -> List[int]:
        """Convert the coded bytes to a list of scalar values."""
        return [ord(char) for char in self.to_text(errors)]
