"""HTML entity decoder with a never-fail state machine.

Scans a byte buffer for ``&`` and tries to read a named (``&lt;``), decimal
(``&#60;``) or hexadecimal (``&#x3c;``) reference after it. A reference that
turns out to be incomplete, unknown or malformed is abandoned: its bytes stay
in the literal output and scanning resumes at the byte that broke it, so every
input byte ends up in exactly one unit.
"""

from enum import Enum, auto

from htmlentity.character import MAX_CODEPOINT, ByteInput, coerce_bytes, is_scalar_value
from htmlentity.shared.result import CodedData, UnitOrigin

from .table import ENTITY_TABLE, EntityTable

SEMICOLON = ord(";")
HASH = ord("#")
HEX_MARKERS = frozenset(b"xX")
DECIMAL_DIGITS = frozenset(b"0123456789")
HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
NAME_CHARS = frozenset(
    b"0123456789"
    b"abcdefghijklmnopqrstuvwxyz"
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

# Numeric values saturate here; anything at or above it is out of range
NUMERIC_LIMIT = MAX_CODEPOINT + 1
REPLACEMENT_CHARACTER = "\ufffd".encode("utf-8")


class DecoderState(Enum):
    """State machine states for reference scanning."""

    SCANNING = auto()   # Copying literal bytes, looking for '&'
    CANDIDATE = auto()  # After '&', reading a name or expecting '#'
    NUMERIC = auto()    # After '&#', expecting 'x', 'X' or a digit
    DECIMAL = auto()    # Reading decimal digits
    HEX = auto()        # Reading hexadecimal digits


class EntityDecoder:
    """Decoder turning entity references back into characters.

    Instances can be reused; each decode call starts from a fresh state.
    """

    def __init__(self, table: EntityTable = ENTITY_TABLE) -> None:
        """Initialize decoder.

        Args:
            table: Entity table used to resolve named references
        """
        self.table = table
        self._reset(b"")

    def _reset(self, data: bytes) -> None:
        self._data = data
        self._result = CodedData()
        self._state = DecoderState.SCANNING
        self._pos = 0
        self._literal_start = 0
        self._ref_start = 0
        self._value = 0
        self._digits = 0
        self._abandoned = 0
        self._replacements = 0

    def decode(self, data: ByteInput) -> CodedData:
        """Decode every entity reference in ``data``.

        Args:
            data: Raw bytes (text is UTF-8 encoded first)

        Returns:
            CodedData with Literal and Decoded units covering all input bytes
        """
        self._reset(coerce_bytes(data))
        total = len(self._data)

        while self._pos < total:
            if self._state is DecoderState.SCANNING:
                self._process_scanning()
                continue

            byte = self._data[self._pos]
            if self._state is DecoderState.CANDIDATE:
                self._process_candidate(byte)
            elif self._state is DecoderState.NUMERIC:
                self._process_numeric(byte)
            else:
                self._process_digits(byte)

        if self._state is not DecoderState.SCANNING:
            # Input ended inside a reference
            self._abandon()
        self._result.append_literal(self._data[self._literal_start:])

        self._result.statistics = {
            "input_bytes": total,
            "output_bytes": sum(len(unit) for unit in self._result.units),
            "decoded_count": self._result.decoded_count,
            "abandoned_references": self._abandoned,
            "replacement_substitutions": self._replacements,
        }
        return self._result

    def _process_scanning(self) -> None:
        next_amp = self._data.find(b"&", self._pos)
        if next_amp == -1:
            self._pos = len(self._data)
            return
        self._ref_start = next_amp
        self._pos = next_amp + 1
        self._state = DecoderState.CANDIDATE

    def _process_candidate(self, byte: int) -> None:
        name_length = self._pos - self._ref_start - 1

        if byte == HASH and name_length == 0:
            self._value = 0
            self._digits = 0
            self._pos += 1
            self._state = DecoderState.NUMERIC
        elif byte in NAME_CHARS:
            if name_length >= self.table.max_name_length:
                self._abandon()
            else:
                self._pos += 1
        elif byte == SEMICOLON and name_length > 0:
            name = self._data[self._ref_start + 1:self._pos].decode("ascii")
            codepoint = self.table.lookup_by_name(name)
            if codepoint is None:
                self._abandon()
            else:
                self._emit(chr(codepoint).encode("utf-8"))
        else:
            self._abandon()

    def _process_numeric(self, byte: int) -> None:
        if byte in HEX_MARKERS:
            self._pos += 1
            self._state = DecoderState.HEX
        elif byte in DECIMAL_DIGITS:
            self._state = DecoderState.DECIMAL
        else:
            self._abandon()

    def _process_digits(self, byte: int) -> None:
        is_hex = self._state is DecoderState.HEX
        digits = HEX_DIGITS if is_hex else DECIMAL_DIGITS

        if byte in digits:
            base = 16 if is_hex else 10
            digit = int(chr(byte), base)
            self._value = min(self._value * base + digit, NUMERIC_LIMIT)
            self._digits += 1
            self._pos += 1
        elif byte == SEMICOLON and self._digits > 0:
            self._emit(self._numeric_bytes(self._value))
        else:
            self._abandon()

    def _numeric_bytes(self, codepoint: int) -> bytes:
        if is_scalar_value(codepoint):
            return chr(codepoint).encode("utf-8")
        self._replacements += 1
        return REPLACEMENT_CHARACTER

    def _emit(self, output: bytes) -> None:
        """Emit a Decoded unit for the reference ending at the current ';'."""
        end = self._pos + 1
        self._result.append_literal(self._data[self._literal_start:self._ref_start])
        self._result.append_replacement(
            output, UnitOrigin.DECODED, self._data[self._ref_start:end]
        )
        self._pos = end
        self._literal_start = end
        self._state = DecoderState.SCANNING

    def _abandon(self) -> None:
        """Give up on the current reference.

        The buffered bytes stay part of the pending literal run and scanning
        resumes at the current byte, which may itself start a new reference.
        """
        self._abandoned += 1
        self._state = DecoderState.SCANNING


def decode(data: ByteInput, table: EntityTable = ENTITY_TABLE) -> CodedData:
    """Replace named and numeric entity references with their characters.

    Args:
        data: Raw bytes (text is UTF-8 encoded first)
        table: Entity table for named references

    Returns:
        CodedData with Literal and Decoded units

    Examples:
        >>> decode("&lt;b&gt;").to_text()
        '<b>'
        >>> decode("&#x4e2d;&#20013;").to_text()
        '中中'
        >>> decode("&notarealentity;").to_text()
        '&notarealentity;'
    """
    return EntityDecoder(table).decode(data)
