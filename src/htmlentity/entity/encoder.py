"""HTML entity encoder.

Walks the input one code point at a time, asks a policy whether the character
should be escaped and, if so, in which form, and renders the reference.
Characters that stay unescaped and bytes that are not valid UTF-8 are copied
to the output unchanged, so encoding never fails.
"""

from enum import Enum
from typing import Callable, Optional, Tuple

from htmlentity.character import ByteInput, coerce_bytes, iter_scalars
from htmlentity.shared.result import CodedData, UnitOrigin

from .charset import CharacterSet, should_escape
from .table import ENTITY_TABLE, EntityTable

CharPredicate = Callable[[str], bool]
ModeChooser = Callable[[str], Optional["EncodeMode"]]

# (mode, named form allowed) for a character that gets escaped
_Decision = Optional[Tuple["EncodeMode", bool]]


class EncodeMode(Enum):
    """Reference format used for escaped characters."""

    NAMED = "named"                        # &name;, hex when no name exists
    DECIMAL = "decimal"                    # &#60;
    HEX = "hex"                            # &#x3c;
    NAMED_OR_DECIMAL = "named_or_decimal"  # &name;, else &#60;
    NAMED_OR_HEX = "named_or_hex"          # &name;, else &#x3c;

    @property
    def uses_names(self) -> bool:
        return self not in (EncodeMode.DECIMAL, EncodeMode.HEX)

    @property
    def numeric_fallback(self) -> "EncodeMode":
        """Numeric mode used when no name applies."""
        if self in (EncodeMode.DECIMAL, EncodeMode.NAMED_OR_DECIMAL):
            return EncodeMode.DECIMAL
        return EncodeMode.HEX

    @classmethod
    def from_name(cls, name: str) -> "EncodeMode":
        """Parse a mode name such as ``named-or-hex`` or ``DECIMAL``.

        Raises:
            ValueError: If the name matches no mode
        """
        key = name.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown encode mode: {name}")


def render_reference(
    codepoint: int,
    mode: EncodeMode,
    allow_named: bool = True,
    table: EntityTable = ENTITY_TABLE,
) -> str:
    """Render a single code point as an entity reference.

    Args:
        codepoint: Unicode scalar value to escape
        mode: Reference format
        allow_named: Whether the named form may be used
        table: Entity table for name lookup

    Returns:
        Reference text such as ``&lt;``, ``&#60;`` or ``&#x3c;``
    """
    if mode.uses_names and allow_named:
        name = table.lookup_by_codepoint(codepoint)
        if name is not None:
            return f"&{name};"
    if mode.numeric_fallback is EncodeMode.DECIMAL:
        return f"&#{codepoint};"
    return f"&#x{codepoint:x};"


def _encode(
    data: ByteInput,
    decide: Callable[[int], _Decision],
    table: EntityTable,
) -> CodedData:
    raw = coerce_bytes(data)
    result = CodedData()
    pending = bytearray()
    malformed = 0

    for segment in iter_scalars(raw):
        chunk = raw[segment.start:segment.end]
        if segment.codepoint is None:
            malformed += 1
            pending += chunk
            continue

        decision = decide(segment.codepoint)
        if decision is None:
            pending += chunk
            continue

        if pending:
            result.append_literal(bytes(pending))
            pending.clear()
        mode, allow_named = decision
        reference = render_reference(segment.codepoint, mode, allow_named, table)
        result.append_replacement(
            reference.encode("ascii"), UnitOrigin.ENCODED, chunk
        )

    if pending:
        result.append_literal(bytes(pending))

    result.statistics = {
        "input_bytes": len(raw),
        "output_bytes": sum(len(unit) for unit in result.units),
        "encoded_count": result.encoded_count,
        "malformed_sequences": malformed,
    }
    return result


def encode(
    data: ByteInput,
    mode: EncodeMode = EncodeMode.NAMED,
    charset: CharacterSet = CharacterSet.SPECIAL_CHARS,
    table: EntityTable = ENTITY_TABLE,
) -> CodedData:
    """Escape the characters of ``data`` selected by ``charset``.

    Args:
        data: Raw bytes (text is UTF-8 encoded first)
        mode: Reference format for escaped characters
        charset: Characters to escape
        table: Entity table for name lookup

    Returns:
        CodedData with Literal and Encoded units

    Examples:
        >>> encode("<b>", EncodeMode.NAMED, CharacterSet.HTML).to_text()
        '&lt;b&gt;'
        >>> encode("世", EncodeMode.NAMED_OR_HEX, CharacterSet.NON_ASCII).to_text()
        '&#x4e16;'
    """
    choice = (mode, True)

    def decide(codepoint: int) -> _Decision:
        if should_escape(codepoint, charset):
            return choice
        return None

    return _encode(data, decide, table)


def encode_filter(
    data: ByteInput,
    should_encode: CharPredicate,
    mode: EncodeMode = EncodeMode.NAMED,
    exclude_named: Optional[CharPredicate] = None,
    table: EntityTable = ENTITY_TABLE,
) -> CodedData:
    """Escape the characters accepted by a caller-supplied predicate.

    Args:
        data: Raw bytes (text is UTF-8 encoded first)
        should_encode: Called with each character; True escapes it
        mode: Reference format for escaped characters
        exclude_named: Called with each escaped character; True forces the
            numeric form even when a name exists
        table: Entity table for name lookup

    Returns:
        CodedData with Literal and Encoded units
    """
    def decide(codepoint: int) -> _Decision:
        char = chr(codepoint)
        if not should_encode(char):
            return None
        allow_named = exclude_named is None or not exclude_named(char)
        return mode, allow_named

    return _encode(data, decide, table)


def encode_with(
    data: ByteInput,
    choose_mode: ModeChooser,
    table: EntityTable = ENTITY_TABLE,
) -> CodedData:
    """Escape characters using a per-character mode callback.

    Args:
        data: Raw bytes (text is UTF-8 encoded first)
        choose_mode: Called with each character; returns the EncodeMode to
            escape it with, or None to copy it unchanged
        table: Entity table for name lookup

    Returns:
        CodedData with Literal and Encoded units
    """
    def decide(codepoint: int) -> _Decision:
        mode = choose_mode(chr(codepoint))
        if mode is None:
            return None
        return mode, True

    return _encode(data, decide, table)
