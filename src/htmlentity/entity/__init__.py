"""Entity layer: reference table, character set policy, encoder and decoder."""

from .charset import CharacterSet, should_escape
from .decoder import DecoderState, EntityDecoder, decode
from .encoder import (
    EncodeMode,
    encode,
    encode_filter,
    encode_with,
    render_reference,
)
from .table import (
    ENTITY_TABLE,
    EntityRecord,
    EntityTable,
    lookup_by_codepoint,
    lookup_by_name,
)

__all__ = [
    "CharacterSet",
    "should_escape",
    "DecoderState",
    "EntityDecoder",
    "decode",
    "EncodeMode",
    "encode",
    "encode_filter",
    "encode_with",
    "render_reference",
    "ENTITY_TABLE",
    "EntityRecord",
    "EntityTable",
    "lookup_by_codepoint",
    "lookup_by_name",
]
