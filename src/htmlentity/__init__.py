"""HTML entity encoding and decoding.

A never-fail codec between raw bytes and HTML entity-escaped text. Characters
selected by a character set are written as named, decimal or hexadecimal
references; decoding resolves named and numeric references and passes
anything malformed through unchanged.

Progressive API Disclosure:
- Level 1: Simple functions - encode(), decode(), encode_filter(), encode_with()
- Level 2: Configured codec - HTMLEntityCodec with CodecConfig
- Level 3: Building blocks - EntityTable, EntityDecoder, CodedData units
"""

__version__ = "0.1.0"
__author__ = "htmlentity developers"

# Level 1: Simple functions
from .entity import (
    CharacterSet,
    EncodeMode,
    decode,
    encode,
    encode_filter,
    encode_with,
)

# Level 2: Configured codec
from .api import HTMLEntityCodec
from .shared.config import CodecConfig, ConfigError, ConfigValidationError

# Level 3: Building blocks and result objects
from .entity import ENTITY_TABLE, EntityDecoder, EntityRecord, EntityTable
from .shared import CodedData, CodedUnit, InvalidEncodingError, UnitOrigin

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "encode",
    "decode",
    "encode_filter",
    "encode_with",
    "CharacterSet",
    "EncodeMode",

    # Level 2: Configured codec
    "HTMLEntityCodec",
    "CodecConfig",
    "ConfigError",
    "ConfigValidationError",

    # Level 3: Building blocks and result objects
    "ENTITY_TABLE",
    "EntityDecoder",
    "EntityRecord",
    "EntityTable",
    "CodedData",
    "CodedUnit",
    "InvalidEncodingError",
    "UnitOrigin",
]
