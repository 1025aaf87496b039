"""Configuration for the HTML entity codec.

CodecConfig bundles the encode mode, character set and conversion options used
by HTMLEntityCodec and the command line tool. Instances are immutable and
validate themselves on construction.
"""

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from htmlentity.entity.charset import CharacterSet
from htmlentity.entity.encoder import EncodeMode

VALID_ERROR_HANDLERS = ("strict", "replace", "ignore", "surrogateescape")
# Containers accepted for exclude_named; a string counts as a set of characters
EXCLUDE_NAMED_TYPES = (str, list, tuple, set, frozenset)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class CodecConfig:
    """Immutable configuration for encode and decode operations.

    Attributes:
        mode: Reference format for escaped characters
        charset: Characters the encoder escapes
        exclude_named: Characters always written as numeric references
        errors: Error handler for converting coded bytes back to text
        log_statistics: Whether operation summaries are logged
        name: Optional preset name
        description: Optional human readable description
    """

    mode: EncodeMode = EncodeMode.NAMED
    charset: CharacterSet = CharacterSet.SPECIAL_CHARS
    exclude_named: FrozenSet[str] = field(default_factory=frozenset)
    errors: str = "strict"
    log_statistics: bool = True

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate codec configuration."""
        if not isinstance(self.mode, EncodeMode):
            raise ConfigValidationError(
                f"mode must be an EncodeMode, got {self.mode!r}",
                field_name="mode",
                suggestions=[member.value for member in EncodeMode],
            )
        if not isinstance(self.charset, CharacterSet):
            raise ConfigValidationError(
                f"charset must be a CharacterSet, got {self.charset!r}",
                field_name="charset",
                suggestions=[member.value for member in CharacterSet],
            )
        if not isinstance(self.exclude_named, EXCLUDE_NAMED_TYPES):
            raise ConfigValidationError(
                "exclude_named must be a string or a collection of characters, "
                f"got {type(self.exclude_named).__name__}",
                field_name="exclude_named",
            )
        if any(not isinstance(char, str) or len(char) != 1
               for char in self.exclude_named):
            raise ConfigValidationError(
                "exclude_named must contain single characters",
                field_name="exclude_named",
            )
        if self.errors not in VALID_ERROR_HANDLERS:
            raise ConfigValidationError(
                f"errors must be one of {list(VALID_ERROR_HANDLERS)}",
                field_name="errors",
                suggestions=list(VALID_ERROR_HANDLERS),
            )
        if not isinstance(self.log_statistics, bool):
            raise ConfigValidationError(
                f"log_statistics must be a boolean, got {self.log_statistics!r}",
                field_name="log_statistics",
            )
        # Sets passed by callers are frozen so the config stays hashable
        if not isinstance(self.exclude_named, frozenset):
            object.__setattr__(self, "exclude_named", frozenset(self.exclude_named))

    def override(self, **kwargs: Any) -> "CodecConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = CodecConfig()
            >>> config.override(mode=EncodeMode.HEX).mode
            <EncodeMode.HEX: 'hex'>
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.name
            elif isinstance(value, frozenset):
                value = sorted(value)
            result[f.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        """Create configuration from a dictionary.

        Enum fields accept member names (``NAMED_OR_HEX``) or values
        (``named-or-hex``).

        Raises:
            ConfigValidationError: On unknown fields or invalid values
        """
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )

        values = dict(data)
        try:
            if isinstance(values.get("mode"), str):
                values["mode"] = EncodeMode.from_name(values["mode"])
            if isinstance(values.get("charset"), str):
                values["charset"] = CharacterSet.from_name(values["charset"])
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "CodecConfig":
        """Create configuration from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def html_safe(cls) -> "CodecConfig":
        """Escape the five markup characters with named references."""
        return cls(
            mode=EncodeMode.NAMED,
            charset=CharacterSet.SPECIAL_CHARS,
            name="html_safe",
            description="Named references for characters reserved in markup",
        )

    @classmethod
    def ascii_safe(cls) -> "CodecConfig":
        """Produce pure ASCII output, preferring names over decimal codes."""
        return cls(
            mode=EncodeMode.NAMED_OR_DECIMAL,
            charset=CharacterSet.HTML_AND_NON_ASCII,
            name="ascii_safe",
            description="ASCII-only output with markup characters escaped",
        )

    @classmethod
    def numeric_only(cls) -> "CodecConfig":
        """Escape every character as a hexadecimal reference."""
        return cls(
            mode=EncodeMode.HEX,
            charset=CharacterSet.ALL,
            name="numeric_only",
            description="Hexadecimal references for every character",
        )

    @classmethod
    def preset(cls, name: str) -> "CodecConfig":
        """Create a configuration preset by name.

        Raises:
            ConfigValidationError: If the preset does not exist
        """
        presets = {
            "html_safe": cls.html_safe,
            "ascii_safe": cls.ascii_safe,
            "numeric_only": cls.numeric_only,
        }
        if not isinstance(name, str):
            raise ConfigValidationError(
                f"Preset name must be a string, got {name!r}",
                field_name="name",
                suggestions=sorted(presets),
            )
        key = name.strip().lower().replace("-", "_")
        if key not in presets:
            raise ConfigValidationError(
                f"Unknown preset: {name}",
                field_name="name",
                suggestions=sorted(presets),
            )
        return presets[key]()
