"""Main CLI entry point for the htmlentity command-line tool.

Provides ``encode`` and ``decode`` commands that work on raw file bytes (or
standard input) and a ``lookup`` command for inspecting the entity table.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional

from htmlentity import __version__
from htmlentity.api import HTMLEntityCodec
from htmlentity.entity import (
    ENTITY_TABLE,
    CharacterSet,
    EncodeMode,
    decode,
    render_reference,
)
from htmlentity.shared.config import CodecConfig, ConfigError, ConfigValidationError
from htmlentity.shared.logging import get_logger

STDIN_MARKER = "-"


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.codec_config = CodecConfig()

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may hold a ``preset`` name and a ``codec`` object with
        CodecConfig fields; fields override the preset.

        Raises:
            ConfigError: If the file is unreadable or holds invalid settings
        """
        config = cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must hold a JSON object")

        if "preset" in data:
            config.codec_config = CodecConfig.preset(data["preset"])
        codec_data = data.get("codec", {})
        if not isinstance(codec_data, dict):
            raise ConfigValidationError(
                f"\"codec\" in {config_path} must be a JSON object",
                field_name="codec",
            )
        if codec_data:
            merged = config.codec_config.to_dict()
            merged.update(codec_data)
            config.codec_config = CodecConfig.from_dict(merged)
        return config


class EntityProcessor:
    """Core processing logic for CLI operations."""

    def __init__(self, config: CLIConfig) -> None:
        self.config = config
        self.codec = HTMLEntityCodec(config=config.codec_config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def read_inputs(self, paths: List[str], stdin: BinaryIO) -> List[bytes]:
        """Read raw bytes from each path, ``-`` or no path meaning stdin."""
        if not paths:
            return [stdin.read()]
        chunks = []
        for path in paths:
            if path == STDIN_MARKER:
                chunks.append(stdin.read())
            else:
                chunks.append(Path(path).read_bytes())
        return chunks

    def encode_all(self, chunks: List[bytes]) -> bytes:
        results = [self.codec.encode(chunk) for chunk in chunks]
        self.logger.info(
            "Encoded inputs",
            extra={
                "inputs": len(chunks),
                "encoded_count": sum(r.encoded_count for r in results),
            }
        )
        return b"".join(result.to_bytes() for result in results)

    def decode_all(self, chunks: List[bytes]) -> bytes:
        results = [self.codec.decode(chunk) for chunk in chunks]
        self.logger.info(
            "Decoded inputs",
            extra={
                "inputs": len(chunks),
                "decoded_count": sum(r.decoded_count for r in results),
                "abandoned_references": sum(
                    r.statistics.get("abandoned_references", 0) for r in results
                ),
            }
        )
        return b"".join(result.to_bytes() for result in results)


def describe_entity(query: str) -> Optional[Dict[str, Any]]:
    """Describe an entity given as a name, reference, character or ``U+XXXX``.

    Returns:
        Dictionary with the code point, names and reference forms, or None if
        the query matches nothing
    """
    text = query.strip()
    codepoint: Optional[int] = None

    if text.startswith("&") and len(text) > 1:
        # A full reference must resolve to exactly one character
        resolved = decode(text)
        if len(resolved) != 1 or resolved.decoded_count != 1:
            return None
        text = resolved.to_text()
    if text.upper().startswith("U+") and len(text) > 2:
        try:
            codepoint = int(text[2:], 16)
        except ValueError:
            return None
    else:
        codepoint = ENTITY_TABLE.lookup_by_name(text)
        if codepoint is None and len(text) == 1:
            codepoint = ord(text)

    if codepoint is None or not 0 <= codepoint <= 0x10FFFF:
        return None

    return {
        "codepoint": f"U+{codepoint:04X}",
        "character": chr(codepoint) if not 0xD800 <= codepoint <= 0xDFFF else None,
        "names": list(ENTITY_TABLE.aliases(codepoint)),
        "named": render_reference(codepoint, EncodeMode.NAMED_OR_HEX),
        "decimal": render_reference(codepoint, EncodeMode.DECIMAL),
        "hex": render_reference(codepoint, EncodeMode.HEX),
    }


def format_lookup(info: Dict[str, Any], format_type: str) -> str:
    """Format a lookup result for output."""
    if format_type == "json":
        return json.dumps(info, indent=2, ensure_ascii=False)

    names = ", ".join(info["names"]) if info["names"] else "(none)"
    lines = [
        f"Codepoint: {info['codepoint']}",
        f"Names:     {names}",
        f"Named:     {info['named']}",
        f"Decimal:   {info['decimal']}",
        f"Hex:       {info['hex']}",
    ]
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="htmlentity",
        description="Encode and decode HTML entity references"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Encode command
    encode_parser = subparsers.add_parser("encode", help="Escape characters as entities")
    encode_parser.add_argument(
        "paths",
        nargs="*",
        help="Input files ('-' or none for stdin)"
    )
    encode_parser.add_argument(
        "--mode", "-m",
        choices=[mode.value.replace("_", "-") for mode in EncodeMode],
        help="Reference format (default: named)"
    )
    encode_parser.add_argument(
        "--charset", "-s",
        choices=[charset.value.replace("_", "-") for charset in CharacterSet],
        help="Characters to escape (default: special-chars)"
    )
    encode_parser.add_argument(
        "--exclude-named",
        default="",
        metavar="CHARS",
        help="Characters always written as numeric references"
    )
    encode_parser.add_argument(
        "--preset",
        choices=["html-safe", "ascii-safe", "numeric-only"],
        help="Codec configuration preset"
    )
    encode_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    encode_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Resolve entity references")
    decode_parser.add_argument(
        "paths",
        nargs="*",
        help="Input files ('-' or none for stdin)"
    )
    decode_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Lookup command
    lookup_parser = subparsers.add_parser("lookup", help="Show entity table entries")
    lookup_parser.add_argument(
        "query",
        help="Entity name, reference, single character or U+XXXX"
    )
    lookup_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _build_encode_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)
    if args.preset:
        config.codec_config = CodecConfig.preset(args.preset)

    overrides: Dict[str, Any] = {}
    if args.mode:
        overrides["mode"] = EncodeMode.from_name(args.mode)
    if args.charset:
        overrides["charset"] = CharacterSet.from_name(args.charset)
    if args.exclude_named:
        overrides["exclude_named"] = frozenset(args.exclude_named)
    if overrides:
        config.codec_config = config.codec_config.override(**overrides)
    return config


def _write_output(data: bytes, output: Optional[Path]) -> None:
    if output:
        output.write_bytes(data)
        print(f"Results written to {output}", file=sys.stderr)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


def cmd_encode(args: argparse.Namespace) -> int:
    """Handle encode command."""
    try:
        config = _build_encode_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    processor = EntityProcessor(config)
    try:
        chunks = processor.read_inputs(args.paths, sys.stdin.buffer)
        _write_output(processor.encode_all(chunks), args.output)
    except OSError as e:
        processor.logger.error("Failed to process inputs", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Handle decode command."""
    processor = EntityProcessor(CLIConfig())
    try:
        chunks = processor.read_inputs(args.paths, sys.stdin.buffer)
        _write_output(processor.decode_all(chunks), args.output)
    except OSError as e:
        processor.logger.error("Failed to process inputs", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    """Handle lookup command."""
    info = describe_entity(args.query)
    if info is None:
        print(f"No entity matches: {args.query}", file=sys.stderr)
        return 1
    print(format_lookup(info, args.format))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        import logging
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        import logging
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "encode":
            return cmd_encode(args)
        if args.command == "decode":
            return cmd_decode(args)
        if args.command == "lookup":
            return cmd_lookup(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
