"""Tests for the CLI main module."""

import io
import json
from unittest.mock import patch

import pytest

from htmlentity.cli.main import (
    CLIConfig,
    EntityProcessor,
    create_argument_parser,
    describe_entity,
    format_lookup,
    main,
)
from htmlentity.entity import CharacterSet, EncodeMode
from htmlentity.shared.config import CodecConfig, ConfigError, ConfigValidationError


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        config = CLIConfig()
        assert config.codec_config == CodecConfig()

    def test_config_from_file(self, tmp_path):
        config_path = tmp_path / "codec.json"
        config_path.write_text(json.dumps({
            "preset": "ascii-safe",
            "codec": {"mode": "named-or-hex"},
        }))

        config = CLIConfig.from_file(config_path)
        assert config.codec_config.mode is EncodeMode.NAMED_OR_HEX
        assert config.codec_config.charset is CharacterSet.HTML_AND_NON_ASCII

    def test_config_from_nonexistent_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not load"):
            CLIConfig.from_file(tmp_path / "missing.json")

    def test_config_not_an_object(self, tmp_path):
        config_path = tmp_path / "codec.json"
        config_path.write_text("[]")
        with pytest.raises(ConfigError, match="JSON object"):
            CLIConfig.from_file(config_path)

    @pytest.mark.parametrize("codec_value", [5, "hex", ["mode"]])
    def test_codec_section_not_an_object(self, tmp_path, codec_value):
        config_path = tmp_path / "codec.json"
        config_path.write_text(json.dumps({"codec": codec_value}))
        with pytest.raises(ConfigValidationError) as exc_info:
            CLIConfig.from_file(config_path)
        assert exc_info.value.field_name == "codec"

    def test_codec_exclude_named_not_iterable(self, tmp_path):
        config_path = tmp_path / "codec.json"
        config_path.write_text(json.dumps({"codec": {"exclude_named": 5}}))
        with pytest.raises(ConfigValidationError) as exc_info:
            CLIConfig.from_file(config_path)
        assert exc_info.value.field_name == "exclude_named"


class TestEntityProcessor:
    """Test reading and processing inputs."""

    def test_read_inputs_from_stdin(self):
        processor = EntityProcessor(CLIConfig())
        assert processor.read_inputs([], io.BytesIO(b"<x>")) == [b"<x>"]

    def test_read_inputs_mixed(self, tmp_path):
        path = tmp_path / "in.html"
        path.write_bytes(b"file")
        processor = EntityProcessor(CLIConfig())

        chunks = processor.read_inputs([str(path), "-"], io.BytesIO(b"stdin"))
        assert chunks == [b"file", b"stdin"]

    def test_encode_and_decode_all(self):
        processor = EntityProcessor(CLIConfig())
        assert processor.encode_all([b"<", b">"]) == b"&lt;&gt;"
        assert processor.decode_all([b"&lt;", b"&gt;"]) == b"<>"


class TestLookup:
    """Test entity lookup helpers."""

    @pytest.mark.parametrize("query", ["lt", "&lt;", "<", "U+003C", "u+3c", "&#60;"])
    def test_describe_less_than(self, query):
        info = describe_entity(query)
        assert info == {
            "codepoint": "U+003C",
            "character": "<",
            "names": ["lt", "LT"],
            "named": "&lt;",
            "decimal": "&#60;",
            "hex": "&#x3c;",
        }

    def test_describe_unnamed_character(self):
        info = describe_entity("世")
        assert info["names"] == []
        assert info["named"] == "&#x4e16;"

    @pytest.mark.parametrize("query", ["nosuchname", "U+ZZZZ", "U+110000", "&bogus;"])
    def test_describe_no_match(self, query):
        assert describe_entity(query) is None

    def test_format_text(self):
        text = format_lookup(describe_entity("amp"), "text")
        assert "Codepoint: U+0026" in text
        assert "Names:     amp, AMP" in text

    def test_format_json(self):
        data = json.loads(format_lookup(describe_entity("eacute"), "json"))
        assert data["character"] == "é"


class TestArgumentParser:
    """Test argument parsing."""

    def test_encode_arguments(self):
        parser = create_argument_parser()
        args = parser.parse_args([
            "encode", "a.html", "--mode", "named-or-decimal",
            "--charset", "non-ascii", "--exclude-named", "'",
        ])
        assert args.command == "encode"
        assert args.paths == ["a.html"]
        assert args.mode == "named-or-decimal"
        assert args.charset == "non-ascii"
        assert args.exclude_named == "'"

    def test_invalid_mode_rejected(self):
        parser = create_argument_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["encode", "--mode", "octal"])

    def test_lookup_default_format(self):
        args = create_argument_parser().parse_args(["lookup", "amp"])
        assert args.format == "text"


class TestMain:
    """Test main entry point."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_encode_file_to_output(self, tmp_path):
        source = tmp_path / "in.html"
        source.write_bytes("<p>café</p>".encode())
        target = tmp_path / "out.html"

        exit_code = main([
            "encode", str(source), "--preset", "ascii-safe", "-o", str(target),
        ])
        assert exit_code == 0
        assert target.read_bytes() == b"&lt;p&gt;caf&eacute;&lt;/p&gt;"

    def test_encode_to_stdout(self, tmp_path, capsysbinary):
        source = tmp_path / "in.html"
        source.write_bytes(b"a<b")

        assert main(["encode", str(source), "--mode", "decimal"]) == 0
        assert capsysbinary.readouterr().out == b"a&#60;b"

    def test_encode_bad_config_file(self, tmp_path, capsys):
        config_path = tmp_path / "bad.json"
        config_path.write_text("{")

        assert main(["encode", "-c", str(config_path)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    @pytest.mark.parametrize("config_data", [
        {"codec": {"exclude_named": 5}},
        {"codec": 5},
        {"preset": 7},
    ])
    def test_encode_invalid_config_values(self, tmp_path, capsys, config_data):
        """Test that bad values in a config file exit with code 1."""
        config_path = tmp_path / "codec.json"
        config_path.write_text(json.dumps(config_data))
        source = tmp_path / "in.html"
        source.write_bytes(b"<p>")

        assert main(["encode", "--config", str(config_path), str(source)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_decode_from_stdin(self, monkeypatch, capsysbinary):
        stdin = io.TextIOWrapper(io.BytesIO(b"&lt;&#x4e2d;&bogus;"))
        monkeypatch.setattr("sys.stdin", stdin)

        assert main(["decode"]) == 0
        assert capsysbinary.readouterr().out == "<中&bogus;".encode()

    def test_decode_missing_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.html"
        assert main(["decode", str(missing)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_lookup(self, capsys):
        assert main(["lookup", "rarr", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["codepoint"] == "U+2192"
        assert data["names"][0] == "rarr"

    def test_lookup_no_match(self, capsys):
        assert main(["lookup", "nosuchname"]) == 1
        assert "No entity matches" in capsys.readouterr().err

    @patch("htmlentity.cli.main.cmd_lookup", side_effect=KeyboardInterrupt)
    def test_keyboard_interrupt(self, mock_lookup, capsys):
        """Test interrupt exit code."""
        assert main(["lookup", "amp"]) == 130
        assert "interrupted" in capsys.readouterr().err
        mock_lookup.assert_called_once()

    @patch("logging.basicConfig")
    def test_verbose_configures_logging(self, mock_basic_config, capsys):
        assert main(["-v", "lookup", "amp"]) == 0
        mock_basic_config.assert_called_once()
