"""Tests for the configured codec API."""

import logging

import pytest

from htmlentity import (
    CharacterSet,
    CodecConfig,
    EncodeMode,
    HTMLEntityCodec,
    InvalidEncodingError,
)


class TestHTMLEntityCodec:
    """Test HTMLEntityCodec with different configurations."""

    def test_default_config(self):
        codec = HTMLEntityCodec()
        assert codec.config == CodecConfig()
        assert codec.encode_text("<a href='x'>") == "&lt;a href=&apos;x&apos;&gt;"

    def test_ascii_safe(self):
        codec = HTMLEntityCodec(CodecConfig.ascii_safe())
        assert codec.encode_text("café <b>") == "caf&eacute; &lt;b&gt;"
        assert codec.encode_text("世") == "&#19990;"

    def test_numeric_only(self):
        codec = HTMLEntityCodec(CodecConfig.numeric_only())
        assert codec.encode_text("a<") == "&#x61;&#x3c;"

    def test_exclude_named(self):
        config = CodecConfig(
            mode=EncodeMode.NAMED_OR_DECIMAL,
            exclude_named=frozenset("'"),
        )
        codec = HTMLEntityCodec(config)
        assert codec.encode_text("<'>") == "&lt;&#39;&gt;"

    def test_encode_returns_coded_data(self):
        codec = HTMLEntityCodec(CodecConfig(charset=CharacterSet.NON_ASCII))
        result = codec.encode(b"\xc3\xa9t\xc3\xa9")
        assert result.encoded_count == 2
        assert result.to_bytes() == b"&eacute;t&eacute;"

    def test_decode(self):
        codec = HTMLEntityCodec()
        assert codec.decode_text("caf&eacute; &#x4e2d;") == "café 中"
        assert codec.decode("&lt;").decoded_count == 1

    def test_decode_text_strict_error(self):
        codec = HTMLEntityCodec()
        with pytest.raises(InvalidEncodingError):
            codec.decode_text(b"\xff&lt;")

    def test_decode_text_replace_errors(self):
        codec = HTMLEntityCodec(CodecConfig(errors="replace"))
        assert codec.decode_text(b"\xff&lt;") == "\ufffd<"

    def test_logs_statistics(self, caplog):
        codec = HTMLEntityCodec(correlation_id="batch-7")
        with caplog.at_level(logging.DEBUG, logger="htmlentity.api.codec"):
            codec.decode("&lt;&bogus;")

        record = caplog.records[-1]
        assert record.getMessage() == "Completed decode operation"
        assert record.correlation_id == "batch-7"
        assert record.component == "entity_codec"
        assert record.decoded_count == 1
        assert record.abandoned_references == 1

    def test_statistics_logging_disabled(self, caplog):
        codec = HTMLEntityCodec(CodecConfig(log_statistics=False))
        with caplog.at_level(logging.DEBUG, logger="htmlentity.api.codec"):
            codec.encode("<")
        assert not caplog.records
