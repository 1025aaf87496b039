"""Tests for coded data result objects."""

import pytest

from htmlentity.shared import CodedData, CodedUnit, InvalidEncodingError, UnitOrigin


class TestCodedUnit:
    """Test single coded units."""

    def test_literal_flag(self):
        assert CodedUnit(b"a", UnitOrigin.LITERAL, b"a").is_literal
        assert not CodedUnit(b"&lt;", UnitOrigin.ENCODED, b"<").is_literal

    def test_length(self):
        assert len(CodedUnit(b"&lt;", UnitOrigin.ENCODED, b"<")) == 4

    def test_frozen(self):
        unit = CodedUnit(b"a", UnitOrigin.LITERAL)
        with pytest.raises(AttributeError):
            unit.data = b"b"


class TestCodedDataBuilding:
    """Test appending units."""

    def test_literals_merge(self):
        data = CodedData()
        data.append_literal(b"ab")
        data.append_literal(b"cd")

        assert len(data) == 1
        assert data.units[0] == CodedUnit(b"abcd", UnitOrigin.LITERAL, b"abcd")

    def test_empty_literal_ignored(self):
        data = CodedData()
        data.append_literal(b"")
        assert len(data) == 0

    def test_replacement_breaks_literal_run(self):
        data = CodedData()
        data.append_literal(b"a")
        data.append_replacement(b"<", UnitOrigin.DECODED, b"&lt;")
        data.append_literal(b"b")

        assert data.origins() == (
            UnitOrigin.LITERAL, UnitOrigin.DECODED, UnitOrigin.LITERAL,
        )
        assert data.decoded_count == 1
        assert data.literal_count == 2
        assert data.replaced_count == 1
        assert data.source_length == 6


class TestCodedDataConversion:
    """Test byte and text conversions."""

    def _make(self, *chunks):
        data = CodedData()
        for chunk in chunks:
            data.append_replacement(chunk, UnitOrigin.DECODED, b"&x;")
        return data

    def test_bytes(self):
        data = self._make(b"a", "é".encode())
        assert data.to_bytes() == b"a\xc3\xa9"
        assert bytes(data) == b"a\xc3\xa9"

    def test_text_characters_codepoints(self):
        data = self._make("中".encode(), b"a")
        assert data.to_text() == "中a"
        assert data.to_characters() == ["中", "a"]
        assert data.to_codepoints() == [0x4E2D, 0x61]

    def test_multibyte_split_across_units(self):
        encoded = "é".encode()
        data = self._make(encoded[:1], encoded[1:])
        assert data.to_text() == "é"

    def test_invalid_utf8_raises(self):
        data = self._make(b"ok", b"\xff")
        with pytest.raises(InvalidEncodingError) as exc_info:
            data.to_text()

        assert exc_info.value.position == 2
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_characters_raise_too(self):
        data = self._make(b"\xc3")
        with pytest.raises(InvalidEncodingError):
            data.to_characters()

    def test_failure_does_not_invalidate(self):
        data = self._make(b"a\xff")
        with pytest.raises(InvalidEncodingError):
            data.to_text()
        assert data.to_bytes() == b"a\xff"
        assert data.to_text("replace") == "a\ufffd"

    def test_empty(self):
        data = CodedData()
        assert data.to_text() == ""
        assert data.to_characters() == []
        assert list(data) == []
