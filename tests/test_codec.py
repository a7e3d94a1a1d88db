"""Tests for mimetree.codec."""

from __future__ import annotations

import base64
import quopri

import pytest

from mimetree.codec import (
    TransferEncoding,
    as_text,
    decode_charset,
    decode_mime_words,
    decode_transfer,
    normalize_charset,
)
from mimetree.errors import CharsetDecodeError, TransferDecodeError


class TestDecodeTransferBase64:
    def test_decodes(self):
        encoded = base64.b64encode(b"hello world")
        assert decode_transfer(TransferEncoding.BASE64, encoded) == b"hello world"

    def test_accepts_plain_int_code(self):
        assert decode_transfer(3, b"aGk=") == b"hi"

    def test_ignores_line_breaks(self):
        encoded = base64.encodebytes(b"x" * 200)
        assert b"\n" in encoded
        assert decode_transfer(TransferEncoding.BASE64, encoded) == b"x" * 200

    def test_tolerates_missing_padding(self):
        assert decode_transfer(TransferEncoding.BASE64, b"aGk") == b"hi"

    def test_invalid_length_fails(self):
        with pytest.raises(TransferDecodeError):
            decode_transfer(TransferEncoding.BASE64, b"A")

    def test_decoding_to_nothing_fails(self):
        with pytest.raises(TransferDecodeError):
            decode_transfer(TransferEncoding.BASE64, b"====")

    def test_empty_input_is_empty(self):
        assert decode_transfer(TransferEncoding.BASE64, b"") == b""


class TestDecodeTransferQuotedPrintable:
    def test_decodes_escapes(self):
        assert decode_transfer(TransferEncoding.QUOTED_PRINTABLE, b"caf=C3=A9") == b"caf\xc3\xa9"

    def test_joins_soft_line_breaks(self):
        result = decode_transfer(TransferEncoding.QUOTED_PRINTABLE, b"hello=\r\nworld")
        assert result == b"helloworld"

    def test_decoding_to_nothing_fails(self):
        with pytest.raises(TransferDecodeError):
            decode_transfer(TransferEncoding.QUOTED_PRINTABLE, b"=\r\n")


class TestDecodeTransferPassThrough:
    @pytest.mark.parametrize("code", [0, 1, 2, 5, 42])
    def test_identity_encodings(self, code: int):
        assert decode_transfer(code, b"=C3=A9 aGk=") == b"=C3=A9 aGk="


class TestDecodeCharset:
    @pytest.mark.parametrize("name", ["UTF-8", "utf8", "US-ASCII", "ascii", "ANSI", "us_ansi"])
    def test_utf8_family_passes_through(self, name: str):
        assert decode_charset(name, "élève".encode()) == "élève"

    def test_pass_through_keeps_invalid_bytes(self):
        text = decode_charset("US-ASCII", b"a\xffb")
        assert text.encode("utf-8", "surrogateescape") == b"a\xffb"

    @pytest.mark.parametrize("name", ["ISO-8859-1", "latin1", "L1", "IBM819"])
    def test_latin1_aliases(self, name: str):
        assert decode_charset(name, b"caf\xe9") == "café"

    def test_codec_registry(self):
        assert decode_charset("WINDOWS-1252", b"\x80") == "€"
        assert decode_charset("SHIFT_JIS", "日本".encode("shift_jis")) == "日本"

    def test_cp_dash_spelling(self):
        assert decode_charset("CP-1252", b"\x80") == "€"

    def test_blank_charset_passes_through(self):
        assert decode_charset("  ", b"plain") == "plain"

    def test_empty_data(self):
        assert decode_charset("X-UNKNOWN", b"") == ""

    def test_unknown_charset_fails(self):
        with pytest.raises(CharsetDecodeError):
            decode_charset("X-UNKNOWN", b"abc")

    @pytest.mark.parametrize("name", ["X\x00Y", "UTF-16\x00", "CP-\x00"])
    def test_invalid_codec_name_fails_cleanly(self, name: str):
        with pytest.raises(CharsetDecodeError):
            decode_charset(name, b"a" * 80 + b"..\xff")

    def test_strict_decoding_failure(self):
        with pytest.raises(CharsetDecodeError):
            decode_charset("UTF-16", b"a")

    def test_normalize_charset(self):
        assert normalize_charset("iso-8859_1") == "ISO88591"


class TestAsText:
    def test_round_trips_arbitrary_bytes(self):
        raw = bytes(range(256))
        assert as_text(raw).encode("utf-8", "surrogateescape") == raw


class TestDecodeMimeWords:
    def test_quoted_word(self):
        assert decode_mime_words("=?utf-8?q?caf=C3=A9?=") == "café"

    def test_base64_word(self):
        word = "=?UTF-8?B?" + base64.b64encode("naïve".encode()).decode() + "?="
        assert decode_mime_words(word) == "naïve"

    def test_latin1_word(self):
        assert decode_mime_words("=?iso-8859-1?q?caf=E9?=") == "café"

    def test_mixed_with_plain_text(self):
        assert decode_mime_words("=?utf-8?q?caf=C3=A9?= menu") == "café menu"

    def test_plain_text_unchanged(self):
        assert decode_mime_words("report.pdf") == "report.pdf"

    def test_unknown_charset_keeps_raw(self):
        raw = "=?x-bogus?q?abc?="
        assert decode_mime_words(raw) == raw

    def test_backslashes_in_plain_runs_kept(self):
        assert decode_mime_words("=?utf-8?q?caf=C3=A9?= \\u00e9 C:\\tmp") == "café \\u00e9 C:\\tmp"

    def test_none_and_empty(self):
        assert decode_mime_words(None) == ""
        assert decode_mime_words("") == ""


class TestPipelineRoundTrip:
    ORIGINAL = "Grüße, naïve ☃ façade ¡olé!"

    def test_quoted_printable(self):
        encoded = quopri.encodestring(self.ORIGINAL.encode("utf-8"))
        decoded = decode_transfer(TransferEncoding.QUOTED_PRINTABLE, encoded)
        assert decode_charset("UTF-8", decoded) == self.ORIGINAL

    def test_base64(self):
        encoded = base64.encodebytes(self.ORIGINAL.encode("utf-8"))
        decoded = decode_transfer(TransferEncoding.BASE64, encoded)
        assert decode_charset("UTF-8", decoded) == self.ORIGINAL
