"""Tests for percent-decoding (cgikit._percent)."""

from urllib.parse import quote

import pytest

from cgikit import unquote, unquote_plus


class TestUnquote:
    def test_plain_bytes_unchanged(self) -> None:
        assert unquote(b"hello") == b"hello"

    def test_empty(self) -> None:
        assert unquote(b"") == b""

    def test_single_escape(self) -> None:
        assert unquote(b"a%20b") == b"a b"

    def test_hex_is_case_insensitive(self) -> None:
        assert unquote(b"%2f%2F%aB") == b"//\xab"

    def test_plus_is_kept(self) -> None:
        assert unquote(b"a+b") == b"a+b"

    def test_escape_at_start_and_end(self) -> None:
        assert unquote(b"%41bc%44") == b"AbcD"

    def test_never_longer_than_input(self) -> None:
        data = b"%41%zz%4%"
        assert len(unquote(data)) <= len(data)

    def test_utf8_sequence(self) -> None:
        assert unquote(quote("café").encode()).decode("utf-8") == "café"

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"%zz", b"%zz"),
            (b"%g1x", b"%g1x"),
            (b"50%", b"50%"),
            (b"%4", b"%4"),
            (b"%%41", b"%%41"),
        ],
    )
    def test_malformed_escape_copied_through(self, data: bytes, expected: bytes) -> None:
        assert unquote(data) == expected

    def test_bad_escape_consumes_two_bytes(self) -> None:
        # "%%4" is one bad escape; the following "1" is plain text.
        assert unquote(b"%%41") == b"%%41"
        assert unquote(b"%x%41") == b"%x%41"


class TestUnquotePlus:
    def test_plus_becomes_space(self) -> None:
        assert unquote_plus(b"hello+world") == b"hello world"

    def test_plus_without_escapes(self) -> None:
        assert unquote_plus(b"a+b+c") == b"a b c"

    def test_encoded_plus_stays_plus(self) -> None:
        assert unquote_plus(b"1%2B1") == b"1+1"

    def test_mixed(self) -> None:
        assert unquote_plus(b"x+%3D+y%21") == b"x = y!"
