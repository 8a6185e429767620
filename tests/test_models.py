"""Tests for the Status/Settings records and their text conversions."""

from __future__ import annotations

import pytest

from cjdnsui.errors import CjdnsUiError, StatusParseError
from cjdnsui.models import (
    Settings,
    Status,
    format_authorized_passwords,
    parse_authorized_passwords,
    parse_port,
    strip_whitespace,
)


class TestParseAuthorizedPasswords:

    def test_strips_interior_whitespace_and_drops_blank_lines(self):
        text = "\n".join(["  abc ", "", "d e f", "   "])
        assert parse_authorized_passwords(text) == ["abc", "def"]

    def test_tabs_and_carriage_returns_are_whitespace(self):
        assert parse_authorized_passwords("a\tb\r\n\t\r\nc") == ["ab", "c"]

    def test_keeps_order_and_duplicates(self):
        assert parse_authorized_passwords("z\na\nz\n") == ["z", "a", "z"]

    def test_empty_text(self):
        assert parse_authorized_passwords("") == []

    def test_strip_whitespace_removes_every_space(self):
        assert strip_whitespace(" p a ss ") == "pass"


class TestFormatAuthorizedPasswords:

    def test_one_password_per_line(self):
        assert format_authorized_passwords(["one", "two"]) == "one\ntwo"

    def test_formatted_text_parses_back(self):
        passwords = ["alpha", "beta", "gamma"]
        assert parse_authorized_passwords(format_authorized_passwords(passwords)) == passwords


class TestParsePort:

    def test_decimal_text(self):
        assert parse_port("11234") == 11234

    def test_negative_port_text_is_still_an_integer(self):
        assert parse_port("-1") == -1

    @pytest.mark.parametrize("text", ["notanumber", "Unknown", "", "12.5", "0x10"])
    def test_non_integer_text_raises(self, text):
        with pytest.raises(StatusParseError):
            parse_port(text)

    def test_parse_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_port("nope")
        assert issubclass(StatusParseError, CjdnsUiError)


class TestRecords:

    def test_settings_defaults_do_not_share_lists(self):
        first = Settings()
        second = Settings()
        first.authorized_passwords.append("x")
        assert second.authorized_passwords == []

    def test_status_equality(self):
        assert Status("fc00::1", "key.k", 1) == Status("fc00::1", "key.k", 1)
