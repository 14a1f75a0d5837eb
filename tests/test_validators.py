"""Tests for input predicates."""

import pytest

from core.validators import is_non_empty, is_valid_url


class TestIsValidUrl:
    @pytest.mark.parametrize(
        "value",
        [
            "http://example.com",
            "https://example.com/very/long/path?q=1#frag",
            "HTTPS://EXAMPLE.COM",
            "http://localhost:8080/api",
            "  https://example.com  ",
        ],
    )
    def test_accepts_absolute_http_urls(self, value):
        assert is_valid_url(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "not a url",
            "ftp://example.com",
            "mailto:someone@example.com",
            "example.com",
            "/relative/path",
            "http://",
            "http:///path",
            "http://exa mple.com",
            "http://[::1",
            "http://example.com:notaport/",
            "",
            "   ",
        ],
    )
    def test_rejects_everything_else(self, value):
        assert is_valid_url(value) is False

    @pytest.mark.parametrize("value", [None, 42, b"http://example.com", ["http://example.com"]])
    def test_non_strings_are_false_not_errors(self, value):
        assert is_valid_url(value) is False


class TestIsNonEmpty:
    def test_trimmed_content_counts(self):
        assert is_non_empty(" abc ") is True

    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None])
    def test_blank(self, value):
        assert is_non_empty(value) is False
