"""Tests for common utilities."""

import asyncio
import logging
import socket

import pytest

from shorturl.lib.common.validators import (
    extract_candidate_url,
    extract_hostname,
    parse_short_url,
    validate_url,
)
from shorturl.lib.common.logging_config import mask_credentials, setup_logging
from shorturl.lib.errors import InvalidUrlError


class TestExtractHostname:
    """Test URL shape checks."""

    def test_valid_urls(self):
        assert extract_hostname("https://example.com") == "example.com"
        assert extract_hostname("http://example.com/path") == "example.com"
        assert extract_hostname("https://sub.example.com:8080/path?query=value") == "sub.example.com"
        assert extract_hostname("http://user:pw@Example.COM/") == "example.com"
        assert extract_hostname("http://[::1]:8000/") == "::1"

    @pytest.mark.parametrize("candidate", [
        "",
        None,
        42,
        "not a url",
        "example.com",
        "ftp://example.com",
        "mailto:someone@example.com",
        "javascript:alert(1)",
        "http://",
        "https:///path-only",
        "http://[::1",
        "https://example.com/a\x00b",
        "https://example.com/\udc80",
    ])
    def test_invalid_urls(self, candidate):
        with pytest.raises(InvalidUrlError) as exc_info:
            extract_hostname(candidate)

        assert str(exc_info.value) == "invalid url"
        assert exc_info.value.reason


class TestValidateUrl:
    """Test full validation including name lookup."""

    async def test_resolvable(self, resolver):
        url = "https://example.com/a?b=c"

        assert await validate_url(url, resolver) == url
        assert resolver.lookups == ["example.com"]

    async def test_unresolvable_collapses_to_invalid_url(self, resolver):
        with pytest.raises(InvalidUrlError) as exc_info:
            await validate_url("https://nowhere.invalid", resolver)

        assert str(exc_info.value) == "invalid url"
        assert isinstance(exc_info.value.__cause__, socket.gaierror)

    async def test_malformed_url_skips_lookup(self, resolver):
        with pytest.raises(InvalidUrlError):
            await validate_url("ftp://example.com", resolver)

        assert resolver.lookups == []

    async def test_network_error(self):
        async def broken(hostname):
            raise OSError("network unreachable")

        with pytest.raises(InvalidUrlError, match="invalid url"):
            await validate_url("https://example.com", broken)

    async def test_idna_error(self):
        async def rejects_label(hostname):
            raise UnicodeError("label too long")

        with pytest.raises(InvalidUrlError):
            await validate_url("https://example.com", rejects_label)

    async def test_lookup_timeout(self):
        async def hangs(hostname):
            await asyncio.sleep(10)

        with pytest.raises(InvalidUrlError):
            await validate_url("https://example.com", hangs, timeout=0.01)


class TestParseShortUrl:

    @pytest.mark.parametrize("raw,expected", [
        ("1", 1.0),
        ("42", 42.0),
        (" 7 ", 7.0),
        ("3.0", 3.0),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("-4", -4.0),
        ("0x10", 16.0),
        ("0b11", 3.0),
        ("", 0.0),
    ])
    def test_numbers(self, raw, expected):
        assert parse_short_url(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1a", "inf", "-Infinity", "nan", "1_0", "0xZZ", "0x" + "f" * 300])
    def test_not_finite_numbers(self, raw):
        with pytest.raises(InvalidUrlError):
            parse_short_url(raw)


class TestExtractCandidateUrl:

    def test_field_priority(self):
        body = {"input": "c", "original_url": "b", "url": "a"}
        assert extract_candidate_url(body) == "a"

        body = {"input": "c", "original_url": "b"}
        assert extract_candidate_url(body) == "b"

        assert extract_candidate_url({"input": "c"}) == "c"

    def test_empty_value_falls_through(self):
        assert extract_candidate_url({"url": "", "input": "c"}) == "c"

    def test_missing(self):
        assert extract_candidate_url(None) is None
        assert extract_candidate_url({}) is None
        assert extract_candidate_url({"link": "https://example.com"}) is None

    def test_non_string_value(self):
        assert extract_candidate_url({"url": 123}) is None
        assert extract_candidate_url({"url": ["https://example.com"]}) is None


class TestLogging:

    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "shorturl.log"

        logger = setup_logging(level="warning", log_file=str(log_file))
        logger.warning("disk check")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
        assert "disk check" in log_file.read_text()

    def test_setup_logging_unknown_level(self):
        logger = setup_logging(level="chatty")
        assert logger.level == logging.INFO

    def test_module_loggers_propagate(self):
        logger = setup_logging(level="DEBUG")
        child = logging.getLogger("shorturl.lib.service")

        assert child.getEffectiveLevel() == logging.DEBUG
        assert logger.name == "shorturl"

    def test_mask_credentials(self):
        assert mask_credentials("postgresql://app:s3cret@db:5432/urls") == "postgresql://app:***@db:5432/urls"
        assert mask_credentials("redis://localhost:6379/0") == "redis://localhost:6379/0"
