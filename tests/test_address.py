"""Tests for address normalization and host extraction."""

import pytest

from iot_status.utils.address import extract_host, is_external_domain, normalize_address


class TestNormalizeAddress:
    """Tests for normalize_address."""

    def test_strips_https_scheme_preserving_case(self) -> None:
        """Scheme is removed, the rest is untouched."""
        assert normalize_address("https://Foo.Bar:80/x") == "Foo.Bar:80/x"

    def test_trims_whitespace(self) -> None:
        """Surrounding whitespace is removed."""
        assert normalize_address("  host  ") == "host"

    @pytest.mark.parametrize("raw", ["HTTP://10.0.0.1", "Http://10.0.0.1", "http://10.0.0.1"])
    def test_scheme_is_case_insensitive(self, raw: str) -> None:
        """Upper/mixed case schemes are stripped too."""
        assert normalize_address(raw) == "10.0.0.1"

    def test_only_leading_scheme_removed(self) -> None:
        """A scheme inside the path is kept."""
        assert normalize_address("10.0.0.1/redirect?to=http://x") == "10.0.0.1/redirect?to=http://x"

    def test_other_schemes_untouched(self) -> None:
        """Only http and https are recognized."""
        assert normalize_address("ftp://10.0.0.1") == "ftp://10.0.0.1"

    def test_empty_string(self) -> None:
        """Empty input never fails."""
        assert normalize_address("   ") == ""


class TestExtractHost:
    """Tests for extract_host."""

    def test_strips_port_and_path(self) -> None:
        """Port and everything after it is dropped."""
        assert extract_host("10.0.0.1:8080/status") == "10.0.0.1"

    def test_strips_path_without_port(self) -> None:
        """Path is dropped when there is no port."""
        assert extract_host("printer.local/index.html") == "printer.local"

    def test_plain_host(self) -> None:
        """Host without port or path is returned as-is."""
        assert extract_host("192.0.2.5") == "192.0.2.5"


class TestIsExternalDomain:
    """Tests for is_external_domain."""

    @pytest.mark.parametrize("host", ["example.com", "wiki.example.org", "cdn.example.net"])
    def test_public_domains(self, host: str) -> None:
        """.com/.org/.net hosts are external."""
        assert is_external_domain(host) is True

    @pytest.mark.parametrize("host", ["10.0.0.1", "printer.local", "kiosk-3.lan"])
    def test_local_hosts(self, host: str) -> None:
        """LAN hosts are not external."""
        assert is_external_domain(host) is False
