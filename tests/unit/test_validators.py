"""Unit tests for input validators."""

import pytest

from ftp_sender.utils.validators import (
    validate_file_path,
    validate_host,
    validate_ip_address,
    validate_port,
    validate_timeout,
)


class TestValidateHost:
    """Tests for host validation."""

    @pytest.mark.parametrize("host", [
        "192.168.1.3",
        "127.0.0.1",
        "localhost",
        "ftp.example.com",
        " ftp.example.com ",
        "::1",
    ])
    def test_valid_hosts(self, host):
        """Test IP addresses and hostnames are accepted."""
        assert validate_host(host) == (True, None)

    @pytest.mark.parametrize("host", ["", "   "])
    def test_empty_host(self, host):
        """Test empty host is rejected."""
        is_valid, error = validate_host(host)
        assert is_valid is False
        assert error == "Host address is required"

    def test_invalid_host(self):
        """Test malformed host is rejected."""
        is_valid, error = validate_host("bad host!")
        assert is_valid is False
        assert "Invalid host" in error

    def test_invalid_ip(self):
        """Test out-of-range octets are not an IP address."""
        is_valid, _ = validate_ip_address("256.1.1.1")
        assert is_valid is False


class TestValidatePort:
    """Tests for port validation."""

    @pytest.mark.parametrize("port", [1, 20, 21, 2121, 65535, "21"])
    def test_valid_ports(self, port):
        assert validate_port(port) == (True, None)

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_out_of_range(self, port):
        is_valid, error = validate_port(port)
        assert is_valid is False
        assert "between 1 and 65535" in error

    def test_not_a_number(self):
        assert validate_port("ftp") == (False, "Port must be a number")


class TestValidateTimeout:
    """Tests for timeout validation."""

    @pytest.mark.parametrize("timeout", [0.5, 30, 30.0, "10"])
    def test_valid_timeouts(self, timeout):
        assert validate_timeout(timeout) == (True, None)

    @pytest.mark.parametrize("timeout", [0, -5.0, float("nan")])
    def test_non_positive(self, timeout):
        is_valid, error = validate_timeout(timeout)
        assert is_valid is False
        assert "greater than 0" in error

    @pytest.mark.parametrize("timeout", [float("inf"), "inf", 1e20, 86401])
    def test_too_large(self, timeout):
        is_valid, error = validate_timeout(timeout)
        assert is_valid is False
        assert "at most 86400 seconds" in error

    def test_upper_bound_accepted(self):
        assert validate_timeout(86400) == (True, None)

    def test_not_a_number(self):
        assert validate_timeout("soon") == (False, "Timeout must be a number")


class TestValidateFilePath:
    """Tests for the file path argument check."""

    def test_present(self):
        assert validate_file_path("./example_file.txt") == (True, None)

    @pytest.mark.parametrize("path", ["", "  "])
    def test_missing(self, path):
        assert validate_file_path(path) == (False, "File path is required")
