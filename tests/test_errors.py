"""Tests for parse errors and error collection."""

import logging

import pytest

from wiredialer.errors import (
    AddressFormatError,
    ConfigError,
    DuplicateSectionError,
    EncodingError,
    ErrorCollector,
    IncompleteConfigurationError,
    InvalidKeyError,
    MalformedLineError,
    ParseFailure,
)


class TestConfigErrors:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [
            DuplicateSectionError("[Peer]"),
            MalformedLineError("garbage"),
            InvalidKeyError("Baddress", "[Interface]"),
            EncodingError("PrivateKey", "%%%"),
            AddressFormatError("DNS", "1.1.1"),
            IncompleteConfigurationError(["Endpoint"]),
        ],
    )
    def test_hierarchy(self, error: ConfigError) -> None:
        """Test that every parse error is a ConfigError and a ValueError."""
        assert isinstance(error, ConfigError)
        assert isinstance(error, ValueError)

    def test_message_without_line_number(self) -> None:
        """Test string representation without a line number."""
        error = InvalidKeyError("Baddress", "[Interface]")
        assert str(error) == "Invalid key Baddress in section [Interface]"

    def test_message_with_line_number(self) -> None:
        """Test string representation with a line number."""
        error = DuplicateSectionError("[Peer]", line_number=7)
        assert str(error) == "line 7: Only one [Peer] section is supported"
        assert error.line_number == 7

    def test_malformed_line_verbatim(self) -> None:
        """Test that the offending line is kept unchanged."""
        error = MalformedLineError("  no separator here  ")
        assert error.line == "  no separator here  "
        assert str(error) == "Invalid line in config:   no separator here  "

    def test_encoding_error_hides_value(self) -> None:
        """Test that key material is kept off the message."""
        error = EncodingError("PublicKey", "c2VjcmV0")
        assert error.value == "c2VjcmV0"
        assert "c2VjcmV0" not in str(error)
        assert "PublicKey" in str(error)

    def test_address_format_error(self) -> None:
        """Test that the key and offending value are reported."""
        error = AddressFormatError("Address", "3.2.1/16")
        assert str(error) == "Error parsing Address value '3.2.1/16'"

    def test_incomplete_lists_missing(self) -> None:
        """Test that missing keys are listed in the message."""
        error = IncompleteConfigurationError(["PrivateKey", "DNS"])
        assert error.missing == ["PrivateKey", "DNS"]
        assert str(error).endswith("missing: PrivateKey, DNS")
        assert error.line_number is None


class TestParseFailure:
    """Tests for ParseFailure dataclass."""

    def test_string_without_exception(self) -> None:
        """Test string representation without exception."""
        failure = ParseFailure(source="wg0.conf", message="Cannot read configuration file")
        assert str(failure) == "[wg0.conf] Cannot read configuration file"

    def test_string_with_exception(self) -> None:
        """Test string representation with exception."""
        failure = ParseFailure(
            source="wg0.conf",
            message="Invalid configuration",
            exception=MalformedLineError("garbage", line_number=3),
        )
        assert str(failure) == (
            "[wg0.conf] Invalid configuration: line 3: Invalid line in config: garbage"
        )


class TestErrorCollector:
    """Tests for ErrorCollector."""

    def test_empty_collector(self) -> None:
        """Test empty collector has no errors."""
        collector = ErrorCollector()
        assert not collector.has_errors()
        assert collector.get_error_count() == 0

    def test_add_error(self) -> None:
        """Test adding an error."""
        collector = ErrorCollector()
        collector.add_error(source="wg0.conf", message="Invalid configuration")

        assert collector.has_errors()
        assert collector.get_error_count() == 1
        assert collector.errors[0].source == "wg0.conf"
        assert collector.errors[0].message == "Invalid configuration"

    def test_has_failures_of(self) -> None:
        """Test looking up failures by exception type."""
        collector = ErrorCollector()
        collector.add_error("a.conf", "Cannot read", FileNotFoundError("a.conf"))

        assert collector.has_failures_of(OSError)
        assert not collector.has_failures_of(ConfigError)

        collector.add_error("b.conf", "Invalid", InvalidKeyError("Foo", "None"))
        assert collector.has_failures_of(ConfigError)

    def test_errors_logged_immediately(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that errors are logged immediately when added."""
        collector = ErrorCollector()

        with caplog.at_level(logging.ERROR):
            collector.add_error(source="wg0.conf", message="Immediate error")

        assert "[wg0.conf] Immediate error" in caplog.text

    def test_log_summary_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test log summary with no errors."""
        collector = ErrorCollector()
        with caplog.at_level(logging.INFO):
            collector.log_summary()
        assert "parsed with no errors" in caplog.text

    def test_log_summary_with_errors(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test log summary with errors."""
        collector = ErrorCollector()
        collector.add_error("wg0.conf", "Invalid configuration", DuplicateSectionError("[Peer]"))
        collector.add_error("wg1.conf", "Cannot read configuration file")

        with caplog.at_level(logging.ERROR):
            collector.log_summary()

        assert "CONFIGURATION ERROR SUMMARY" in caplog.text
        assert "Total errors: 2" in caplog.text
        assert "Source: wg0.conf" in caplog.text
        assert "Source: wg1.conf" in caplog.text
        assert "Only one [Peer] section is supported" in caplog.text
