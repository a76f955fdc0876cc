"""Errors raised while parsing WireGuard configuration files.

Every parse failure is terminal: the parser raises one of the exceptions
below and no partial result is produced. The ErrorCollector gathers failures
across several files so the command line front end can check all of them
and report at the end.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Base class for configuration parse errors.

    Attributes:
        line_number: 1-based line of the document where parsing stopped, if known
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"line {self.line_number}: {self.message}"
        return self.message


class DuplicateSectionError(ConfigError):
    """Raised when a second [Interface] or [Peer] header appears."""

    def __init__(self, section: str, line_number: int | None = None) -> None:
        super().__init__(f"Only one {section} section is supported", line_number)
        self.section = section


class MalformedLineError(ConfigError):
    """Raised when a directive has no '=' separator."""

    def __init__(self, line: str, line_number: int | None = None) -> None:
        super().__init__(f"Invalid line in config: {line}", line_number)
        self.line = line


class InvalidKeyError(ConfigError):
    """Raised when a key is not accepted in the current section."""

    def __init__(self, key: str, section: str, line_number: int | None = None) -> None:
        super().__init__(f"Invalid key {key} in section {section}", line_number)
        self.key = key
        self.section = section


class EncodingError(ConfigError):
    """Raised when a PrivateKey or PublicKey value is not valid base64.

    The value is kept on the exception but left out of the message, since it
    may be key material.
    """

    def __init__(self, key: str, value: str, line_number: int | None = None) -> None:
        super().__init__(f"Error decoding {key}: not valid base64", line_number)
        self.key = key
        self.value = value


class AddressFormatError(ConfigError):
    """Raised when an Address, DNS or MTU value cannot be parsed."""

    def __init__(self, key: str, value: str, line_number: int | None = None) -> None:
        super().__init__(f"Error parsing {key} value {value!r}", line_number)
        self.key = key
        self.value = value


class IncompleteConfigurationError(ConfigError):
    """Raised when every line parsed but the tunnel cannot be brought up.

    Attributes:
        missing: Keys that are required but were not found
    """

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            "Configuration provided is not sufficient, missing: " + ", ".join(missing)
        )
        self.missing = missing


@dataclass
class ParseFailure:
    """A configuration source that could not be used.

    Attributes:
        source: Where the configuration came from (usually a file path)
        message: Human-readable error message
        exception: The original exception that caused the failure (if any)
    """

    source: str
    message: str
    exception: Exception | None = None

    def __str__(self) -> str:
        """Format failure for logging."""
        if self.exception:
            return f"[{self.source}] {self.message}: {self.exception}"
        return f"[{self.source}] {self.message}"


class ErrorCollector:
    """Collects parse failures for batch reporting.

    Lets the caller keep checking the remaining configuration files after one
    of them fails, and report every failure at the end.
    """

    def __init__(self) -> None:
        """Initialize an empty error collector."""
        self.errors: list[ParseFailure] = []

    def add_error(
        self,
        source: str,
        message: str,
        exception: Exception | None = None,
    ) -> None:
        """Add a failure to the collection and log it.

        Args:
            source: Configuration source that failed
            message: Human-readable error message
            exception: Original exception that caused the failure
        """
        failure = ParseFailure(source=source, message=message, exception=exception)
        self.errors.append(failure)
        logger.error("%s", failure)

    def has_errors(self) -> bool:
        """Check if any failures have been collected."""
        return bool(self.errors)

    def get_error_count(self) -> int:
        """Get the number of collected failures."""
        return len(self.errors)

    def has_failures_of(self, exc_type: type[Exception]) -> bool:
        """Check if any failure was caused by an exception of the given type.

        Args:
            exc_type: Exception class to look for (subclasses match too)

        Returns:
            True if at least one collected failure wraps such an exception
        """
        return any(isinstance(e.exception, exc_type) for e in self.errors)

    def log_summary(self) -> None:
        """Log a summary of all collected failures.

        This should be called once every source has been processed.
        """
        if not self.errors:
            logger.info("All configuration files parsed with no errors")
            return

        logger.error("=" * 80)
        logger.error("CONFIGURATION ERROR SUMMARY")
        logger.error("=" * 80)
        logger.error("Total errors: %d", self.get_error_count())

        for failure in self.errors:
            logger.error("")
            logger.error("Source: %s", failure.source)
            if failure.exception:
                logger.error("  %s: %s", failure.message, failure.exception)
            else:
                logger.error("  %s", failure.message)

        logger.error("=" * 80)
