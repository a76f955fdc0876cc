"""WireGuard configuration file parser.

This module reads a wg-quick style configuration file and converts it into a
validated TunnelConfig: the addresses, DNS servers and MTU for the local
interface, plus the key=value control string used to program the tunnel
device.

Only one [Interface] and one [Peer] section are supported, as that is the
most common use case.
"""

import base64
import ipaddress
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from wiredialer.errors import (
    AddressFormatError,
    DuplicateSectionError,
    EncodingError,
    IncompleteConfigurationError,
    InvalidKeyError,
    MalformedLineError,
)
from wiredialer.models import DEFAULT_MTU, IPAddress, Section, TunnelConfig

logger = logging.getLogger(__name__)

# Optional sign, ASCII digits only
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Prefix length: ASCII digits without leading zeros
_PREFIX_LENGTH_RE = re.compile(r"0|[1-9][0-9]*")

# MTU must fit a signed 64-bit integer
_MTU_MIN = -(2**63)
_MTU_MAX = 2**63 - 1


@dataclass
class ParseState:
    """Accumulator for a single pass over a configuration document.

    A new state is created for every parse and is discarded once the result
    has been built or an error has been raised.
    """

    interface_count: int = 0
    peer_count: int = 0
    section: Section = Section.NONE
    line_number: int = 0
    ipc_lines: list[str] = field(default_factory=list)
    interface_addresses: list[IPAddress] = field(default_factory=list)
    dns_addresses: list[IPAddress] = field(default_factory=list)
    mtu: int = DEFAULT_MTU
    private_key_present: bool = False
    public_key_present: bool = False
    endpoint_present: bool = False
    allowed_ips_present: bool = False

    @property
    def ipc_config(self) -> str:
        """Control string built so far, one newline-terminated directive per line."""
        return "".join(f"{line}\n" for line in self.ipc_lines)

    def missing_keys(self) -> list[str]:
        """Return the keys still needed before a tunnel can be started."""
        requirements = [
            ("PrivateKey", self.private_key_present),
            ("Address", bool(self.interface_addresses)),
            ("DNS", bool(self.dns_addresses)),
            ("PublicKey", self.public_key_present),
            ("AllowedIPs", self.allowed_ips_present),
            ("Endpoint", self.endpoint_present),
        ]
        return [key for key, present in requirements if not present]


class ConfigParser:
    """Parser for WireGuard configuration documents.

    The parser itself holds no per-document state, so one instance can parse
    any number of documents.
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self._handlers: dict[str, Callable[[ParseState, str], None]] = {
            "PrivateKey": self._handle_private_key,
            "Address": self._handle_address,
            "DNS": self._handle_dns,
            "MTU": self._handle_mtu,
            "PublicKey": self._handle_public_key,
            "AllowedIPs": self._handle_allowed_ips,
            "Endpoint": self._handle_endpoint,
        }

    def parse(self, lines: Iterable[str]) -> TunnelConfig:
        """Parse a configuration document and return a validated TunnelConfig.

        Args:
            lines: Lines of the document, e.g. an open text file or io.StringIO

        Returns:
            TunnelConfig: Parsed tunnel configuration

        Raises:
            ConfigError: If a line is invalid or required keys are missing
        """
        state = ParseState()

        for raw_line in lines:
            state.line_number += 1
            self._parse_line(state, raw_line.rstrip("\r\n"))

        # Every line being valid does not mean the tunnel can be started
        missing = state.missing_keys()
        if missing:
            raise IncompleteConfigurationError(missing)

        config = TunnelConfig(
            interface_addresses=tuple(state.interface_addresses),
            dns_addresses=tuple(state.dns_addresses),
            mtu=state.mtu,
            ipc_config=state.ipc_config,
        )
        logger.info(
            "Parsed configuration: %d interface address(es), %d DNS server(s), MTU %d",
            len(config.interface_addresses),
            len(config.dns_addresses),
            config.mtu,
        )
        return config

    def _parse_line(self, state: ParseState, raw_line: str) -> None:
        """Apply one line of the document to the parse state.

        Args:
            state: Current parse state
            raw_line: Line as read, without its line terminator
        """
        line = raw_line.strip()

        # Skip empty lines and comments
        if not line or line.startswith("#"):
            return

        section = Section.from_header(line)
        if section is not None:
            self._enter_section(state, section)
            return

        key, sep, value = line.partition("=")
        if not sep:
            raise MalformedLineError(raw_line, state.line_number)

        key = key.strip()
        value = value.strip()

        if not state.section.allows(key):
            raise InvalidKeyError(key, str(state.section), state.line_number)

        handler = self._handlers.get(key)
        if handler is None:
            logger.debug("Ignoring unsupported key %s in section %s", key, state.section)
            return

        handler(state, value)

    def _enter_section(self, state: ParseState, section: Section) -> None:
        """Switch to a new section, rejecting repeated headers."""
        logger.debug("Found %s section", section)

        if section == Section.INTERFACE:
            state.interface_count += 1
            count = state.interface_count
        else:
            state.peer_count += 1
            count = state.peer_count

        if count > 1:
            raise DuplicateSectionError(str(section), state.line_number)

        state.section = section

    def _decode_key(self, state: ParseState, key: str, value: str) -> str:
        """Convert a base64 WireGuard key to the hex form used by the control channel.

        Raises:
            EncodingError: If the value is not valid standard base64
        """
        try:
            raw = base64.b64decode(value, validate=True)
        except ValueError as e:
            raise EncodingError(key, value, state.line_number) from e
        return raw.hex()

    def _handle_private_key(self, state: ParseState, value: str) -> None:
        state.ipc_lines.append(f"private_key={self._decode_key(state, 'PrivateKey', value)}")
        state.private_key_present = True

    def _handle_public_key(self, state: ParseState, value: str) -> None:
        state.ipc_lines.append(f"public_key={self._decode_key(state, 'PublicKey', value)}")
        state.public_key_present = True

    def _handle_address(self, state: ParseState, value: str) -> None:
        """Parse a comma separated list of interface addresses.

        Each entry may carry a prefix length (10.0.0.2/32); only the address
        itself is kept.
        """
        for segment in value.split(","):
            entry = segment.strip()
            try:
                address = _parse_interface_address(entry)
            except ValueError as e:
                raise AddressFormatError("Address", entry, state.line_number) from e
            state.interface_addresses.append(address)

    def _handle_dns(self, state: ParseState, value: str) -> None:
        """Parse a comma separated list of DNS server addresses."""
        for segment in value.split(","):
            entry = segment.strip()
            try:
                address = ipaddress.ip_address(entry)
            except ValueError as e:
                raise AddressFormatError("DNS", entry, state.line_number) from e
            state.dns_addresses.append(address)

    def _handle_mtu(self, state: ParseState, value: str) -> None:
        if not _INTEGER_RE.fullmatch(value):
            raise AddressFormatError("MTU", value, state.line_number)
        mtu = int(value)
        if not _MTU_MIN <= mtu <= _MTU_MAX:
            raise AddressFormatError("MTU", value, state.line_number)
        state.mtu = mtu

    def _handle_allowed_ips(self, state: ParseState, value: str) -> None:
        # Surrounding whitespace is trimmed; the value is otherwise forwarded
        # unchecked and the tunnel device validates it when applied
        for segment in value.split(","):
            state.ipc_lines.append(f"allowed_ip={segment.strip()}")
            state.allowed_ips_present = True

    def _handle_endpoint(self, state: ParseState, value: str) -> None:
        state.ipc_lines.append(f"endpoint={value}")
        state.endpoint_present = True


def _parse_interface_address(entry: str) -> IPAddress:
    """Parse an interface address with an optional decimal prefix length.

    Netmask suffixes (/255.255.255.0) and IPv6 zones (fe80::1%eth0) are
    rejected.

    Raises:
        ValueError: If the entry is not a valid address
    """
    host, sep, prefix = entry.partition("/")
    address = ipaddress.ip_address(host)

    if isinstance(address, ipaddress.IPv6Address) and address.scope_id is not None:
        raise ValueError(f"Zone not allowed in interface address: {entry}")

    if sep:
        if not _PREFIX_LENGTH_RE.fullmatch(prefix):
            raise ValueError(f"Invalid prefix length: {prefix!r}")
        if int(prefix) > address.max_prefixlen:
            raise ValueError(f"Prefix length {prefix} out of range for {address}")

    return address


def parse_config(config: Iterable[str]) -> TunnelConfig:
    """Parse a WireGuard configuration document.

    This is a convenience function that creates a ConfigParser and calls parse().

    Args:
        config: Lines of the document, e.g. an open text file or io.StringIO

    Returns:
        TunnelConfig: Parsed tunnel configuration

    Raises:
        ConfigError: If the document is malformed or incomplete
    """
    return ConfigParser().parse(config)


def parse_config_file(path: str | Path) -> TunnelConfig:
    """Read and parse a WireGuard configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        TunnelConfig: Parsed tunnel configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file is malformed or incomplete
    """
    config_path = Path(path)
    logger.debug("Reading configuration from %s", config_path)

    with config_path.open(encoding="utf-8") as config_file:
        return parse_config(config_file)
