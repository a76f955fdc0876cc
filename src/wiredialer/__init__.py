"""WireGuard configuration parsing for user-space tunnel dialers."""

from wiredialer.errors import (
    AddressFormatError,
    ConfigError,
    DuplicateSectionError,
    EncodingError,
    IncompleteConfigurationError,
    InvalidKeyError,
    MalformedLineError,
)
from wiredialer.models import DEFAULT_MTU, TunnelConfig
from wiredialer.parser import ConfigParser, parse_config, parse_config_file

__version__ = "0.1.0"

__all__ = [
    "AddressFormatError",
    "ConfigError",
    "ConfigParser",
    "DEFAULT_MTU",
    "DuplicateSectionError",
    "EncodingError",
    "IncompleteConfigurationError",
    "InvalidKeyError",
    "MalformedLineError",
    "TunnelConfig",
    "parse_config",
    "parse_config_file",
    "__version__",
]
