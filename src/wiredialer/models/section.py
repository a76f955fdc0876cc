"""Configuration file sections and the keys each of them accepts."""

from enum import Enum
from types import MappingProxyType

# MTU is not typically present in WireGuard configuration files
DEFAULT_MTU = 1420


class Section(str, Enum):
    """Section of a WireGuard configuration file.

    The value is the form used when reporting errors. For the two real
    sections it is also the literal header line.
    """

    INTERFACE = "[Interface]"
    PEER = "[Peer]"

    NONE = "None"
    """State before the first header is seen. Accepts no keys."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_header(cls, line: str) -> "Section | None":
        """Return the section introduced by a header line.

        Args:
            line: Whitespace-trimmed configuration line

        Returns:
            The matching section, or None if the line is not a section header
        """
        for section in (cls.INTERFACE, cls.PEER):
            if line == section.value:
                return section
        return None

    def allows(self, key: str) -> bool:
        """Check whether a key may appear in this section (case-sensitive)."""
        return key in SECTION_KEYS[self]


# Probably not every key wg-quick understands, but sufficient for most files.
SECTION_KEYS: MappingProxyType[Section, frozenset[str]] = MappingProxyType(
    {
        Section.INTERFACE: frozenset(
            {
                "PrivateKey",
                "Address",
                "DNS",
                "ListenPort",
                "MTU",
                "SaveConfig",
                "PreUp",
                "PostUp",
                "PreDown",
                "PostDown",
                "Table",
                "FwMark",
            }
        ),
        Section.PEER: frozenset(
            {
                "PublicKey",
                "AllowedIPs",
                "Endpoint",
                "PersistentKeepalive",
                "PresharedKey",
            }
        ),
        Section.NONE: frozenset(),
    }
)
