"""Data models for WireGuard configuration parsing.

This module provides the section table used while scanning a configuration
file and the validated model returned to callers.
"""

from wiredialer.models.section import DEFAULT_MTU, SECTION_KEYS, Section
from wiredialer.models.tunnel import IPC_KEYS, IPAddress, TunnelConfig

__all__ = [
    # section
    "DEFAULT_MTU",
    "SECTION_KEYS",
    "Section",
    # tunnel
    "IPC_KEYS",
    "IPAddress",
    "TunnelConfig",
]
