"""Parsed tunnel configuration model."""

from ipaddress import IPv4Address, IPv6Address
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wiredialer.models.section import DEFAULT_MTU

IPAddress = IPv4Address | IPv6Address

# Directive keys understood by the tunnel device's control channel
IPC_KEYS = frozenset({"private_key", "public_key", "allowed_ip", "endpoint"})


class TunnelConfig(BaseModel):
    """Result of parsing a WireGuard configuration file.

    Holds the settings needed to create the local virtual interface together
    with the control string that programs the tunnel device. Instances are
    immutable once created.
    """

    model_config = ConfigDict(frozen=True)

    interface_addresses: Annotated[
        tuple[IPAddress, ...],
        Field(min_length=1, description="Interface addresses, prefix length discarded"),
    ]
    dns_addresses: Annotated[
        tuple[IPAddress, ...],
        Field(min_length=1, description="DNS servers used inside the tunnel"),
    ]
    mtu: Annotated[int, Field(DEFAULT_MTU, description="Interface MTU")]
    ipc_config: Annotated[str, Field(description="key=value directives for the tunnel device")]

    @field_validator("ipc_config")
    @classmethod
    def validate_ipc_config(cls, v: str) -> str:
        """Validate that every directive uses a known key and is newline-terminated."""
        if v and not v.endswith("\n"):
            raise ValueError("Control string must end with a newline")

        for line in v.split("\n")[:-1]:
            key, sep, _ = line.partition("=")
            if not sep or key not in IPC_KEYS:
                raise ValueError(f"Invalid control directive: {line}")

        return v

    def ipc_lines(self) -> list[str]:
        """Return the control string as a list of directives, without newlines."""
        return self.ipc_config.split("\n")[:-1]
