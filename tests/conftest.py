"""Pytest configuration and fixtures for wiredialer tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

VALID_SAMPLE = """
[Interface]
Address = 4.3.2.1/32,3.2.1.0/16
PrivateKey = YmxhaGJsYWhibGFoYmxhaGJsYWgK
DNS = 1.1.1.1

[Peer]
PublicKey = YmxhaGJsYWhibGFoYmxhaGJsYWgK
AllowedIPs = 0.0.0.0/0,::/0
Endpoint = 1.2.3.4:1234
"""


@pytest.fixture
def valid_config() -> str:
    """Minimal complete configuration document.

    Returns:
        Configuration text with one [Interface] and one [Peer] section
    """
    return VALID_SAMPLE


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Fixture for writing configuration documents to disk.

    Usage:
        def test_something(write_config):
            path = write_config("[Interface]\\n...")

    Returns:
        Callable taking the document text (and optionally a file name) and
        returning the path it was written to
    """

    def _write(content: str, name: str = "wg0.conf") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
