"""Primitive value checks shared by the configuration validators."""

from __future__ import annotations

import ipaddress
import os
from typing import Any, List

MIN_PORT = 1
MAX_PORT = 65535

PORT_RANGE_MSG = f"must be between {MIN_PORT} and {MAX_PORT}, inclusive"
IP_MSG = "must be a valid IP address, (e.g. 10.9.8.7)"


def is_valid_port_num(port: Any) -> List[str]:
    """Return error messages for ``port``; empty when it is a usable TCP/UDP port."""
    if isinstance(port, bool) or not isinstance(port, int):
        return [PORT_RANGE_MSG]
    if MIN_PORT <= port <= MAX_PORT:
        return []
    return [PORT_RANGE_MSG]


def is_valid_ip(value: Any) -> List[str]:
    """Return error messages for ``value``; empty when it is an IPv4 or IPv6 literal.

    IPv6 zone suffixes (``fe80::1%eth0``) are not literals and are rejected.
    """
    if not isinstance(value, str) or "%" in value:
        return [IP_MSG]
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return [IP_MSG]
    return []


def file_is_exist(path: str) -> bool:
    """True if ``path`` names an existing file or directory. The empty path never exists."""
    if not path:
        return False
    return os.path.exists(path)
