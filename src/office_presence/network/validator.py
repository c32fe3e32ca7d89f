"""IPv4 office-network membership.

Every malformed input is a non-match; nothing here raises.
"""

from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, Optional

from .model import NetworkConfig

logger = logging.getLogger(__name__)

_MASK32 = 0xFFFFFFFF
_MAPPED_PREFIX = "::ffff:"


def normalize_ip(value: Optional[str]) -> str:
    ip = (value or "").strip()
    if ip == "::1":
        return "127.0.0.1"
    if ip.lower().startswith(_MAPPED_PREFIX):
        ip = ip[len(_MAPPED_PREFIX):]
    return ip


def ipv4_to_int(value: str) -> Optional[int]:
    """Unsigned 32-bit value of a dotted quad, or None when malformed."""
    try:
        return int(ipaddress.IPv4Address(value)) & _MASK32
    except ValueError:
        return None


def prefix_mask(prefix_length: int) -> int:
    return (_MASK32 << (32 - prefix_length)) & _MASK32


def _parse_prefix(value: str) -> Optional[int]:
    value = value.strip()
    if not value.isdigit():
        return None
    length = int(value)
    return length if 0 <= length <= 32 else None


def _masked_equal(ip: int, network: int, mask: int) -> bool:
    return (ip & mask) == (network & mask)


def ip_matches(client_ip: str, config_ip: str, subnet: Optional[str] = None) -> bool:
    client_ip = normalize_ip(client_ip)
    config_ip = normalize_ip(config_ip)

    client_num = ipv4_to_int(client_ip)
    config_num = ipv4_to_int(config_ip)
    if client_num is None or config_num is None:
        logger.debug("Invalid IPv4 - client=%r config=%r", client_ip, config_ip)
        return False

    if client_num == config_num:
        return True

    subnet = (subnet or "").strip()
    if not subnet:
        return False

    if "/" in subnet:
        network_part, _, prefix_part = subnet.partition("/")
        network_num = ipv4_to_int(network_part.strip()) if network_part.strip() else config_num
        prefix = _parse_prefix(prefix_part)
        if network_num is None or prefix is None:
            logger.debug("Invalid CIDR subnet %r", subnet)
            return False
        return _masked_equal(client_num, network_num, prefix_mask(prefix))

    if "." in subnet:
        mask_num = ipv4_to_int(subnet)
        if mask_num is None:
            logger.debug("Invalid subnet mask %r", subnet)
            return False
        return _masked_equal(client_num, config_num, mask_num)

    return False


def allowed(client_ip: str, configs: Iterable[NetworkConfig]) -> bool:
    """True when ``client_ip`` belongs to any active config."""
    for config in configs:
        if not config.is_active:
            continue
        if ip_matches(client_ip, config.ip_address, config.subnet):
            logger.debug("IP %s admitted by %s", client_ip, config.describe())
            return True
    return False
