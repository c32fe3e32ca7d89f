from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .repository import NetworkConfigRepository
from .validator import allowed, normalize_ip

logger = logging.getLogger(__name__)

LOOPBACK_IP = "127.0.0.1"


class OnEmpty(str, Enum):
    """What to do when no active network config exists."""

    ALLOW = "ALLOW"
    DENY = "DENY"


@dataclass(frozen=True)
class NetworkAccessPolicy:
    enabled: bool = True
    on_empty: OnEmpty = OnEmpty.DENY
    allow_loopback: bool = False

    @classmethod
    def from_settings(cls, settings) -> "NetworkAccessPolicy":
        return cls(
            enabled=bool(getattr(settings, "IP_VALIDATION_ENABLED", True)),
            on_empty=OnEmpty.ALLOW if getattr(settings, "NETWORK_FAIL_OPEN", False) else OnEmpty.DENY,
            allow_loopback=bool(getattr(settings, "ALLOW_LOOPBACK_IP", False)),
        )


@dataclass(frozen=True)
class NetworkDecision:
    allowed: bool
    client_ip: str
    reason: str


class NetworkGate:
    """Applies a NetworkAccessPolicy around the pure membership check."""

    def __init__(self, configs: NetworkConfigRepository, policy: NetworkAccessPolicy):
        self._configs = configs
        self._policy = policy

    @property
    def policy(self) -> NetworkAccessPolicy:
        return self._policy

    def check(self, client_ip: str) -> NetworkDecision:
        ip = normalize_ip(client_ip)

        if not self._policy.enabled:
            logger.warning("IP validation is disabled; admitting %s", ip)
            return NetworkDecision(True, ip, "validation disabled")

        if self._policy.allow_loopback and ip == LOOPBACK_IP:
            return NetworkDecision(True, ip, "loopback allowed")

        active = list(self._configs.list_active())
        if not active:
            if self._policy.on_empty == OnEmpty.ALLOW:
                logger.warning("No active network configs; admitting %s (fail-open)", ip)
                return NetworkDecision(True, ip, "no network configured (fail-open)")
            logger.warning("No active network configs; denying %s (fail-closed)", ip)
            return NetworkDecision(False, ip, "no network configured")

        if allowed(ip, active):
            return NetworkDecision(True, ip, "matched office network")

        logger.info(
            "IP %s denied; allowed networks: %s",
            ip,
            ", ".join(c.describe() for c in active),
        )
        return NetworkDecision(False, ip, "not on an office network")
