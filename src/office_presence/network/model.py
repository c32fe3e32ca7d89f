from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NetworkConfig:
    """An office network admitted for check-in/out.

    ``subnet`` is either a dotted mask ("255.255.255.0"), a full CIDR
    ("192.168.1.0/24") or a bare prefix ("/24") applied to ``ip_address``.
    """

    config_id: int
    name: str
    ip_address: str
    subnet: Optional[str] = None
    is_active: bool = True
    description: Optional[str] = None

    def describe(self) -> str:
        return f"{self.ip_address} ({self.subnet})" if self.subnet else self.ip_address
