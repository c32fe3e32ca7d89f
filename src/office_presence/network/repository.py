from __future__ import annotations

from typing import Protocol, Sequence

from .model import NetworkConfig


class NetworkConfigRepository(Protocol):
    def list_active(self) -> Sequence[NetworkConfig]:
        raise NotImplementedError
