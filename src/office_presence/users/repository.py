from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class UserRepository(Protocol):
    """Employee lookups. Accounts are managed elsewhere; nothing here writes."""

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError
