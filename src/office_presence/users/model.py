from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee identity.

    Owned by the identity service; this package only reads it.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    is_active: bool = True

    def to_ref(self) -> dict:
        return {"id": self.user_id, "name": self.full_name, "email": self.email}


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, trusted as-is."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
