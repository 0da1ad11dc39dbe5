from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class AdminIdentity:
    identity_id: int
    name: str
    email: str
    is_active: bool = True
    password_hash: Optional[str] = field(default=None, repr=False)

    role: ClassVar[Role] = Role.ADMIN


@dataclass(frozen=True)
class MemberIdentity:
    identity_id: int
    name: str
    email: str
    is_active: bool = True
    password_hash: Optional[str] = field(default=None, repr=False)

    role: ClassVar[Role] = Role.MEMBER


@dataclass(frozen=True)
class UnknownIdentity:
    """No admin or member is registered under this email."""

    email: str


Identity = Union[AdminIdentity, MemberIdentity, UnknownIdentity]


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    identity_id: int
    name: str
    email: str
    role: Role

    def to_dict(self) -> dict:
        return {
            "id": self.identity_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }
