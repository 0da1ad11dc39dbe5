from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import Identity


class IdentityRepository(Protocol):
    """Credential store: admins and members behind one lookup."""

    def find_by_email(self, email: str, role: Optional[Role] = None) -> Identity:
        """Return the matching identity, or ``UnknownIdentity`` when none exists.

        With ``role`` only that kind of account is considered; without it an
        admin row is preferred over a member row for the same email.
        """
        raise NotImplementedError

    def admin_exists(self) -> bool:
        raise NotImplementedError
