from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import AdminIdentity, Identity, MemberIdentity, SessionUser, UnknownIdentity
from .repository import IdentityRepository

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _to_session_user(identity: AdminIdentity | MemberIdentity) -> SessionUser:
    return SessionUser(
        identity_id=identity.identity_id,
        name=identity.name,
        email=identity.email,
        role=identity.role,
    )


class AuthService:
    """Use cases: credential login, OAuth admission and current-user lookup."""

    def __init__(self, identities: IdentityRepository):
        self._identities = identities

    def resolve_current_user(self, email: Optional[str]) -> Identity:
        email = normalize_email(email)
        if not email:
            return UnknownIdentity(email="")
        return self._identities.find_by_email(email)

    def authenticate(self, email: str, password: str, user_type: Optional[str] = None) -> SessionUser:
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Please enter your email and password")

        expected: Optional[Role] = None
        if user_type:
            try:
                expected = Role(user_type.strip().upper())
            except ValueError:
                raise ValidationError("Please select a valid user type")

        identity = self._identities.find_by_email(email, expected)
        failure = {
            Role.ADMIN: "Invalid admin credentials",
            Role.MEMBER: "Invalid member credentials",
        }.get(expected, "Invalid email or password")

        if isinstance(identity, UnknownIdentity):
            logger.info("Login rejected: unknown email %s", email)
            raise AuthenticationError(failure)
        if expected is not None and identity.role != expected:
            logger.info("Login rejected: %s is not a %s account", email, expected.value)
            raise AuthenticationError(failure)
        if not identity.password_hash:
            raise AuthenticationError(failure)

        if not identity.is_active:
            if isinstance(identity, AdminIdentity):
                raise AuthenticationError("Admin account is deactivated")
            raise AuthenticationError("Member account is not active")

        try:
            ok = check_password_hash(identity.password_hash, password)
        except (TypeError, ValueError):
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("Login rejected: bad password for %s", email)
            raise AuthenticationError(failure)

        return _to_session_user(identity)

    def authenticate_oauth(self, email: str) -> SessionUser:
        """Admit an email already verified by an OAuth provider.

        Only addresses registered as an admin or member may sign in.
        """
        email = normalize_email(email)
        identity = self._identities.find_by_email(email) if email else UnknownIdentity(email="")

        if isinstance(identity, UnknownIdentity):
            logger.warning("OAuth sign-in denied for %s", email or "<no email>")
            raise AuthenticationError("Access denied. Contact administrator to add your email to the system.")
        if not identity.is_active:
            raise AuthenticationError("Account is not active")

        return _to_session_user(identity)

    def registration_disabled(self) -> bool:
        """Self-registration closes once an admin account exists."""
        return self._identities.admin_exists()
