from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import login_required
from ..container import Container
from ..core.exceptions import AuthenticationError
from .model import SessionUser, UnknownIdentity

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _start_session(user: SessionUser, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["identity_id"] = user.identity_id
        session["name"] = user.name
        session["email"] = user.email
        session["role"] = user.role.value

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.authenticate(
            data.get("email", ""),
            data.get("password", ""),
            data.get("user_type") or None,
        )
        _start_session(user, remember=bool(data.get("remember_me", True)))
        logger.info("%s signed in as %s", user.email, user.role.value)
        return jsonify({"message": "Login successful", "user": user.to_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"message": "Signed out"})

    @app.route("/api/auth/me", endpoint="api_me")
    @login_required
    def api_me():
        identity = container.auth_service.resolve_current_user(session.get("email"))
        if isinstance(identity, UnknownIdentity):
            session.clear()
            raise AuthenticationError("Account no longer exists")
        return jsonify(
            {
                "id": identity.identity_id,
                "name": identity.name,
                "email": identity.email,
                "user_type": identity.role.value,
                "is_active": identity.is_active,
            }
        )

    @app.route("/api/auth/disable-registration", methods=["POST"], endpoint="api_disable_registration")
    def api_disable_registration():
        if container.auth_service.registration_disabled():
            return jsonify({"message": "Registration is now disabled", "disabled": True})
        return jsonify({"message": "No admin account found", "disabled": False})
