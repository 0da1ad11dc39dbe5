from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session
from werkzeug.exceptions import InternalServerError

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidConfigurationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidConfigurationError, 500),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "identity_id" not in session:
            return jsonify({"error": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "identity_id" not in session:
                return jsonify({"error": "Please sign in to continue"}), 401
            if session.get("role") != role.value:
                return jsonify({"error": "You do not have permission"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
member_required = role_required(Role.MEMBER)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if status >= 500:
            logger.error("Server misconfiguration: %s", error)
            body = {"error": "Internal server error"}
            if app.config.get("DEBUG"):
                body["details"] = str(error)
            return jsonify(body), status
        return jsonify({"error": str(error)}), status

    @app.errorhandler(InternalServerError)
    def handle_server_error(error: InternalServerError):
        original = getattr(error, "original_exception", None) or error
        logger.error("Unhandled error", exc_info=original)
        body = {"error": "Internal server error"}
        if app.config.get("DEBUG"):
            body["details"] = str(original)
        return jsonify(body), 500
