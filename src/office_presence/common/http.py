from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..users.model import Principal


def _session_principal() -> Optional[Principal]:
    """Principal stored in the session, or None when it is missing or malformed."""
    try:
        return Principal(user_id=int(session["user_id"]), role=Role(session.get("role")))
    except (KeyError, TypeError, ValueError):
        return None


def current_principal() -> Principal:
    """Caller of a view guarded by ``login_required`` / ``admin_required``."""
    principal = _session_principal()
    if principal is None:
        raise RuntimeError("current_principal() used outside an authenticated view")
    return principal


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _unauthorized():
    return jsonify({"error": "Authentication required", "code": "UNAUTHORIZED"}), 401


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _session_principal() is None:
            return _unauthorized()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = _session_principal()
        if principal is None:
            return _unauthorized()
        if not principal.is_admin:
            return jsonify({"error": "Admin access required", "code": "FORBIDDEN"}), 403
        return view(*args, **kwargs)

    return wrapper
