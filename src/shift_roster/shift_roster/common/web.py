from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Caller as stored in the session by the login flow."""

    user_id: int
    role: Role
    store_id: Optional[int]


def current_identity() -> Identity:
    try:
        role = Role(session.get("role"))
    except ValueError:
        raise AuthorizationError("Unknown role")
    store_id = session.get("store_id")
    return Identity(
        user_id=int(session["user_id"]),
        role=role,
        store_id=int(store_id) if store_id is not None else None,
    )


def require_store(identity: Identity) -> int:
    if identity.store_id is None:
        raise ValidationError("No store selected")
    return identity.store_id


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def json_view(view):
    """Login check plus the error mapping shared by all API views."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 403
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"error": "Internal server error"}), 500

    return wrapper
