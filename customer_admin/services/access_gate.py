"""
Access gate: verify a bearer token and check its role before any record operation.

authorize() is framework-free so it can be tested directly; the FastAPI
dependencies in customer_admin.api.auth wrap it.
"""

import logging
from typing import Any

import jwt
from pydantic import ValidationError

from customer_admin.core.errors import ForbiddenError, InvalidTokenError, MissingTokenError
from customer_admin.core.security import decode_access_token
from customer_admin.schemas.auth import Identity, Role

logger = logging.getLogger(__name__)

# Forbidden message per required role; every Role must have an entry.
_ROLE_LABELS: dict[Role, str] = {
    Role.ADMIN: "Admin",
    Role.USER: "User",
}


def identity_from_claims(payload: dict[str, Any]) -> Identity:
    """
    Build an Identity from decoded claims; missing or malformed claims are invalid.

    A role string that is not a Role member yields role=None, which no
    required role matches.
    """
    role_claim = payload.get("role")
    if not isinstance(role_claim, str) or not role_claim:
        raise InvalidTokenError()
    try:
        role = Role(role_claim)
    except ValueError:
        role = None
    try:
        identity = Identity(
            id=payload["id"],
            username=payload["username"],
            role=role,
        )
    except (KeyError, TypeError, ValidationError):
        raise InvalidTokenError()
    if str(identity.id) != str(payload.get("sub")):
        raise InvalidTokenError()
    return identity


def authorize(token: str | None, required_role: Role, action: str) -> Identity:
    """
    Return the caller's Identity if token is valid and carries required_role.

    Raises MissingTokenError (no token), InvalidTokenError (bad signature,
    malformed, expired, bad claims) or ForbiddenError (wrong role; message
    names the action, e.g. "delete customers").
    """
    if not token:
        raise MissingTokenError()
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token", extra={"action": action})
        raise InvalidTokenError()
    except jwt.PyJWTError as e:
        logger.warning(
            "Rejected invalid token",
            extra={"action": action, "reason": type(e).__name__},
        )
        raise InvalidTokenError()

    identity = identity_from_claims(payload)
    if identity.role is not required_role:
        logger.warning(
            "Role check failed",
            extra={
                "action": action,
                "user_id": identity.id,
                "role": identity.role.value if identity.role else payload["role"],
                "required_role": required_role.value,
            },
        )
        raise ForbiddenError(f"{_ROLE_LABELS[required_role]} role required to {action}.")
    return identity
