"""Login route and the bearer-token gate dependencies (get_current_identity, require_role)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from customer_admin.core.database import get_db
from customer_admin.schemas.auth import Identity, LoginRequest, LoginResponse, Role
from customer_admin.services.access_gate import authorize
from customer_admin.services.auth import issue_token

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    return issue_token(db, body.username, body.password)


def require_role(role: Role, action: str) -> Callable[..., Identity]:
    """
    Build a dependency that admits only tokens carrying role.

    action completes the Forbidden message, e.g. "view customers".
    """

    def dependency(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    ) -> Identity:
        token = credentials.credentials if credentials is not None else None
        return authorize(token, role, action)

    return dependency
