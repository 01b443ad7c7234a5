"""Credential issuer: check a username/password and mint an access token."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from customer_admin.core.errors import InvalidCredentialsError
from customer_admin.core.security import (
    burn_password_check,
    create_access_token,
    verify_password,
)
from customer_admin.models import User
from customer_admin.schemas.auth import LoginResponse

logger = logging.getLogger(__name__)


def issue_token(session: Session, username: str, password: str) -> LoginResponse:
    """
    Authenticate username/password and return a signed token with id, username and role.

    Unknown user and wrong password raise the same InvalidCredentialsError so
    callers cannot probe which usernames exist. No server-side state is written.
    """
    user = session.scalars(select(User).where(User.username == username)).first()
    if user is None:
        burn_password_check(password)
        logger.info("Login failed", extra={"reason": "unknown_user"})
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"reason": "bad_password", "user_id": user.id})
        raise InvalidCredentialsError()

    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    logger.info("Login succeeded", extra={"user_id": user.id, "role": user.role})
    return LoginResponse(token=token, username=user.username, role=user.role)
