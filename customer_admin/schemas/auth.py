"""Request/response schemas for login and the authenticated identity."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from customer_admin.schemas.customer import reject_nul


class Role(str, Enum):
    """Closed set of account roles. Compare members, never raw strings."""

    ADMIN = "admin"
    USER = "user"


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    check_no_nul = field_validator("username", "password")(reject_nul)


class LoginResponse(BaseModel):
    """JWT access token plus the identity it was issued to."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    username: str
    role: str


class Identity(BaseModel):
    """Claims decoded from a verified access token (id, username, role)."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    # None when the signed role claim is not a known Role.
    role: Role | None
