"""Pydantic request/response schemas."""

from customer_admin.schemas.auth import Identity, LoginRequest, LoginResponse, Role
from customer_admin.schemas.customer import (
    CustomerCreate,
    CustomerCreated,
    CustomerOut,
    CustomerUpdate,
    MessageResponse,
)
from customer_admin.schemas.health import HealthResponse

__all__ = [
    "CustomerCreate",
    "CustomerCreated",
    "CustomerOut",
    "CustomerUpdate",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Role",
]
