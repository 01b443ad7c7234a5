"""SQLAlchemy ORM models."""

from customer_admin.models.base import Base
from customer_admin.models.customer import Customer
from customer_admin.models.user import User

__all__ = ["Base", "Customer", "User"]
