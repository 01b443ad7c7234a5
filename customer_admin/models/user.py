"""ORM model for application accounts (login and role-based access control)."""

from sqlalchemy import Column, Integer, String

from customer_admin.models.base import Base


class User(Base):
    """
    Account used to log in and obtain an access token.

    role: 'admin' or 'user' (see customer_admin.schemas.auth.Role).
    Created out-of-band with customer_admin.scripts.create_user.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
