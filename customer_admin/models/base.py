"""SQLAlchemy declarative Base shared by the users and customers tables."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Index names match those created by the Alembic revisions (e.g. ix_users_username).
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
