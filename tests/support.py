"""Shared fixtures for tests: in-memory SQLite pool, seeded accounts, token helpers."""

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from customer_admin.core.security import create_access_token, hash_password
from customer_admin.models import Base, User

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
USER_USERNAME = "viewer"
USER_PASSWORD = "viewer123"

# Hashing is slow on purpose; compute once per test run.
_HASHES: dict[str, str] = {}


def _hash(password: str) -> str:
    if password not in _HASHES:
        _HASHES[password] = hash_password(password)
    return _HASHES[password]


def make_engine() -> Engine:
    """One shared in-memory connection; LIKE made case-sensitive to match PostgreSQL."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _case_sensitive_like(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA case_sensitive_like = ON")

    Base.metadata.create_all(engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_accounts(session_factory: sessionmaker[Session]) -> dict[str, User]:
    """Insert one admin and one plain user; return them keyed by username."""
    db = session_factory()
    try:
        admin = User(username=ADMIN_USERNAME, password_hash=_hash(ADMIN_PASSWORD), role="admin")
        user = User(username=USER_USERNAME, password_hash=_hash(USER_PASSWORD), role="user")
        db.add_all([admin, user])
        db.commit()
        db.refresh(admin)
        db.refresh(user)
        db.expunge_all()
        return {admin.username: admin, user.username: user}
    finally:
        db.close()


def seed_account(
    session_factory: sessionmaker[Session], username: str, password: str, role: str
) -> User:
    """Insert a single account with any role string, as out-of-band provisioning might."""
    db = session_factory()
    try:
        user = User(username=username, password_hash=_hash(password), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        db.expunge(user)
        return user
    finally:
        db.close()


def bearer(user_id: int, username: str, role: str) -> dict[str, str]:
    token = create_access_token(user_id=user_id, username=username, role=role)
    return {"Authorization": f"Bearer {token}"}
