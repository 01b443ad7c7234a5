"""Core app configuration, database, security and errors."""

from customer_admin.core.config import get_settings, settings
from customer_admin.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
