"""Schema for the unauthenticated health probe."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a SELECT 1 probe of the customer database."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV the process was started with")
    database: Literal["connected", "disconnected"]
