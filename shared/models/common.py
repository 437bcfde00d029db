"""Common Pydantic models shared across services."""

from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enum."""

    OK = "ok"


class HealthResponse(BaseModel):
    """Liveness payload returned by the health endpoint."""

    status: HealthStatus = Field(..., description="Service health status")

    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "example": {"status": "ok"}
        }
    }
