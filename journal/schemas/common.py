"""
Journal Backend — Shared Response Schemas
=========================================

What:  Error and health response models shared by all routes.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """
    What:  The one error body every failing endpoint returns.

    Example:
        {"error": "entry not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
