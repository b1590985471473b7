"""
Snippetbox Backend — Pydantic Response Schemas
================================================

What:  JSON contract for the machine-facing endpoints. Pages are HTML and
       plain text; only /health speaks JSON.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Returned by GET /health.

    status:   healthy (database reachable) or unhealthy
    database: connected or disconnected
    """
    status: str = Field(description="Overall status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since the process imported the app")
