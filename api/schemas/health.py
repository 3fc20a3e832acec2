"""
Health API Schemas - Liveness probe response
"""

from typing import Literal
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    ok: Literal[True] = True
    service: str = Field(..., description="Service name")
    time: str = Field(..., description="Current ISO-8601 UTC time")
