"""
Run API Schemas - Request/response models for the text pipeline endpoint
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


class StepResultModel(BaseModel):
    """One pipeline stage outcome"""

    name: Literal["parse", "analyze", "summarize"] = Field(..., description="Stage name")
    status: Literal["ok"] = Field("ok", description="Stage status")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Stage-specific details (metrics for 'analyze'); omitted otherwise"
    )


class RunMeta(BaseModel):
    latency_ms: int = Field(..., ge=0, description="Milliseconds from request arrival to response assembly")
    version: str = Field(..., description="Service version")


class RunResponse(BaseModel):
    """Successful pipeline response"""

    ok: Literal[True] = True
    engine: str = Field(..., description="Engine identifier (e.g. 'aipipe:v1')")
    received_input: str = Field(..., description="Trimmed raw input, before whitespace collapsing")
    steps: List[StepResultModel] = Field(..., description="Stage results in execution order")
    summary: str = Field(..., max_length=160, description="Sentence-cased summary, at most 160 characters")
    timestamp: str = Field(..., description="ISO-8601 UTC time the response was assembled")
    meta: RunMeta


class ErrorResponse(BaseModel):
    """Body of every error response"""

    ok: Literal[False] = False
    error: str = Field(..., description="Human-readable error message")
