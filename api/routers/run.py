"""
Run Router - Main endpoint for the deterministic text pipeline
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_request_start, read_json_body, require_auth
from api.schemas.run import ErrorResponse, RunResponse
from api.services import run_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/run",
    response_model=RunResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_auth)],
    responses={
        400: {"model": ErrorResponse, "description": "Missing/blank input or malformed JSON"},
        401: {"model": ErrorResponse, "description": "Bearer token missing or wrong"},
        413: {"model": ErrorResponse, "description": "Body over the size limit"},
    },
)
async def run_text_pipeline(
    response: Response,
    body: Dict[str, Any] = Depends(read_json_body),
    started_ms: float = Depends(get_request_start),
) -> RunResponse:
    """
    Run parse -> analyze -> summarize over `input`.

    Body: {"input": "string"}

    Returns:
        RunResponse with ok, engine, received_input, steps, summary, timestamp, meta

    Raises:
        ValidationError: If `input` is missing, not a string, or blank (400)
    """
    result = run_service.process_run_request(body, started_ms=started_ms)

    response.headers["Cache-Control"] = "no-store"
    return result
