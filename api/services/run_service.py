"""
Run Service - Core business logic behind POST /run

Feeds a decoded request body through the text pipeline and assembles the
wire response. Validation failures come back from the pipeline as values and
are raised here as ValidationError for the HTTP layer to render.
"""

import logging
from typing import Any, Optional

from aipipe.errors import ValidationError
from aipipe.pipeline import PipelineResult, ValidationFailure, run_pipeline
from aipipe.settings import ENGINE_ID, SERVICE_VERSION
from aipipe.utils.timestamps import elapsed_ms, monotonic_ms, utc_now_iso

from api.schemas.run import RunMeta, RunResponse, StepResultModel

logger = logging.getLogger(__name__)


def build_run_response(
    result: PipelineResult,
    started_ms: float,
    engine: str = ENGINE_ID,
    version: str = SERVICE_VERSION,
) -> RunResponse:
    """
    Convert a PipelineResult into the response model.

    Args:
        result: Output of run_pipeline
        started_ms: monotonic_ms() reading taken when the request arrived
        engine: Engine identifier to report
        version: Service version to report

    Returns:
        RunResponse with timestamp and latency captured now
    """
    steps = [StepResultModel(**step.to_dict()) for step in result.steps]
    timestamp = utc_now_iso()

    return RunResponse(
        engine=engine,
        received_input=result.received_input,
        steps=steps,
        summary=result.summary,
        timestamp=timestamp,
        meta=RunMeta(latency_ms=elapsed_ms(started_ms), version=version),
    )


def process_run_request(body: Any, started_ms: Optional[float] = None) -> RunResponse:
    """
    Run the pipeline over a decoded JSON body.

    Raises:
        ValidationError: If `input` is missing, not a string, or blank
    """
    if started_ms is None:
        started_ms = monotonic_ms()

    outcome = run_pipeline(body)
    if isinstance(outcome, ValidationFailure):
        raise ValidationError(outcome.message)

    response = build_run_response(outcome, started_ms)

    logger.info(
        f"Processed input: words={outcome.metrics.words} chars={outcome.metrics.chars} "
        f"sentences={outcome.metrics.sentences} latency_ms={response.meta.latency_ms}"
    )
    return response
