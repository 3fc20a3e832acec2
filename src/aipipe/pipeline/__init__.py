"""Text pipeline: input validation followed by the parse, analyze and summarize stages."""

from .schemas import PipelineResult, StepResult, TextMetrics, ValidationFailure
from .text_pipeline import (
    analyze_text,
    extract_input,
    parse_text,
    run_pipeline,
    summarize_text,
    validate_input,
)

__all__ = [
    "PipelineResult",
    "StepResult",
    "TextMetrics",
    "ValidationFailure",
    "analyze_text",
    "extract_input",
    "parse_text",
    "run_pipeline",
    "summarize_text",
    "validate_input",
]
