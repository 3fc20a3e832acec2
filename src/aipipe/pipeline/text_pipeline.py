"""
Deterministic text pipeline.

Three stateless stages applied in order to one validated string:

1. parse     - collapse whitespace runs to single spaces and trim
2. analyze   - count words, characters and sentences
3. summarize - sentence-case and cap the text at SUMMARY_MAX_CHARS

Validation is modeled as a returned ValidationFailure rather than a raised
exception so `run_pipeline` stays total and side-effect free.
"""

import logging
import re
from typing import Any, Mapping, Union

from aipipe.pipeline.schemas import (
    PipelineResult,
    StepName,
    StepResult,
    TextMetrics,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Missing 'input' (string) in JSON body"

SUMMARY_MAX_CHARS = 160
ELLIPSIS = "..."

# ECMAScript whitespace (regex \s and String.trim): includes the BOM U+FEFF,
# excludes the C0 separators U+001C-U+001F and NEL U+0085 that str.isspace accepts.
WHITESPACE_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_WHITESPACE_RUN = re.compile("[" + re.escape(WHITESPACE_CHARS) + "]+")
# A run of terminators like "?!" or "..." counts as a single sentence boundary
_TERMINATOR_RUN = re.compile(r"[.!?]+")


def extract_input(body: Any) -> str:
    """
    Pull the `input` field out of a decoded JSON body and trim it.

    Anything that is not a string (missing key, number, null, list...)
    is treated as empty. Non-dict bodies are treated as empty objects.
    """
    if not isinstance(body, Mapping):
        return ""
    value = body.get("input")
    if not isinstance(value, str):
        return ""
    return value.strip(WHITESPACE_CHARS)


def validate_input(body: Any) -> Union[str, ValidationFailure]:
    """Return the trimmed input string, or a ValidationFailure if it is empty."""
    text = extract_input(body)
    if not text:
        return ValidationFailure(message=MISSING_INPUT_MESSAGE)
    return text


def parse_text(text: str) -> str:
    """Collapse every whitespace run into one space and trim the ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip(WHITESPACE_CHARS)


def analyze_text(parsed: str) -> TextMetrics:
    """
    Compute toy metrics over already-parsed text.

    Args:
        parsed: Output of `parse_text`

    Returns:
        TextMetrics where sentences falls back to 1 for non-empty text
        without any terminator, and everything is 0 for empty text.
    """
    if not parsed:
        return TextMetrics(words=0, chars=0, sentences=0)

    words = len(_WHITESPACE_RUN.split(parsed))
    chars = len(parsed)
    sentences = len(_TERMINATOR_RUN.findall(parsed)) or 1
    return TextMetrics(words=words, chars=chars, sentences=sentences)


def sentence_case(text: str) -> str:
    return text[:1].upper() + text[1:]


def summarize_text(parsed: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """
    Sentence-case the text and truncate it with an ellipsis.

    When truncation happens the result is exactly `max_chars` long:
    the first `max_chars - 3` characters followed by "...".
    """
    summary = sentence_case(parsed)
    if len(summary) > max_chars:
        summary = summary[: max_chars - len(ELLIPSIS)] + ELLIPSIS
    return summary


def run_pipeline(body: Any) -> Union[PipelineResult, ValidationFailure]:
    """
    Validate a decoded request body and run parse -> analyze -> summarize.

    No stage runs when validation fails, so no partial result can leak.
    """
    validated = validate_input(body)
    if isinstance(validated, ValidationFailure):
        logger.debug(f"Validation failed: {validated.message}")
        return validated

    parsed = parse_text(validated)
    metrics = analyze_text(parsed)
    summary = summarize_text(parsed)

    steps = [
        StepResult(name=StepName.PARSE),
        StepResult(name=StepName.ANALYZE, details=metrics.to_dict()),
        StepResult(name=StepName.SUMMARIZE),
    ]

    logger.debug(
        f"Pipeline done: words={metrics.words} chars={metrics.chars} "
        f"sentences={metrics.sentences} summary_len={len(summary)}"
    )

    return PipelineResult(
        received_input=validated,
        parsed=parsed,
        metrics=metrics,
        summary=summary,
        steps=steps,
    )
