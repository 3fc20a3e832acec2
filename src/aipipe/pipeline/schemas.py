from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class StepName(Enum):
    PARSE = "parse"
    ANALYZE = "analyze"
    SUMMARIZE = "summarize"


class StepStatus(Enum):
    OK = "ok"


@dataclass(frozen=True)
class TextMetrics:
    """Toy statistics computed from the parsed text"""
    words: int
    chars: int
    sentences: int

    def to_dict(self) -> Dict[str, int]:
        return {"words": self.words, "chars": self.chars, "sentences": self.sentences}


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single pipeline stage"""
    name: StepName
    status: StepStatus = StepStatus.OK
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        # details is omitted entirely (not null) for stages that carry none
        out: Dict[str, Any] = {"name": self.name.value, "status": self.status.value}
        if self.details is not None:
            out["details"] = dict(self.details)
        return out


@dataclass(frozen=True)
class PipelineResult:
    """
    Result of running all three stages over one validated input.

    `received_input` is the trimmed raw string; `parsed` is the
    whitespace-collapsed form. The two are kept apart on purpose.
    """
    received_input: str
    parsed: str
    metrics: TextMetrics
    summary: str
    steps: List[StepResult] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationFailure:
    """Returned instead of a PipelineResult when the request input is unusable"""
    message: str
