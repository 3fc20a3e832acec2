"""AI Pipe core: deterministic text pipeline, settings and logging."""

__version__ = "1.0.0"
