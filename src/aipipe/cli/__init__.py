"""Command-line entry points."""

from .serve import main as serve_main

__all__ = ["serve_main"]
