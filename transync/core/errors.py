"""Exceptions raised by the alignment engine."""
from __future__ import annotations

__all__ = ["FormatError", "EmptyAlignment"]


class FormatError(ValueError):
    """Malformed timestamp string or out-of-range millisecond value."""


class EmptyAlignment(RuntimeError):
    """The transcript and the captions could not be related at all."""
