"""Conversion between SRT timestamps and integer milliseconds."""
from __future__ import annotations

import re

from .errors import FormatError

__all__ = ["parse_timestamp", "format_timestamp", "format_duration"]

_TS_RE = re.compile(r"^(\d{2,}):([0-5]\d):([0-5]\d),(\d{3})$")


def parse_timestamp(ts: str) -> int:
    """Return ``HH:MM:SS,mmm`` as milliseconds.

    Raises :class:`FormatError` when *ts* does not follow the pattern.
    """
    if not isinstance(ts, str):
        raise FormatError(f"timestamp must be a string, got {type(ts).__name__}")
    m = _TS_RE.match(ts.strip())
    if not m:
        raise FormatError(f"malformed timestamp: {ts!r}")
    h, mnt, s, ms = (int(g) for g in m.groups())
    return h * 3_600_000 + mnt * 60_000 + s * 1000 + ms


def format_timestamp(ms: int) -> str:
    """Return *ms* as a zero-padded ``HH:MM:SS,mmm`` string."""
    if isinstance(ms, bool) or not isinstance(ms, int) or ms < 0:
        raise FormatError(f"milliseconds must be a non-negative integer, got {ms!r}")
    h, rest = divmod(ms, 3_600_000)
    m, rest = divmod(rest, 60_000)
    s, milli = divmod(rest, 1000)
    return f"{h:02d}:{m:02d}:{s:02d},{milli:03d}"


def format_duration(ms: int) -> str:
    """Short human form used in run summaries, e.g. ``1h 2m 3s``."""
    h, rest = divmod(max(int(ms), 0), 3_600_000)
    m, rest = divmod(rest, 60_000)
    s = rest // 1000
    if h:
        return f"{h}h {m}m {s}s"
    if m:
        return f"{m}m {s}s"
    return f"{s}s"
