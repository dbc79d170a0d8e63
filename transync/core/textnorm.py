"""Text canonicalization shared by every comparison in the aligner."""
from __future__ import annotations

import re
from typing import List

__all__ = ["normalize"]

_WS_RE = re.compile(r"\s+")
_STRIP_RE = re.compile(r"[^\w\s'\"]", re.ASCII)
_QUOTES = str.maketrans({
    "\u201c": "\"",
    "\u201d": "\"",
    "\u2018": "'",
    "\u2019": "'",
})


def normalize(text: str) -> List[str]:
    """Return the lowercase word tokens of *text*.

    Curly quotes become straight ones and every character other than ASCII
    letters, digits, underscore, whitespace and quote marks is dropped, so
    case folding never depends on the locale.
    """
    text = _WS_RE.sub(" ", text or "").translate(_QUOTES)
    text = _STRIP_RE.sub("", text).lower()
    return text.split()
