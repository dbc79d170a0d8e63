"""Reading and writing SRT caption files."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

from .errors import FormatError
from .models import AlignedSegment, TimedEntry
from .timecode import parse_timestamp

__all__ = [
    "parse_srt",
    "load_srt",
    "format_speaker_label",
    "generate_srt",
    "write_srt",
]

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_TIME_LINE_RE = re.compile(r"(\d{2,}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2,}:\d{2}:\d{2},\d{3})")
_ANY_LABEL_RE = re.compile(r"^(?:Q\d+|[A-Z]|[A-Z][A-Z.'\- ]*[A-Z])\s*:\s*")


def parse_srt(text: str) -> List[TimedEntry]:
    """Return the captions of SRT *text*.

    Blocks with fewer than three lines or without a valid time line are
    skipped.  Multi-line caption text is joined with single spaces.
    """
    text = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    entries: List[TimedEntry] = []
    for block in _BLOCK_SPLIT_RE.split(text.strip()):
        lines = [ln.strip() for ln in block.strip().split("\n")]
        if len(lines) < 3:
            continue
        m = _TIME_LINE_RE.search(lines[1])
        if not m:
            continue
        try:
            start_ms, end_ms = parse_timestamp(m.group(1)), parse_timestamp(m.group(2))
        except FormatError:
            continue
        index = int(lines[0]) if lines[0].isdigit() else len(entries) + 1
        entries.append(TimedEntry(
            index=index,
            start_ms=start_ms,
            end_ms=max(start_ms, end_ms),
            text=" ".join(ln for ln in lines[2:] if ln),
        ))
    return entries


def load_srt(path: str | Path) -> List[TimedEntry]:
    return parse_srt(Path(path).read_text(encoding="utf-8", errors="replace"))


def format_speaker_label(speaker: str, text: str) -> str:
    """Return ``"Speaker:\\n<text>"`` without a duplicate inline label."""
    own = re.compile(rf"^{re.escape(speaker)}\s*:\s*", re.IGNORECASE)
    clean = own.sub("", text.strip(), count=1).strip()
    clean = _ANY_LABEL_RE.sub("", clean, count=1).strip()
    return f"{speaker}:\n{clean}"


def generate_srt(segments: Iterable[AlignedSegment]) -> str:
    blocks = []
    for n, seg in enumerate(segments, 1):
        blocks.append(
            f"{n}\n{seg.start_time} --> {seg.end_time}\n"
            f"{format_speaker_label(seg.speaker, seg.text)}"
        )
    return "\n\n".join(blocks)


def write_srt(segments: Iterable[AlignedSegment], path: str | Path) -> Path:
    path = Path(path)
    path.write_text(generate_srt(segments) + "\n", encoding="utf-8")
    return path
