"""Records passed between the ingestion, alignment and reshaping stages.

Every record is a frozen dataclass.  The aligner builds new records instead of
updating old ones, so a result can be reused without aliasing surprises.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .timecode import format_timestamp

__all__ = [
    "ANCHORED",
    "INTERPOLATED",
    "TimedEntry",
    "ReferenceTurn",
    "Anchor",
    "Match",
    "AlignedSegment",
    "AlignmentResult",
]

ANCHORED = "anchored"
INTERPOLATED = "interpolated"


@dataclass(frozen=True)
class TimedEntry:
    """One caption of the timed transcript.

    Attributes:
        index: position in the source file (informational only)
        start_ms: caption start in milliseconds
        end_ms: caption end in milliseconds
        text: uncorrected caption text
    """

    index: int
    start_ms: int
    end_ms: int
    text: str

    @property
    def start_time(self) -> str:
        return format_timestamp(self.start_ms)

    @property
    def end_time(self) -> str:
        return format_timestamp(self.end_ms)


@dataclass(frozen=True)
class ReferenceTurn:
    """One speaker turn of the corrected transcript (no timing)."""

    speaker: str
    text: str


@dataclass(frozen=True)
class Anchor:
    """High-confidence placement of a reference turn, made in pass 1."""

    turn_index: int
    speaker: str
    start_ms: int
    end_ms: int
    confidence: float


@dataclass(frozen=True)
class Match:
    """Best caption range found by the window search.

    ``confidence`` is the raw similarity of the range, before the size
    penalty used to rank candidates.
    """

    start_index: int
    end_index: int
    start_ms: int
    end_ms: int
    confidence: float

    @property
    def size(self) -> int:
        return self.end_index - self.start_index + 1


@dataclass(frozen=True)
class AlignedSegment:
    """A timed, speaker-labelled piece of corrected text.

    ``source`` tells measured timing (``"anchored"``) apart from a placement
    guess (``"interpolated"``).
    """

    speaker: str
    text: str
    start_ms: int
    end_ms: int
    source: str = ANCHORED
    confidence: float = 0.0

    @property
    def start_time(self) -> str:
        return format_timestamp(self.start_ms)

    @property
    def end_time(self) -> str:
        return format_timestamp(self.end_ms)

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def anchored(self) -> bool:
        return self.source == ANCHORED

    def to_dict(self) -> dict:
        return {
            "speaker": self.speaker,
            "text": self.text,
            "start": self.start_time,
            "end": self.end_time,
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "source": self.source,
            "confidence": round(self.confidence, 6),
        }


@dataclass(frozen=True)
class AlignmentResult:
    """Output of one :func:`transync.core.align.align` run."""

    start_index: int
    anchors: Tuple[Anchor, ...] = field(default_factory=tuple)
    segments: Tuple[AlignedSegment, ...] = field(default_factory=tuple)

    @property
    def anchored_count(self) -> int:
        return sum(1 for seg in self.segments if seg.anchored)

    @property
    def interpolated_count(self) -> int:
        return len(self.segments) - self.anchored_count
