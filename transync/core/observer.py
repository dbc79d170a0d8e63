"""Hooks that expose alignment decisions without printing from the engine.

The aligner calls :meth:`AlignmentObserver.notify` for every decision it
makes.  The base class ignores events; :class:`RecordingObserver` keeps them
for inspection and :class:`EchoObserver` turns them into log lines.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

__all__ = [
    "TRANSCRIPT_START",
    "ANCHOR_FOUND",
    "ANCHOR_MISSED",
    "TURN_INTERPOLATED",
    "ALIGNMENT_COMPLETE",
    "AlignmentObserver",
    "RecordingObserver",
    "EchoObserver",
]

TRANSCRIPT_START = "transcript_start"
ANCHOR_FOUND = "anchor_found"
ANCHOR_MISSED = "anchor_missed"
TURN_INTERPOLATED = "turn_interpolated"
ALIGNMENT_COMPLETE = "alignment_complete"


class AlignmentObserver:
    """No-op observer; subclass and override :meth:`notify`."""

    def notify(self, event: str, **payload: Any) -> None:
        pass


class RecordingObserver(AlignmentObserver):
    """Keep every ``(event, payload)`` pair in :attr:`events`."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def notify(self, event: str, **payload: Any) -> None:
        self.events.append((event, payload))

    def of(self, event: str) -> List[Dict[str, Any]]:
        """Return payloads recorded for *event*, in order."""
        return [p for e, p in self.events if e == event]


class EchoObserver(AlignmentObserver):
    """Format each event as one line and hand it to *echo*."""

    def __init__(self, echo: Callable[[str], None] = print) -> None:
        self.echo = echo

    def notify(self, event: str, **payload: Any) -> None:
        if event == TRANSCRIPT_START:
            self.echo(f"🔍  transcript starts at turn {payload['start_index']}")
        elif event == ANCHOR_FOUND:
            a = payload["anchor"]
            self.echo(
                f"⚓  turn {a.turn_index} ({a.speaker}) anchored "
                f"{a.start_ms}-{a.end_ms} ms · {a.confidence:.2f}"
            )
        elif event == ANCHOR_MISSED:
            self.echo(f"·   turn {payload['turn_index']} unmatched at caption {payload['cursor']}")
        elif event == TURN_INTERPOLATED:
            self.echo(
                f"~   turn {payload['turn_index']} interpolated ({payload['strategy']}) "
                f"at {payload['start_ms']} ms"
            )
        elif event == ALIGNMENT_COMPLETE:
            self.echo(
                f"✅  {payload['anchored']} anchored · "
                f"{payload['interpolated']} interpolated"
            )
        else:
            self.echo(f"{event}: {payload}")
