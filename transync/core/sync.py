"""End-to-end synchronisation of a corrected transcript with an SRT file."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import pdf_utils, segmentation, subtitles
from .align import align
from .config import AlignConfig
from .errors import EmptyAlignment
from .observer import AlignmentObserver
from .timecode import format_duration

__all__ = ["SyncReport", "corrected_srt_path", "synchronize"]


@dataclass(frozen=True)
class SyncReport:
    """Counts reported after a run."""

    original_subtitles: int
    transcript_segments: int
    aligned_segments: int
    anchored_segments: int
    final_segments: int
    duration: str
    out_path: Path


def corrected_srt_path(srt_path: str | Path) -> Path:
    """``interview.srt`` → ``interview_corrected.srt`` next to the input."""
    path = Path(srt_path)
    return path.with_name(f"{path.stem}_corrected.srt")


def synchronize(
    transcript_path: str | Path,
    srt_path: str | Path,
    out_path: str | Path | None = None,
    config: Optional[AlignConfig] = None,
    observer: Optional[AlignmentObserver] = None,
    json_out: str | Path | None = None,
) -> SyncReport:
    """Write an SRT with the wording of *transcript_path* and the timing of
    *srt_path*.

    *transcript_path* is a PDF or TXT transcript, or a turns JSON written by
    :func:`pdf_utils.export_transcript_turns`.

    Raises ``RuntimeError`` when either input has nothing usable and
    :class:`EmptyAlignment` when the two could not be related.
    """
    config = config or AlignConfig()
    out = Path(out_path) if out_path else corrected_srt_path(srt_path)

    print(f"📄  reading transcript {transcript_path}")
    if Path(transcript_path).suffix.lower() == ".json":
        # turns saved by `transync extract`, possibly hand-edited
        turns = pdf_utils.load_transcript_turns(transcript_path)
    else:
        turns = pdf_utils.extract_transcript_dialogue(transcript_path)
    if not turns:
        raise RuntimeError(f"No speaker turns found in {transcript_path}")
    print(f"    {len(turns)} speaker turn(s)")

    entries = subtitles.load_srt(srt_path)
    if not entries:
        raise RuntimeError(f"No subtitles found in {srt_path}")
    print(f"    {len(entries)} subtitle(s) in {srt_path}")

    print("🧭  aligning transcript …")
    result = align(turns, entries, config, observer)
    if not result.segments:
        raise EmptyAlignment(
            "Could not align the texts. Please ensure the transcript and SRT "
            "files are from the same interview."
        )

    final = segmentation.process_segments(result.segments, config)
    subtitles.write_srt(final, out)
    if json_out:
        from .convert import segments_to_json

        segments_to_json(final, json_out)

    report = SyncReport(
        original_subtitles=len(entries),
        transcript_segments=len(turns),
        aligned_segments=len(result.segments),
        anchored_segments=result.anchored_count,
        final_segments=len(final),
        duration=format_duration(final[-1].end_ms),
        out_path=out,
    )
    print(f"✅  {report.final_segments} segment(s) → {out}")
    return report
