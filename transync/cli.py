"""Typer-based command line interface for Transync."""

from __future__ import annotations
from pathlib import Path
from typing import Optional

import typer

from .core import convert, pdf_utils, sync
from .core.config import AlignConfig
from .core.errors import EmptyAlignment, FormatError
from .core.observer import AlignmentObserver, EchoObserver

app = typer.Typer(help="Transfer SRT timestamps onto a corrected interview transcript")


@app.command("sync")
def sync_cmd(
    transcript: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        help="Corrected transcript (.pdf or .txt) with speaker labels, or a turns JSON from `transync extract`",
    ),
    srt_file: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        help="Machine-generated SRT with accurate timing",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Destination SRT (default: <srt>_corrected.srt)",
    ),
    json_out: Optional[Path] = typer.Option(
        None,
        "--json-out",
        "-j",
        help="Also write the final segments as JSON",
    ),
    window: Optional[int] = typer.Option(
        None,
        help="Starting captions probed per search",
    ),
    max_range: Optional[int] = typer.Option(
        None,
        help="Most captions joined into one candidate span",
    ),
    anchor_confidence: Optional[float] = typer.Option(
        None,
        help="Minimum score for a turn to become an anchor",
    ),
    max_duration: Optional[int] = typer.Option(
        None,
        help="Split output segments longer than this many milliseconds",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every alignment decision"),
) -> None:
    """
    Write an SRT with the transcript's wording and the captions' timing.
    """
    try:
        config = AlignConfig.from_env().with_overrides(
            window_size=window,
            max_range_size=max_range,
            anchor_confidence=anchor_confidence,
            max_segment_ms=max_duration,
        )
    except ValueError as exc:
        typer.echo(f"❌  {exc}", err=True)
        raise typer.Exit(2) from exc

    observer = EchoObserver(typer.echo) if verbose else AlignmentObserver()
    try:
        report = sync.synchronize(transcript, srt_file, out, config, observer, json_out)
    except (EmptyAlignment, FormatError, RuntimeError, ValueError) as exc:
        typer.echo(f"❌  {exc}", err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"Original SRT subtitles: {report.original_subtitles}")
    typer.echo(f"Transcript speaker segments: {report.transcript_segments}")
    typer.echo(f"Anchored segments: {report.anchored_segments}/{report.aligned_segments}")
    typer.echo(f"Final segments: {report.final_segments}")
    typer.echo(f"Total duration: {report.duration}")


@app.command("extract")
def extract_cmd(
    transcript: Path = typer.Argument(..., exists=True, readable=True),
    out: Path = typer.Option(Path("turns.json"), "--out", "-o"),
) -> None:
    """Extract speaker turns from a PDF/TXT transcript to JSON."""
    try:
        pdf_utils.export_transcript_turns(transcript, out)
    except ValueError as exc:
        typer.echo(f"❌  {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command("to-txt")
def to_txt_cmd(
    segments_json: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        help="Segments JSON written by `transync sync --json-out`",
    ),
    out: Path = typer.Option(Path("transcript.txt"), "--out", "-o"),
) -> None:
    """Convert segments JSON to ``[start-end] Speaker: text`` lines."""
    convert.segments_to_txt(convert.segments_from_json(segments_json), out)
    typer.echo(f"✅ wrote {out}")


def main() -> None:
    """Run the Typer application."""
    app()


if __name__ == "__main__":
    main()
