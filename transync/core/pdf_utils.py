import json
from pathlib import Path
from typing import List

from .. import parse_pdf_text
from .models import ReferenceTurn

__all__ = [
    "extract_speaker_names",
    "extract_transcript_dialogue",
    "export_transcript_turns",
    "load_transcript_turns",
]


def extract_transcript_dialogue(path: str | Path) -> List[ReferenceTurn]:
    """Return the ``(speaker, text)`` turns of a PDF or TXT transcript.

    Delegates to :func:`transync.parse_pdf_text.parse_transcript`.
    """
    return parse_pdf_text.parse_transcript(path)


def extract_speaker_names(path: str | Path) -> List[str]:
    """Return the distinct speaker labels of *path* in order of appearance."""
    names: List[str] = []
    for turn in extract_transcript_dialogue(path):
        if turn.speaker not in names:
            names.append(turn.speaker)
    return names


def export_transcript_turns(path: str | Path, out_json: str | Path) -> int:
    """Write the speaker turns of *path* to *out_json*; return the count."""
    turns = extract_transcript_dialogue(path)
    data = [{"speaker": t.speaker, "text": t.text} for t in turns]
    Path(out_json).write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"✅  {len(turns)} speaker turn(s) → {out_json}")
    return len(turns)


def load_transcript_turns(json_path: str | Path) -> List[ReferenceTurn]:
    """Read turns written by :func:`export_transcript_turns`."""
    data = json.loads(Path(json_path).read_text(encoding="utf-8"))
    return [ReferenceTurn(speaker=str(d["speaker"]), text=str(d["text"])) for d in data]
