"""
Export aligned segments as JSON or as a ``[start-end] Speaker: text`` list.
"""

import json
from pathlib import Path
from typing import Iterable, List

from .models import AlignedSegment
from .timecode import parse_timestamp


def segments_to_json(segments: Iterable[AlignedSegment], out_json: str | Path) -> None:
    data = [seg.to_dict() for seg in segments]
    Path(out_json).write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def segments_from_json(json_path: str | Path) -> List[AlignedSegment]:
    """Read segments written by :func:`segments_to_json`."""
    out = []
    for rec in json.loads(Path(json_path).read_text(encoding="utf-8")):
        start = rec["start_ms"] if "start_ms" in rec else parse_timestamp(rec["start"])
        end = rec["end_ms"] if "end_ms" in rec else parse_timestamp(rec["end"])
        out.append(AlignedSegment(
            speaker=rec["speaker"],
            text=rec["text"],
            start_ms=int(start),
            end_ms=int(end),
            source=rec.get("source", "anchored"),
            confidence=float(rec.get("confidence", 0.0)),
        ))
    return out


def segments_to_txt(segments: Iterable[AlignedSegment], out_txt: str | Path) -> None:
    with Path(out_txt).open("w", encoding="utf-8") as fh:
        for seg in segments:
            marker = "" if seg.anchored else " ~"
            text = seg.text.replace("\n", " ").strip()
            fh.write(f"[{seg.start_time}-{seg.end_time}]{marker} {seg.speaker}: {text}\n")
