import re
from pathlib import Path
from typing import List

from pdfminer.high_level import extract_text

from .core.models import ReferenceTurn

# Speaker labels are question numbers ("Q1:") or a capitalised name
# ("FUCHS:", "INTERVIEWER:") followed by a colon.  Anything before the first
# label is cover-page text and is dropped.
SPEAKER_RE = re.compile(r"\b(Q\d+|[A-Z][A-Z]+)\s*:\s*")
WS_RE = re.compile(r"\s+")

SUPPORTED_SUFFIXES = (".pdf", ".txt")


def extract_document_text(path: str | Path) -> str:
    """Return the plain text of a ``.pdf`` or ``.txt`` transcript."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return path.read_text(encoding="utf-8", errors="replace").lstrip("\ufeff")
    if suffix == ".pdf":
        pages = extract_text(str(path)).split("\f")
        return "\n".join(WS_RE.sub(" ", page).strip() for page in pages if page.strip())
    raise ValueError(f"Unsupported transcript type: {path.suffix or path.name} (expected .pdf or .txt)")


def parse_speaker_turns(text: str) -> List[ReferenceTurn]:
    """Split *text* into ``ReferenceTurn`` records at speaker labels."""
    turns: List[ReferenceTurn] = []
    matches = list(SPEAKER_RE.finditer(text))
    for m, nxt in zip(matches, matches[1:] + [None]):
        body = text[m.end(): nxt.start() if nxt else len(text)]
        body = WS_RE.sub(" ", body).strip()
        if body:
            turns.append(ReferenceTurn(speaker=m.group(1), text=body))
    if not turns:
        print("⚠️  no speaker labels found in transcript")
    return turns


def parse_transcript(path: str | Path) -> List[ReferenceTurn]:
    """Return the speaker turns of the transcript at *path*."""
    return parse_speaker_turns(extract_document_text(path))


def main():
    import sys

    for turn in parse_transcript(sys.argv[1]):
        print(f"{turn.speaker}: {turn.text}")


if __name__ == "__main__":
    main()
