"""Reshape aligned segments into final speaker turns.

Consecutive segments of one speaker are merged so timestamps only appear at
speaker changes; turns longer than the duration cap are then split at
sentence (or word) boundaries with their time shared out evenly.
"""
from __future__ import annotations

import math
import re
from dataclasses import replace
from typing import Iterable, List, Optional

from .config import AlignConfig
from .models import ANCHORED, INTERPOLATED, AlignedSegment

__all__ = [
    "merge_by_speaker",
    "split_text_into_chunks",
    "split_long_segments",
    "process_segments",
]

MAX_SEGMENT_MS = 120_000
MAX_CHUNK_CHARS = 200

_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+")


def merge_by_speaker(segments: Iterable[AlignedSegment]) -> List[AlignedSegment]:
    """Fold runs of equal ``speaker`` into single segments.

    Speakers must match exactly.  A merged segment is ``anchored`` only when
    every part was, and carries the lowest confidence of its parts.
    """
    merged: List[AlignedSegment] = []
    for seg in segments:
        if merged and merged[-1].speaker == seg.speaker:
            last = merged[-1]
            both_anchored = last.source == ANCHORED and seg.source == ANCHORED
            merged[-1] = replace(
                last,
                text=f"{last.text} {seg.text}",
                end_ms=max(last.end_ms, seg.end_ms),
                source=ANCHORED if both_anchored else INTERPOLATED,
                confidence=min(last.confidence, seg.confidence),
            )
        else:
            merged.append(seg)
    return merged


def _split_words(text: str, max_length: int) -> List[str]:
    chunks: List[str] = []
    current = ""
    for word in text.split():
        if current and len(current) + 1 + len(word) > max_length:
            chunks.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        chunks.append(current)
    return chunks


def _sentences(text: str) -> List[str]:
    found = []
    end = 0
    for m in _SENTENCE_RE.finditer(text):
        found.append(m.group(0))
        end = m.end()
    # text after the last terminator, e.g. a sentence cut off by the page
    if text[end:].strip():
        found.append(text[end:])
    return found


def split_text_into_chunks(text: str, max_length: int = MAX_CHUNK_CHARS) -> List[str]:
    """Split *text* into chunks of at most *max_length* characters.

    Whole sentences are packed greedily; a chunk that is still too long (one
    very long sentence, or text without punctuation) is broken between words.
    Order is preserved and no words are dropped.
    """
    text = text.strip()
    if not text:
        return [text]

    packed: List[str] = []
    current = ""
    for sentence in _sentences(text):
        if current and len(current) + len(sentence) > max_length:
            packed.append(current.strip())
            current = sentence
        else:
            current += sentence
    if current.strip():
        packed.append(current.strip())

    chunks: List[str] = []
    for chunk in packed:
        if len(chunk) > max_length:
            chunks.extend(_split_words(chunk, max_length))
        else:
            chunks.append(chunk)
    return chunks or [text]


def _halve(chunk: str) -> Optional[List[str]]:
    words = chunk.split()
    if len(words) < 2:
        return None
    mid = len(words) // 2
    return [" ".join(words[:mid]), " ".join(words[mid:])]


def _at_least(chunks: List[str], text: str, needed: int, max_length: int) -> List[str]:
    """Divide chunks further until there are *needed* of them, if possible.

    Pieces only ever get shorter, so none exceeds *max_length*.
    """
    if len(chunks) >= needed:
        return chunks
    sentences = []
    for s in _sentences(text.strip()):
        if s.strip():
            sentences.extend(_split_words(s.strip(), max_length))
    if len(sentences) > len(chunks):
        chunks = sentences
    chunks = list(chunks)
    while len(chunks) < needed:
        order = sorted(range(len(chunks)), key=lambda k: len(chunks[k].split()), reverse=True)
        for k in order:
            halves = _halve(chunks[k])
            if halves:
                chunks[k:k + 1] = halves
                break
        else:
            break
    return chunks


def split_long_segments(
    segments: Iterable[AlignedSegment],
    max_duration_ms: int = MAX_SEGMENT_MS,
    max_chunk_chars: int = MAX_CHUNK_CHARS,
) -> List[AlignedSegment]:
    """Split every segment longer than *max_duration_ms*.

    Each chunk gets an equal share of the original span; the last chunk ends
    exactly at the original ``end_ms`` so the covered span never changes.
    """
    result: List[AlignedSegment] = []
    for seg in segments:
        duration = seg.end_ms - seg.start_ms
        if duration <= max_duration_ms:
            result.append(seg)
            continue

        needed = math.ceil(duration / max_duration_ms)
        chunks = _at_least(
            split_text_into_chunks(seg.text, max_chunk_chars), seg.text, needed, max_chunk_chars
        )
        count = len(chunks)
        for k, chunk in enumerate(chunks):
            start_ms = seg.start_ms + duration * k // count
            end_ms = seg.end_ms if k == count - 1 else seg.start_ms + duration * (k + 1) // count
            result.append(replace(seg, text=chunk, start_ms=start_ms, end_ms=end_ms))
    return result


def process_segments(
    segments: Iterable[AlignedSegment],
    config: Optional[AlignConfig] = None,
) -> List[AlignedSegment]:
    """Merge by speaker, then split overlong turns."""
    config = config or AlignConfig()
    return split_long_segments(
        merge_by_speaker(segments),
        max_duration_ms=config.max_segment_ms,
        max_chunk_chars=config.max_chunk_chars,
    )
