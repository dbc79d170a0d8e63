"""
Two-pass transcript ⇆ caption aligner.

Stages
------
0. front matter  – skip cover pages / consent text before the interview body
1. anchors       – greedy window search, strict confidence floor
2. interpolation – every turn without an anchor gets a placement derived
                   from its neighbouring anchors (or the caption duration)

API  ::  align(turns, entries, config=None, observer=None)
Returns an :class:`AlignmentResult` holding one segment per reference turn
from the detected start onward, each flagged ``anchored`` or ``interpolated``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .config import AlignConfig
from .errors import EmptyAlignment
from .models import (
    ANCHORED,
    INTERPOLATED,
    AlignedSegment,
    AlignmentResult,
    Anchor,
    Match,
    ReferenceTurn,
    TimedEntry,
)
from .observer import (
    ALIGNMENT_COMPLETE,
    ANCHOR_FOUND,
    ANCHOR_MISSED,
    TRANSCRIPT_START,
    TURN_INTERPOLATED,
    AlignmentObserver,
)
from .similarity import similarity
from .textnorm import normalize

__all__ = ["find_best_match", "find_transcript_start", "align"]


# -------------------------------------------------------------------
# window search
def find_best_match(
    target: Sequence[str],
    entries: Sequence[TimedEntry],
    start_index: int = 0,
    *,
    window_size: int = 30,
    max_range_size: int = 30,
    min_confidence: float = 0.3,
    size_threshold: int = 15,
    size_penalty: float = 0.02,
    early_stop_confidence: float = 0.75,
    entry_tokens: Optional[Sequence[Sequence[str]]] = None,
) -> Optional[Match]:
    """Return the caption range of *entries* that best matches *target*.

    Candidate ranges start within ``window_size`` captions of *start_index*
    and span at most ``max_range_size`` captions.  Ranges longer than
    ``size_threshold`` lose ``size_penalty`` of their score per extra caption;
    the penalised score ranks candidates while the reported confidence stays
    the raw similarity.  ``None`` means nothing reached *min_confidence*.
    """
    if not target or start_index < 0 or start_index >= len(entries):
        return None
    if entry_tokens is None:
        entry_tokens = [normalize(e.text) for e in entries]

    n = len(entries)
    best: Optional[tuple[float, float, int, int]] = None  # ranked, raw, i, j
    stop = False

    for i in range(start_index, min(start_index + window_size, n)):
        tokens: List[str] = []
        for j in range(i, min(i + max_range_size, n)):
            tokens.extend(entry_tokens[j])
            raw = similarity(target, tokens)
            size = j - i + 1
            over = max(0, size - size_threshold)
            ranked = raw * max(0.0, 1.0 - size_penalty * over)
            if best is None or ranked > best[0]:
                best = (ranked, raw, i, j)
            if raw > early_stop_confidence and size <= size_threshold:
                stop = True
                break
        if stop:
            break

    if best is None or best[1] < min_confidence:
        return None
    _, raw, i, j = best
    return Match(
        start_index=i,
        end_index=j,
        start_ms=entries[i].start_ms,
        end_ms=entries[j].end_ms,
        confidence=raw,
    )


def _search(
    target: Sequence[str],
    entries: Sequence[TimedEntry],
    start_index: int,
    config: AlignConfig,
    entry_tokens: Sequence[Sequence[str]],
    *,
    min_confidence: float,
    max_range_size: Optional[int] = None,
) -> Optional[Match]:
    return find_best_match(
        target,
        entries,
        start_index,
        window_size=config.window_size,
        max_range_size=max_range_size or config.max_range_size,
        min_confidence=min_confidence,
        size_threshold=config.size_threshold,
        size_penalty=config.size_penalty,
        early_stop_confidence=config.early_stop_confidence,
        entry_tokens=entry_tokens,
    )


# -------------------------------------------------------------------
# front matter
def find_transcript_start(
    turns: Sequence[ReferenceTurn],
    entries: Sequence[TimedEntry],
    config: Optional[AlignConfig] = None,
    observer: Optional[AlignmentObserver] = None,
    *,
    entry_tokens: Optional[Sequence[Sequence[str]]] = None,
) -> int:
    """Return the index of the first turn that belongs to the interview.

    Leading turns too short to be speech (titles, headers) are passed over.
    The first long enough turn that matches the opening captions wins; if
    none of the probed turns does, the transcript starts at 0.
    """
    config = config or AlignConfig()
    observer = observer or AlignmentObserver()
    if entry_tokens is None:
        entry_tokens = [normalize(e.text) for e in entries]

    start = 0
    for idx in range(min(config.front_matter_probe, len(turns))):
        tokens = normalize(turns[idx].text)
        if len(tokens) < config.min_turn_tokens:
            continue
        match = _search(
            tokens, entries, 0, config, entry_tokens,
            min_confidence=config.front_matter_confidence,
            max_range_size=config.front_matter_range_size,
        )
        if match is not None:
            start = idx
            break

    observer.notify(TRANSCRIPT_START, start_index=start)
    return start


# -------------------------------------------------------------------
# pass 2 helpers
def _interpolated(
    turn: ReferenceTurn,
    turn_index: int,
    start: float,
    share: float,
    config: AlignConfig,
    strategy: str,
    observer: AlignmentObserver,
) -> AlignedSegment:
    start_ms = max(0, int(round(start)))
    duration = min(config.max_interpolated_ms, share * config.interpolated_share_ratio)
    end_ms = start_ms + max(0, int(duration))
    observer.notify(
        TURN_INTERPOLATED,
        turn_index=turn_index,
        strategy=strategy,
        start_ms=start_ms,
        end_ms=end_ms,
    )
    return AlignedSegment(
        speaker=turn.speaker,
        text=turn.text,
        start_ms=start_ms,
        end_ms=end_ms,
        source=INTERPOLATED,
        confidence=0.0,
    )


def _interpolate(
    turns: Sequence[ReferenceTurn],
    turn_index: int,
    start_index: int,
    ordered: List[Anchor],
    total_ms: int,
    config: AlignConfig,
    observer: AlignmentObserver,
) -> AlignedSegment:
    turn = turns[turn_index]
    prev = next((a for a in reversed(ordered) if a.turn_index < turn_index), None)
    nxt = next((a for a in ordered if a.turn_index > turn_index), None)

    if prev is not None and nxt is not None:
        gap = max(0, nxt.start_ms - prev.end_ms)
        slots = nxt.turn_index - prev.turn_index - 1
        share = gap / slots
        pos = turn_index - prev.turn_index - 1
        return _interpolated(turn, turn_index, prev.end_ms + share * pos, share,
                             config, "between", observer)

    if nxt is not None:
        # before the first anchor: even spacing back from its start
        slots = nxt.turn_index - start_index
        share = nxt.start_ms / slots
        start = nxt.start_ms - share * (nxt.turn_index - turn_index)
        return _interpolated(turn, turn_index, start, share, config, "leading", observer)

    if prev is not None:
        remaining = max(0, total_ms - prev.end_ms)
        slots = len(turns) - prev.turn_index - 1
        share = remaining / slots
        pos = turn_index - prev.turn_index - 1
        return _interpolated(turn, turn_index, prev.end_ms + share * pos, share,
                             config, "trailing", observer)

    slots = len(turns) - start_index
    share = total_ms / slots
    return _interpolated(turn, turn_index, share * (turn_index - start_index), share,
                         config, "uniform", observer)


# -------------------------------------------------------------------
# public entry point
def align(
    turns: Sequence[ReferenceTurn],
    entries: Sequence[TimedEntry],
    config: Optional[AlignConfig] = None,
    observer: Optional[AlignmentObserver] = None,
) -> AlignmentResult:
    """
    Place every reference turn from the transcript start onto the caption
    timeline.

    Pass 1 walks the turns in order with a forward-only caption cursor and
    keeps only confident matches as anchors.  Pass 2 emits one segment per
    turn: anchors verbatim, the rest interpolated between them.
    """
    config = config or AlignConfig()
    observer = observer or AlignmentObserver()

    if not entries:
        raise EmptyAlignment("No caption entries to align against.")
    if not turns:
        raise EmptyAlignment("No transcript turns to align.")

    entry_tokens = [normalize(e.text) for e in entries]
    start_index = find_transcript_start(turns, entries, config, observer,
                                        entry_tokens=entry_tokens)
    if start_index >= len(turns):
        raise EmptyAlignment("No transcript turns left after skipping front matter.")

    # ---- 1·ANCHORS --------------------------------------------------
    anchors: Dict[int, Anchor] = {}
    cursor = 0
    for idx in range(start_index, len(turns)):
        if cursor >= len(entries):
            break
        turn = turns[idx]
        match = _search(normalize(turn.text), entries, cursor, config, entry_tokens,
                        min_confidence=config.anchor_confidence)
        if match is not None:
            anchor = Anchor(
                turn_index=idx,
                speaker=turn.speaker,
                start_ms=match.start_ms,
                end_ms=match.end_ms,
                confidence=match.confidence,
            )
            anchors[idx] = anchor
            observer.notify(ANCHOR_FOUND, anchor=anchor, cursor=cursor, match=match)
            cursor = match.end_index + 1
        else:
            observer.notify(ANCHOR_MISSED, turn_index=idx, cursor=cursor)
            cursor += 1
        if cursor >= len(entries) - config.end_margin:
            break

    # ---- 2·INTERPOLATION --------------------------------------------
    ordered = sorted(anchors.values(), key=lambda a: a.turn_index)
    total_ms = max(e.end_ms for e in entries)
    segments: List[AlignedSegment] = []
    for idx in range(start_index, len(turns)):
        anchor = anchors.get(idx)
        if anchor is not None:
            segments.append(AlignedSegment(
                speaker=turns[idx].speaker,
                text=turns[idx].text,
                start_ms=anchor.start_ms,
                end_ms=anchor.end_ms,
                source=ANCHORED,
                confidence=anchor.confidence,
            ))
        else:
            segments.append(_interpolate(turns, idx, start_index, ordered,
                                         total_ms, config, observer))

    result = AlignmentResult(
        start_index=start_index,
        anchors=tuple(ordered),
        segments=tuple(segments),
    )
    observer.notify(
        ALIGNMENT_COMPLETE,
        start_index=start_index,
        anchored=result.anchored_count,
        interpolated=result.interpolated_count,
    )
    return result
