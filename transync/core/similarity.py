"""Confidence score between two token sequences.

The score mixes three signals:

* vocabulary overlap (Jaccard over unique tokens), robust to reordering and
  recognition noise;
* length ratio, which punishes spans of very different size;
* in-order matches, since both sources come from the same speech.
"""
from __future__ import annotations

from typing import Sequence

__all__ = ["jaccard", "length_ratio", "sequential_score", "similarity"]

JACCARD_WEIGHT = 0.5
LENGTH_WEIGHT = 0.2
SEQUENTIAL_WEIGHT = 0.3


def jaccard(a: Sequence[str], b: Sequence[str]) -> float:
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def length_ratio(a: Sequence[str], b: Sequence[str]) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return min(len(a), len(b)) / longest


def sequential_score(a: Sequence[str], b: Sequence[str]) -> float:
    """Fraction of tokens of *a* found in order at the *b* cursor."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    matches = 0
    j = 0
    for tok in a:
        if j >= len(b):
            break
        if tok == b[j]:
            matches += 1
            j += 1
    return matches / longest


def similarity(a: Sequence[str], b: Sequence[str]) -> float:
    """Return a score in ``[0, 1]`` for token sequences *a* and *b*."""
    return (
        JACCARD_WEIGHT * jaccard(a, b)
        + LENGTH_WEIGHT * length_ratio(a, b)
        + SEQUENTIAL_WEIGHT * sequential_score(a, b)
    )
