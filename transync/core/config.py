"""Tuning knobs for the alignment engine.

All thresholds are heuristics.  Defaults work for interview captions exported
from common transcription services; every field can be overridden from the
environment (``TRANSYNC_<FIELD>``, upper case) or a ``.env`` file.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

__all__ = ["AlignConfig", "ENV_PREFIX"]

ENV_PREFIX = "TRANSYNC_"


@dataclass(frozen=True)
class AlignConfig:
    """Window sizes, confidence floors and duration caps.

    window_size:              starting captions probed per search
    max_range_size:           most captions joined into one candidate span
    min_confidence:           default floor for a believable match
    anchor_confidence:        floor for pass-1 anchors
    front_matter_confidence:  floor for the first transcript turn
    front_matter_probe:       how many leading turns may be front matter
    min_turn_tokens:          shorter turns are never taken as the start
    front_matter_range_size:  span limit while probing for the start
    size_threshold:           spans longer than this are penalised
    size_penalty:             score fraction lost per caption over the threshold
    early_stop_confidence:    raw score that ends a search early
    end_margin:               pass 1 stops this close to the last caption
    max_interpolated_ms:      longest duration given to a guessed placement
    interpolated_share_ratio: guessed duration as a fraction of the even share
    max_segment_ms:           output segments longer than this are split
    max_chunk_chars:          character budget of one split chunk
    """

    window_size: int = 30
    max_range_size: int = 30
    min_confidence: float = 0.3
    anchor_confidence: float = 0.45
    front_matter_confidence: float = 0.4
    front_matter_probe: int = 20
    min_turn_tokens: int = 5
    front_matter_range_size: int = 15
    size_threshold: int = 15
    size_penalty: float = 0.02
    early_stop_confidence: float = 0.75
    end_margin: int = 5
    max_interpolated_ms: int = 3000
    interpolated_share_ratio: float = 0.8
    max_segment_ms: int = 120_000
    max_chunk_chars: int = 200

    def __post_init__(self) -> None:
        for name in ("min_confidence", "anchor_confidence", "front_matter_confidence",
                     "early_stop_confidence", "size_penalty", "interpolated_share_ratio"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0.0, 1.0]")
        for name in ("window_size", "max_range_size", "front_matter_range_size",
                     "max_segment_ms", "max_chunk_chars"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be greater than 0")
        for name in ("front_matter_probe", "min_turn_tokens", "size_threshold",
                     "end_margin", "max_interpolated_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be greater than or equal to 0")

    def with_overrides(self, **overrides) -> "AlignConfig":
        """Return a copy with the non-``None`` *overrides* applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "AlignConfig":
        """Build a config from ``TRANSYNC_*`` variables.

        When *environ* is omitted the process environment is used after
        loading a ``.env`` file from the working directory.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        values = {}
        for f in fields(cls):
            raw = environ.get(prefix + f.name.upper())
            if raw is None or not raw.strip():
                continue
            cast = int if f.type in (int, "int") else float
            try:
                values[f.name] = cast(raw)
            except ValueError as exc:
                raise ValueError(f"{prefix}{f.name.upper()}={raw!r} is not a valid {cast.__name__}") from exc
        return cls(**values)
