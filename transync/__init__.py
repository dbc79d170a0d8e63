"""Transync package."""

from .core import (
    align,
    config,
    convert,
    errors,
    models,
    observer,
    pdf_utils,
    segmentation,
    similarity,
    subtitles,
    sync,
    textnorm,
    timecode,
)

__all__ = [
    "align",
    "config",
    "convert",
    "errors",
    "models",
    "observer",
    "pdf_utils",
    "segmentation",
    "similarity",
    "subtitles",
    "sync",
    "textnorm",
    "timecode",
]
