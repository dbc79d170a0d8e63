import pytest

from transync.core.config import AlignConfig


def test_defaults():
    cfg = AlignConfig()
    assert cfg.anchor_confidence > cfg.min_confidence
    assert cfg.max_segment_ms == 120_000
    assert cfg.max_interpolated_ms == 3000


def test_from_env_mapping():
    cfg = AlignConfig.from_env({
        "TRANSYNC_WINDOW_SIZE": "12",
        "TRANSYNC_ANCHOR_CONFIDENCE": "0.6",
        "TRANSYNC_END_MARGIN": "",
        "OTHER": "1",
    })
    assert cfg.window_size == 12
    assert cfg.anchor_confidence == 0.6
    assert cfg.end_margin == AlignConfig().end_margin


def test_from_env_process(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TRANSYNC_MAX_CHUNK_CHARS", "150")
    assert AlignConfig.from_env().max_chunk_chars == 150


def test_from_env_invalid():
    with pytest.raises(ValueError):
        AlignConfig.from_env({"TRANSYNC_WINDOW_SIZE": "many"})


@pytest.mark.parametrize("kwargs", [
    {"anchor_confidence": 1.5},
    {"window_size": 0},
    {"end_margin": -1},
    {"size_penalty": -0.1},
])
def test_validation(kwargs):
    with pytest.raises(ValueError):
        AlignConfig(**kwargs)


def test_with_overrides_ignores_none():
    cfg = AlignConfig().with_overrides(window_size=None, max_range_size=8)
    assert cfg.window_size == AlignConfig().window_size
    assert cfg.max_range_size == 8
