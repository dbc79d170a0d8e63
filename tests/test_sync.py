import json

import pytest

from transync.core import sync
from transync.core.config import AlignConfig
from transync.core.observer import ANCHOR_FOUND, RecordingObserver

TRANSCRIPT = (
    "Oral History Project - Interview Consent Form\n"
    "Q1: Hello world, how are you?\n"
    "FUCHS: I am fine, thank you very much.\n"
)

SRT = (
    "1\n00:00:00,000 --> 00:00:02,000\nhello world\n\n"
    "2\n00:00:02,000 --> 00:00:04,000\nhow are you\n\n"
    "3\n00:00:04,000 --> 00:00:06,000\ni am fine thank you\n\n"
    "4\n00:00:06,000 --> 00:00:07,000\nvery much\n"
)


@pytest.fixture
def inputs(tmp_path):
    transcript = tmp_path / "interview.txt"
    transcript.write_text(TRANSCRIPT)
    srt = tmp_path / "interview.srt"
    srt.write_text(SRT)
    return transcript, srt


def test_synchronize(inputs, tmp_path, capsys):
    transcript, srt = inputs
    observer = RecordingObserver()
    report = sync.synchronize(transcript, srt, config=AlignConfig(end_margin=0), observer=observer)

    assert report.out_path == tmp_path / "interview_corrected.srt"
    assert report.out_path.read_text() == (
        "1\n00:00:00,000 --> 00:00:04,000\nQ1:\nHello world, how are you?\n\n"
        "2\n00:00:04,000 --> 00:00:07,000\nFUCHS:\nI am fine, thank you very much.\n"
    )
    assert report.original_subtitles == 4
    assert report.transcript_segments == 2
    assert report.aligned_segments == 2
    assert report.anchored_segments == 2
    assert report.final_segments == 2
    assert report.duration == "7s"
    assert len(observer.of(ANCHOR_FOUND)) == 2
    assert "✅" in capsys.readouterr().out


def test_synchronize_json_out(inputs, tmp_path):
    transcript, srt = inputs
    out = tmp_path / "custom.srt"
    json_out = tmp_path / "segments.json"
    sync.synchronize(transcript, srt, out, json_out=json_out)
    data = json.loads(json_out.read_text())
    assert out.exists()
    assert [d["speaker"] for d in data] == ["Q1", "FUCHS"]
    assert data[0]["source"] == "anchored"
    assert data[0]["start"] == "00:00:00,000"


def test_synchronize_requires_speaker_turns(inputs, tmp_path):
    _, srt = inputs
    transcript = tmp_path / "plain.txt"
    transcript.write_text("no labels at all in this document")
    with pytest.raises(RuntimeError):
        sync.synchronize(transcript, srt)


def test_synchronize_requires_subtitles(inputs, tmp_path):
    transcript, _ = inputs
    srt = tmp_path / "empty.srt"
    srt.write_text("")
    with pytest.raises(RuntimeError):
        sync.synchronize(transcript, srt)


def test_corrected_srt_path():
    assert sync.corrected_srt_path("dir/talk.srt").name == "talk_corrected.srt"


def test_synchronize_from_turns_json(inputs, tmp_path):
    transcript, srt = inputs
    turns_json = tmp_path / "turns.json"
    turns_json.write_text(json.dumps([
        {"speaker": "Q1", "text": "Hello world, how are you?"},
        {"speaker": "FUCHS", "text": "I am fine, thank you very much."},
    ]))
    report = sync.synchronize(turns_json, srt, config=AlignConfig(end_margin=0))
    assert report.transcript_segments == 2
    assert report.anchored_segments == 2
    assert report.out_path.read_text().startswith("1\n00:00:00,000 --> 00:00:04,000\nQ1:\n")
