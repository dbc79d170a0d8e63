import json

import pytest

from transync import parse_pdf_text
from transync.core import pdf_utils
from transync.core.models import ReferenceTurn

TEXT = (
    "Oral History Project\nInterview Consent Form\n"
    "Q1: How did you start?\n"
    "FUCHS: I started in 1960. It was\nhard.\n"
    "Q2:   Why?\n"
    "FUCHS:\n"
)


def test_parse_speaker_turns():
    assert parse_pdf_text.parse_speaker_turns(TEXT) == [
        ReferenceTurn("Q1", "How did you start?"),
        ReferenceTurn("FUCHS", "I started in 1960. It was hard."),
        ReferenceTurn("Q2", "Why?"),
    ]


def test_parse_speaker_turns_without_labels(capsys):
    assert parse_pdf_text.parse_speaker_turns("just some prose here") == []
    assert "⚠️" in capsys.readouterr().out


def test_extract_document_text_txt(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("\ufeffQ1: hello", encoding="utf-8")
    assert parse_pdf_text.extract_document_text(path) == "Q1: hello"


def test_extract_document_text_pdf(tmp_path, monkeypatch):
    path = tmp_path / "t.pdf"
    path.write_bytes(b"%PDF-1.4")
    monkeypatch.setattr(
        parse_pdf_text, "extract_text", lambda p: "Cover\n page\fQ1:  hello\n there\f"
    )
    assert parse_pdf_text.extract_document_text(path) == "Cover page\nQ1: hello there"


def test_extract_document_text_rejects_other_types(tmp_path):
    path = tmp_path / "t.docx"
    path.write_bytes(b"")
    with pytest.raises(ValueError):
        parse_pdf_text.extract_document_text(path)


def test_export_and_load_turns(tmp_path, capsys):
    src = tmp_path / "t.txt"
    src.write_text(TEXT)
    out = tmp_path / "turns.json"
    assert pdf_utils.export_transcript_turns(src, out) == 3
    assert json.loads(out.read_text())[0] == {"speaker": "Q1", "text": "How did you start?"}
    assert pdf_utils.load_transcript_turns(out)[1].speaker == "FUCHS"
    assert pdf_utils.extract_speaker_names(src) == ["Q1", "FUCHS", "Q2"]
    assert "✅" in capsys.readouterr().out
