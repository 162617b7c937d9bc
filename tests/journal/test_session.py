"""Tests for the journal session hand-off."""

import json
from datetime import date

import pytest

from coaching import JournalSnapshot
from journal import JournalInputError, SessionJournal, format_entry_date


def test_write_and_read(tmp_path):
    session = SessionJournal(tmp_path / "session" / "journal_data.json")
    written = session.write("오늘은 힘들었다", "그래도 배운 게 있다", date="2024-01-01")

    assert session.read() == written
    assert written == JournalSnapshot("2024-01-01", "오늘은 힘들었다", "그래도 배운 게 있다")


def test_file_uses_handoff_keys(tmp_path):
    path = tmp_path / "journal_data.json"
    SessionJournal(path).write("j", "r", date="d")
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "date": "d",
        "journal": "j",
        "reflection": "r",
    }


@pytest.mark.parametrize("journal_text, reflection", [("", "r"), ("j", "  "), ("\n", "\t")])
def test_blank_input_rejected(tmp_path, journal_text, reflection):
    session = SessionJournal(tmp_path / "s.json")
    with pytest.raises(JournalInputError):
        session.write(journal_text, reflection)
    assert session.read() is None


def test_default_date_format(tmp_path):
    snap = SessionJournal(tmp_path / "s.json").write("j", "r")
    assert snap.date == format_entry_date()


def test_format_entry_date():
    assert format_entry_date(date(2024, 1, 5)) == "2024년 01월 05일"


def test_read_missing(tmp_path):
    assert SessionJournal(tmp_path / "none.json").read() is None


def test_read_corrupt(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("not json")
    assert SessionJournal(path).read() is None


def test_clear(tmp_path):
    session = SessionJournal(tmp_path / "s.json")
    session.write("j", "r")
    session.clear()
    session.clear()
    assert session.read() is None


def test_snapshot_from_long_form_keys():
    snap = JournalSnapshot.from_dict(
        {"date": "2024-01-01", "journalText": "a", "reflectionText": "b"}
    )
    assert snap == JournalSnapshot("2024-01-01", "a", "b")
