"""End-to-end tests for the click CLI."""

from __future__ import annotations

import pytest
import yaml
from click.testing import CliRunner

from typetutor.cli import main
from typetutor.state.history import SessionStore


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    data_dir = tmp_path / "data"

    def _run(*args, **kwargs):
        return runner.invoke(main, ["--data-dir", str(data_dir), *args], **kwargs)

    return _run


def _doc(wpm, accuracy=98, level="beginner-1"):
    return {
        "drill_type": level,
        "final_wpm": wpm,
        "accuracy": {"raw": accuracy},
        "keystrokes": [{"key": "r", "expected": "e", "is_correct": False}],
    }


def test_levels_marks_current(run):
    result = run("levels")
    assert result.exit_code == 0
    assert "* beginner-1: Function Names" in result.output
    assert "  expert-2: Master Level" in result.output


def test_status_fresh(run):
    result = run("status")
    assert result.exit_code == 0
    assert "Level: beginner-1 (Function Names)" in result.output
    assert "Phase 1: Foundation Building" in result.output
    assert "Sessions recorded: 0" in result.output
    assert "Focus on accuracy" in result.output


def test_practice_uses_recorded_mistakes(run, session_file):
    assert run("record", str(session_file(_doc(30)))).exit_code == 0
    result = run("practice")
    assert result.exit_code == 0
    assert "eee // Practice: avoid typing 'r'" in result.output
    assert "parseQuery" in result.output


def test_practice_unknown_level(run):
    result = run("practice", "--level", "nope")
    assert result.exit_code == 2
    assert "Unknown level" in result.output


def test_record_advances_level(run, session_file):
    outputs = []
    for wpm in (40, 40, 40, 44, 44, 44):
        result = run("record", str(session_file(_doc(wpm))))
        assert result.exit_code == 0
        outputs.append(result.output)

    assert "Level unchanged: beginner-1" in outputs[0]
    assert any("Level changed: beginner-1 -> beginner-2" in o for o in outputs)
    assert "* beginner-2" in run("levels").output
    assert "Sessions recorded: 6" in run("status").output


def test_record_invalid_document(run, session_file):
    result = run("record", str(session_file({"final_wpm": 30})))
    assert result.exit_code == 1
    assert "Invalid session document" in result.output


def test_reset(run, session_file):
    run("record", str(session_file(_doc(30))))
    result = run("reset", "--yes")
    assert result.exit_code == 0
    assert "Sessions recorded: 0" in run("status").output


def test_record_applies_configured_target_wpm(run, session_file, tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    with open(data_dir / "config.yaml", "w") as f:
        yaml.dump({"practice": {"target_wpm": 45}}, f)

    assert run("record", str(session_file(_doc(30)))).exit_code == 0
    explicit = dict(_doc(30), target_wpm=70)
    assert run("record", str(session_file(explicit))).exit_code == 0

    stored = SessionStore(db_path=data_dir / "history.db").recent_sessions()
    assert [s.target_wpm for s in stored] == [45, 70]


def test_record_rejects_quoted_correctness_flag(run, session_file):
    doc = _doc(30)
    doc["keystrokes"] = [{"key": "x", "expected": "a", "is_correct": "false"}]
    result = run("record", str(session_file(doc)))
    assert result.exit_code == 1
    assert "is_correct" in result.output
    assert "Sessions recorded: 0" in run("status").output


def test_status_counts_all_stored_sessions(run, tmp_path, make_session):
    store = SessionStore(db_path=tmp_path / "data" / "history.db")
    for i in range(55):
        store.save_session(make_session("beginner-1", 30, session_id=f"s{i}"))

    result = run("status")
    assert result.exit_code == 0
    assert "Sessions recorded: 55" in result.output
