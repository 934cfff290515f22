"""Shared fixtures for TypeTutor tests."""

from __future__ import annotations

import json

import pytest

from typetutor.engine.session import AccuracyMetrics, Keystroke, PerformanceSession


def build_session(drill_type, wpm, accuracy=98.0, errors=(), session_id=""):
    """Session with one correct keystroke plus one incorrect keystroke per (expected, typed) pair."""
    keystrokes = [Keystroke(key="a", expected="a", is_correct=True)]
    keystrokes += [Keystroke(key=typed, expected=expected, is_correct=False) for expected, typed in errors]
    return PerformanceSession(
        drill_type=drill_type,
        final_wpm=wpm,
        accuracy=AccuracyMetrics(raw=accuracy),
        keystrokes=tuple(keystrokes),
        id=session_id,
    )


@pytest.fixture
def make_session():
    return build_session


@pytest.fixture
def session_file(tmp_path):
    """Write a session document to disk and return its path."""
    counter = {"n": 0}

    def _write(document: dict):
        counter["n"] += 1
        path = tmp_path / f"session_{counter['n']}.json"
        path.write_text(json.dumps(document))
        return path

    return _write
