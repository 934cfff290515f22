"""Tests for session statistics helpers."""

import pytest

from typetutor.engine.stats import (
    Trend,
    consistency_score,
    error_patterns,
    summarize,
    trend,
    variance,
)


def test_variance_is_population_variance():
    assert variance([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(4.0)
    assert variance([]) == 0.0


def test_consistency_zero_variance_is_100():
    assert consistency_score([42, 42, 42]) == 100.0


def test_consistency_floors_at_zero():
    assert consistency_score([0, 400]) == 0.0


def test_error_patterns_aggregate_across_sessions(make_session):
    sessions = [
        make_session("beginner-1", 30, errors=[("e", "r"), ("e", "r")]),
        make_session("beginner-1", 30, errors=[("e", "r"), ("(", "9")]),
    ]
    assert error_patterns(sessions) == {"e->r": 3, "(->9": 1}


class TestTrend:
    def test_fewer_than_three_is_stable(self, make_session):
        assert trend([make_session("x", 10), make_session("x", 90)]) == Trend.STABLE

    def test_no_older_window_is_stable(self, make_session):
        sessions = [make_session("x", w) for w in (10, 50, 90)]
        assert trend(sessions) == Trend.STABLE

    def test_improving(self, make_session):
        sessions = [make_session("x", w) for w in (40, 40, 40, 43, 43, 43)]
        assert trend(sessions) == Trend.IMPROVING

    def test_declining(self, make_session):
        sessions = [make_session("x", w) for w in (40, 40, 40, 37, 37, 37)]
        assert trend(sessions) == Trend.DECLINING

    def test_difference_of_exactly_two_is_stable(self, make_session):
        sessions = [make_session("x", w) for w in (40, 40, 40, 42, 42, 42)]
        assert trend(sessions) == Trend.STABLE

    def test_partial_older_window(self, make_session):
        # older window is just the first session
        sessions = [make_session("x", w) for w in (30, 40, 40, 40)]
        assert trend(sessions) == Trend.IMPROVING

    def test_only_last_six_considered(self, make_session):
        sessions = [make_session("x", w) for w in (100, 100, 40, 40, 40, 40, 40, 40)]
        assert trend(sessions) == Trend.STABLE


def test_summarize_empty():
    summary = summarize([])
    assert summary.avg_wpm == 0.0
    assert summary.avg_accuracy == 0.0
    assert summary.consistency == 0.0
    assert summary.error_patterns == {}
    assert summary.trend == Trend.STABLE


def test_summarize(make_session):
    sessions = [
        make_session("x", 40, accuracy=90),
        make_session("x", 50, accuracy=100, errors=[("a", "s")]),
    ]
    summary = summarize(sessions)
    assert summary.avg_wpm == 45
    assert summary.avg_accuracy == 95
    assert summary.consistency == pytest.approx(95)
    assert summary.error_patterns == {"a->s": 1}
    assert summary.session_count == 2
