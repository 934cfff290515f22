"""Pure statistics over completed practice sessions."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from typetutor.engine.session import PerformanceSession

TREND_WINDOW = 3
TREND_THRESHOLD = 2.0


class Trend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass
class PerformanceSummary:
    avg_wpm: float = 0.0
    avg_accuracy: float = 0.0
    consistency: float = 0.0
    error_patterns: dict[str, int] = field(default_factory=dict)
    trend: Trend = Trend.STABLE
    session_count: int = 0


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Population variance; 0 for an empty sequence."""
    if not values:
        return 0.0
    m = mean(values)
    return sum((v - m) ** 2 for v in values) / len(values)


def consistency_score(wpms: Sequence[float]) -> float:
    """100 minus the WPM standard deviation, floored at 0.

    Heuristic score: not a percentage and unbounded in spirit, though zero
    variance gives exactly 100.
    """
    return max(0.0, 100.0 - math.sqrt(variance(wpms)))


def error_patterns(sessions: Sequence[PerformanceSession]) -> dict[str, int]:
    """Count ``expected->typed`` transitions over every incorrect keystroke."""
    counts: Counter[str] = Counter()
    for session in sessions:
        for keystroke in session.keystrokes:
            if not keystroke.is_correct:
                counts[keystroke.pattern] += 1
    return dict(counts)


def trend(sessions: Sequence[PerformanceSession]) -> Trend:
    """Compare the last three sessions' mean WPM with the three before them."""
    if len(sessions) < TREND_WINDOW:
        return Trend.STABLE

    recent = sessions[-TREND_WINDOW:]
    older = sessions[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not older:
        return Trend.STABLE

    difference = mean([s.final_wpm for s in recent]) - mean([s.final_wpm for s in older])
    if difference > TREND_THRESHOLD:
        return Trend.IMPROVING
    if difference < -TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.STABLE


def summarize(sessions: Sequence[PerformanceSession]) -> PerformanceSummary:
    if not sessions:
        return PerformanceSummary()

    wpms = [s.final_wpm for s in sessions]
    return PerformanceSummary(
        avg_wpm=mean(wpms),
        avg_accuracy=mean([s.accuracy.raw for s in sessions]),
        consistency=consistency_score(wpms),
        error_patterns=error_patterns(sessions),
        trend=trend(sessions),
        session_count=len(sessions),
    )
