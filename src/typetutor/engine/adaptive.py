"""Adaptive difficulty engine.

Keeps a bounded history of completed sessions and decides whether the
learner should advance, hold, or drop a level. Deciding
(``calculate_next_difficulty``) is pure; committing the decision
(``update_current_level``) is a separate explicit step.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from typetutor.engine import text
from typetutor.engine.levels import (
    DIFFICULTY_LEVELS,
    DifficultyLevel,
    ProgressionPhase,
    get_level,
    level_index,
    phase_for_index,
)
from typetutor.engine.session import PerformanceSession
from typetutor.engine.stats import PerformanceSummary, Trend, summarize

logger = logging.getLogger(__name__)


class AdaptiveDifficultyEngine:
    TARGET_ACCURACY = 95
    TARGET_WPM_MULTIPLIER = 0.8  # share of the level's target WPM needed to advance
    MIN_SESSIONS_FOR_ADVANCEMENT = 3
    MIN_CONSISTENCY = 70
    REGRESSION_ACCURACY = 85
    REGRESSION_WPM_MULTIPLIER = 0.5
    STRUGGLING_WPM_MULTIPLIER = 0.6
    MAX_ERROR_PATTERNS = 3
    HISTORY_LIMIT = 50
    LEVEL_WINDOW = 10

    def __init__(self, starting_level: str = "beginner-1"):
        level = get_level(starting_level)
        if level is None:
            logger.warning(
                "Unknown starting level %r, falling back to %s",
                starting_level, DIFFICULTY_LEVELS[0].id,
            )
            level = DIFFICULTY_LEVELS[0]
        self._current_level: DifficultyLevel = level
        self._history: list[PerformanceSession] = []

    @property
    def history(self) -> tuple[PerformanceSession, ...]:
        return tuple(self._history)

    def add_session(self, session: PerformanceSession) -> None:
        self._history.append(session)
        if len(self._history) > self.HISTORY_LIMIT:
            self._history = self._history[-self.HISTORY_LIMIT:]

    def calculate_next_difficulty(self) -> DifficultyLevel:
        """Return the level the learner should practice next, without committing it."""
        if len(self._history) < self.MIN_SESSIONS_FOR_ADVANCEMENT:
            return self._current_level

        recent = self._recent_sessions_for_level(self._current_level.id)
        if len(recent) < self.MIN_SESSIONS_FOR_ADVANCEMENT:
            return self._current_level

        performance = summarize(recent)

        # Advancement is checked first and wins if both could hold.
        if self._should_advance(performance):
            return self._next_level() or self._current_level
        if self._should_regress(performance):
            return self._previous_level() or self._current_level
        return self._current_level

    def update_current_level(self) -> DifficultyLevel:
        previous = self._current_level
        self._current_level = self.calculate_next_difficulty()
        if self._current_level.id != previous.id:
            logger.info("Difficulty changed: %s -> %s", previous.id, self._current_level.id)
        return self._current_level

    def get_current_level(self) -> DifficultyLevel:
        return self._current_level

    def get_progression_phase(self) -> Optional[ProgressionPhase]:
        return phase_for_index(level_index(self._current_level.id))

    def generate_adaptive_text(
        self,
        difficulty: DifficultyLevel,
        weak_patterns: Optional[Mapping[str, int]] = None,
    ) -> str:
        return text.generate_text(difficulty, weak_patterns)

    def analyze_performance(self) -> PerformanceSummary:
        """Summary of the recent sessions at the current level."""
        return summarize(self._recent_sessions_for_level(self._current_level.id))

    def get_recommendations(self) -> list[str]:
        performance = self.analyze_performance()
        recommendations: list[str] = []

        if performance.avg_accuracy < self.TARGET_ACCURACY:
            recommendations.append(
                "Focus on accuracy before speed. Slow down and aim for 97%+ accuracy."
            )
        if performance.consistency < self.MIN_CONSISTENCY:
            recommendations.append(
                "Work on typing rhythm. Try to maintain steady keystroke timing."
            )
        if len(performance.error_patterns) > self.MAX_ERROR_PATTERNS:
            recommendations.append(
                "Practice your most common error patterns in isolation."
            )
        if performance.avg_wpm < self._current_level.target_wpm * self.STRUGGLING_WPM_MULTIPLIER:
            recommendations.append(
                "Consider dropping to an easier level to build confidence."
            )

        if not recommendations:
            recommendations.append(
                "Great progress! Keep practicing to advance to the next level."
            )
        return recommendations

    def _recent_sessions_for_level(self, level_id: str) -> list[PerformanceSession]:
        matching = [s for s in self._history if s.drill_type == level_id]
        return matching[-self.LEVEL_WINDOW:]

    def _should_advance(self, performance: PerformanceSummary) -> bool:
        return (
            performance.avg_accuracy >= self.TARGET_ACCURACY
            and performance.avg_wpm >= self._current_level.target_wpm * self.TARGET_WPM_MULTIPLIER
            and performance.consistency >= self.MIN_CONSISTENCY
            and performance.trend == Trend.IMPROVING
        )

    def _should_regress(self, performance: PerformanceSummary) -> bool:
        return performance.avg_accuracy < self.REGRESSION_ACCURACY or (
            performance.avg_wpm < self._current_level.target_wpm * self.REGRESSION_WPM_MULTIPLIER
            and performance.trend == Trend.DECLINING
        )

    def _next_level(self) -> Optional[DifficultyLevel]:
        idx = level_index(self._current_level.id)
        if idx < len(DIFFICULTY_LEVELS) - 1:
            return DIFFICULTY_LEVELS[idx + 1]
        return None

    def _previous_level(self) -> Optional[DifficultyLevel]:
        idx = level_index(self._current_level.id)
        if idx > 0:
            return DIFFICULTY_LEVELS[idx - 1]
        return None
