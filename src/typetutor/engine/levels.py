"""Difficulty level catalog and progression phases.

The catalog order is significant: advancing moves to the next entry and
regressing to the previous one. Nothing below index 0 or above the last index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class DifficultyMetrics:
    text_complexity: int  # readability, 1-10
    keyboard_density: int  # key pattern difficulty, 1-10
    conceptual_load: int  # programming concept complexity, 1-10
    time_constraint: int  # session time pressure, 1-10


@dataclass(frozen=True)
class DifficultyLevel:
    id: str
    name: str
    description: str
    metrics: DifficultyMetrics
    target_wpm: int
    target_accuracy: int
    session_duration: int  # minutes


@dataclass(frozen=True)
class PhaseGoals:
    wpm: int
    accuracy: int


@dataclass(frozen=True)
class ProgressionPhase:
    phase: int
    name: str
    description: str
    duration: str
    goals: PhaseGoals
    drill_types: tuple[str, ...] = field(default_factory=tuple)


DIFFICULTY_LEVELS: tuple[DifficultyLevel, ...] = (
    DifficultyLevel(
        id="beginner-1",
        name="Function Names",
        description="Basic function names and identifiers",
        metrics=DifficultyMetrics(2, 3, 1, 2),
        target_wpm=35,
        target_accuracy=97,
        session_duration=3,
    ),
    DifficultyLevel(
        id="beginner-2",
        name="Simple Patterns",
        description="Basic syntax patterns and keywords",
        metrics=DifficultyMetrics(3, 4, 2, 3),
        target_wpm=40,
        target_accuracy=95,
        session_duration=4,
    ),
    DifficultyLevel(
        id="intermediate-1",
        name="Query Grammar",
        description="Query patterns and object structures",
        metrics=DifficultyMetrics(4, 5, 4, 4),
        target_wpm=50,
        target_accuracy=95,
        session_duration=4,
    ),
    DifficultyLevel(
        id="intermediate-2",
        name="Pipeline Patterns",
        description="Function composition and chaining",
        metrics=DifficultyMetrics(6, 6, 6, 5),
        target_wpm=55,
        target_accuracy=94,
        session_duration=5,
    ),
    DifficultyLevel(
        id="advanced-1",
        name="CRUD Endpoints",
        description="Complete API endpoint patterns",
        metrics=DifficultyMetrics(7, 7, 7, 6),
        target_wpm=60,
        target_accuracy=93,
        session_duration=6,
    ),
    DifficultyLevel(
        id="advanced-2",
        name="Error Handling",
        description="Complex error handling and edge cases",
        metrics=DifficultyMetrics(8, 8, 8, 7),
        target_wpm=65,
        target_accuracy=92,
        session_duration=7,
    ),
    DifficultyLevel(
        id="expert-1",
        name="Full Integration",
        description="Complete system patterns with caching",
        metrics=DifficultyMetrics(9, 9, 9, 8),
        target_wpm=70,
        target_accuracy=91,
        session_duration=8,
    ),
    DifficultyLevel(
        id="expert-2",
        name="Master Level",
        description="Complex architectural patterns",
        metrics=DifficultyMetrics(10, 10, 10, 10),
        target_wpm=75,
        target_accuracy=90,
        session_duration=10,
    ),
)

PROGRESSION_PHASES: tuple[ProgressionPhase, ...] = (
    ProgressionPhase(
        phase=1,
        name="Foundation Building",
        description="Build muscle memory for basic patterns",
        duration="1-2 weeks",
        goals=PhaseGoals(wpm=45, accuracy=97),
        drill_types=("function-names", "basic-syntax", "identifiers"),
    ),
    ProgressionPhase(
        phase=2,
        name="Pattern Recognition",
        description="Master common programming patterns",
        duration="1-2 weeks",
        goals=PhaseGoals(wpm=55, accuracy=95),
        drill_types=("query-grammar", "object-patterns", "array-methods"),
    ),
    ProgressionPhase(
        phase=3,
        name="Pipeline Mastery",
        description="Fluent function composition",
        duration="1-2 weeks",
        goals=PhaseGoals(wpm=65, accuracy=94),
        drill_types=("pipeline-patterns", "composition", "async-patterns"),
    ),
    ProgressionPhase(
        phase=4,
        name="Integration Expertise",
        description="Complete endpoint implementation",
        duration="2-3 weeks",
        goals=PhaseGoals(wpm=70, accuracy=92),
        drill_types=("crud-endpoints", "error-handling", "integration-patterns"),
    ),
)


def level_index(level_id: str) -> int:
    """Catalog position of a level id, or -1 when unknown."""
    for i, level in enumerate(DIFFICULTY_LEVELS):
        if level.id == level_id:
            return i
    return -1


def get_level(level_id: str) -> Optional[DifficultyLevel]:
    idx = level_index(level_id)
    if idx < 0:
        return None
    return DIFFICULTY_LEVELS[idx]


def phase_for_index(index: int) -> ProgressionPhase:
    """Map a catalog index onto its progression phase (two levels per phase)."""
    if index <= 1:
        return PROGRESSION_PHASES[0]
    if index <= 3:
        return PROGRESSION_PHASES[1]
    if index <= 5:
        return PROGRESSION_PHASES[2]
    return PROGRESSION_PHASES[3]
