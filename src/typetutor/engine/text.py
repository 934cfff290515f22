"""Practice text synthesis.

Pattern sets are keyed by level id; levels without their own set fall back
to ``DEFAULT_PATTERNS``. Vocabulary is tiered by conceptual load.
"""

from __future__ import annotations

from typing import Mapping, Optional

from typetutor.engine.levels import DifficultyLevel, DifficultyMetrics

WEAK_PATTERN_LIMIT = 5
COMBINED_PATTERN_COUNT = 3
COMBINED_VOCABULARY_COUNT = 2

LEVEL_PATTERNS: dict[str, list[str]] = {
    "beginner-1": [
        "parseQuery", "filterByStatus", "filterByOwner", "sortBy", "paginate",
        "applyCache", "formatResponse", "loadStore", "listItems",
    ],
    "beginner-2": [
        "const", "let", "var", "function", "return", "if", "else", "for", "while",
        "true", "false", "null", "undefined",
    ],
    "intermediate-1": [
        "status=open", "owner=101", "q=title", "sort=createdAt:desc",
        "page=1", "limit=20", "useCache=true",
    ],
    "intermediate-2": [
        "const filtered = [filterByStatus(status), filterByOwner(owner)]",
        ".reduce((acc, fn) => fn(acc), base)",
        "const sorted = sortBy(field, direction)(filtered)",
    ],
}

DEFAULT_PATTERNS = ["// Advanced patterns for higher levels"]

# (upper bound of conceptual load, words); the last tier catches everything above
VOCABULARY_TIERS: list[tuple[int, list[str]]] = [
    (3, ["filter", "map", "reduce", "sort", "find", "some", "every"]),
    (6, ["async", "await", "Promise", "fetch", "response", "json", "error"]),
]
ADVANCED_VOCABULARY = [
    "middleware", "authentication", "authorization", "validation", "serialization",
]


def patterns_for(level: DifficultyLevel) -> list[str]:
    return list(LEVEL_PATTERNS.get(level.id, DEFAULT_PATTERNS))


def vocabulary_for(conceptual_load: float) -> list[str]:
    for ceiling, words in VOCABULARY_TIERS:
        if conceptual_load <= ceiling:
            return list(words)
    return list(ADVANCED_VOCABULARY)


def split_pattern(pattern: str) -> tuple[str, str]:
    expected, _, actual = pattern.partition("->")
    return expected, actual


def weak_pattern_lines(weak_patterns: Mapping[str, int], limit: int = WEAK_PATTERN_LIMIT) -> list[str]:
    """Drill lines for the most frequent mistakes, highest count first."""
    ranked = sorted(weak_patterns.items(), key=lambda item: -item[1])[:limit]
    lines = []
    for pattern, _count in ranked:
        expected, actual = split_pattern(pattern)
        lines.append(f"{expected * 3} // Practice: avoid typing '{actual}'")
    return lines


def synthesize(patterns: list[str], vocabulary: list[str], metrics: DifficultyMetrics) -> str:
    pattern_count = max(1, int(metrics.text_complexity))
    vocabulary_count = max(1, int(metrics.conceptual_load // 2))
    return "\n".join(patterns[:pattern_count] + vocabulary[:vocabulary_count])


def combine(patterns: list[str], vocabulary: list[str], weak_lines: list[str]) -> str:
    return "\n".join(
        weak_lines
        + patterns[:COMBINED_PATTERN_COUNT]
        + vocabulary[:COMBINED_VOCABULARY_COUNT]
    )


def generate_text(level: DifficultyLevel, weak_patterns: Optional[Mapping[str, int]] = None) -> str:
    """Practice text for a level, led by weak-pattern drills when any are known."""
    patterns = patterns_for(level)
    vocabulary = vocabulary_for(level.metrics.conceptual_load)

    if weak_patterns:
        return combine(patterns, vocabulary, weak_pattern_lines(weak_patterns))
    return synthesize(patterns, vocabulary, level.metrics)
