"""Tests for practice text generation."""

from typetutor.engine.levels import get_level
from typetutor.engine.text import (
    DEFAULT_PATTERNS,
    generate_text,
    patterns_for,
    vocabulary_for,
    weak_pattern_lines,
)


WEAK = {"a->s": 5, "b->v": 9, "c->x": 1, "d->f": 3, "e->r": 7, "f->g": 2}


def test_weak_patterns_top_five_in_frequency_order():
    lines = weak_pattern_lines(WEAK)
    assert lines == [
        "bbb // Practice: avoid typing 'v'",
        "eee // Practice: avoid typing 'r'",
        "aaa // Practice: avoid typing 's'",
        "ddd // Practice: avoid typing 'f'",
        "fff // Practice: avoid typing 'g'",
    ]


def test_weak_pattern_text_layout():
    text = generate_text(get_level("beginner-1"), WEAK)
    lines = text.splitlines()
    assert len(lines) == 10
    for expected in ("b", "e", "a", "d", "f"):
        assert f"{expected * 3} // Practice" in text
    assert "ccc" not in text
    assert lines[5:8] == ["parseQuery", "filterByStatus", "filterByOwner"]
    assert lines[8:] == ["filter", "map"]


def test_weak_pattern_without_separator():
    lines = weak_pattern_lines({"q": 1})
    assert lines == ["qqq // Practice: avoid typing ''"]


def test_synthesized_beginner_text():
    text = generate_text(get_level("beginner-1"))
    assert text == "parseQuery\nfilterByStatus\nfilter"


def test_empty_weak_patterns_synthesize():
    level = get_level("beginner-2")
    assert generate_text(level, {}) == generate_text(level)


def test_synthesized_intermediate_text():
    text = generate_text(get_level("intermediate-2"))
    lines = text.splitlines()
    assert lines[-3:] == ["async", "await", "Promise"]
    assert len(lines) == 6


def test_higher_levels_use_placeholder_patterns():
    text = generate_text(get_level("expert-2"))
    lines = text.splitlines()
    assert lines[0] == DEFAULT_PATTERNS[0]
    assert lines[1:] == [
        "middleware", "authentication", "authorization", "validation", "serialization",
    ]


def test_patterns_for_returns_copy():
    level = get_level("beginner-1")
    patterns_for(level).clear()
    assert patterns_for(level)


def test_vocabulary_tiers():
    assert vocabulary_for(3)[0] == "filter"
    assert vocabulary_for(4)[0] == "async"
    assert vocabulary_for(6)[0] == "async"
    assert vocabulary_for(7)[0] == "middleware"
