"""Completed practice session records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Position:
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Keystroke:
    key: str
    expected: str
    is_correct: bool
    timestamp: float = 0.0  # ms
    time_delta: float = 0.0  # ms since the previous keystroke
    position: Position = field(default_factory=Position)

    @property
    def pattern(self) -> str:
        """Error-pattern key for this keystroke: ``expected->typed``."""
        return f"{self.expected}->{self.key}"


@dataclass(frozen=True)
class AccuracyMetrics:
    raw: float = 0.0
    adjusted: float = 0.0
    error_rate: float = 0.0
    correction_ratio: float = 0.0


@dataclass(frozen=True)
class PerformanceSession:
    """One completed exercise. Never mutated after it is recorded."""
    drill_type: str
    final_wpm: float
    accuracy: AccuracyMetrics
    keystrokes: tuple[Keystroke, ...] = ()
    id: str = ""
    start_time: float = 0.0
    end_time: Optional[float] = None
    target_wpm: float = 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["keystrokes"] = [asdict(k) for k in self.keystrokes]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> PerformanceSession:
        """Build a session from a plain document.

        ``accuracy`` may be a bare number (taken as the raw percentage) or a
        mapping of the accuracy fields. Raises KeyError when ``drill_type`` or
        ``final_wpm`` is missing and ValueError on non-numeric values or an
        ``is_correct`` flag that is not a boolean.
        """
        raw_accuracy = data.get("accuracy", {})
        if isinstance(raw_accuracy, dict):
            accuracy = AccuracyMetrics(
                raw=float(raw_accuracy.get("raw", 0.0)),
                adjusted=float(raw_accuracy.get("adjusted", 0.0)),
                error_rate=float(raw_accuracy.get("error_rate", 0.0)),
                correction_ratio=float(raw_accuracy.get("correction_ratio", 0.0)),
            )
        else:
            accuracy = AccuracyMetrics(raw=float(raw_accuracy))

        keystrokes = []
        for k in data.get("keystrokes") or []:
            pos = k.get("position") or {}
            is_correct = k.get("is_correct", k["key"] == k["expected"])
            if not isinstance(is_correct, bool):
                raise ValueError(f"is_correct must be true or false, got {is_correct!r}")
            keystrokes.append(Keystroke(
                key=str(k["key"]),
                expected=str(k["expected"]),
                is_correct=is_correct,
                timestamp=float(k.get("timestamp", 0.0)),
                time_delta=float(k.get("time_delta", 0.0)),
                position=Position(
                    line=int(pos.get("line", 0)),
                    column=int(pos.get("column", 0)),
                ),
            ))

        end_time = data.get("end_time")
        return cls(
            drill_type=str(data["drill_type"]),
            final_wpm=float(data["final_wpm"]),
            accuracy=accuracy,
            keystrokes=tuple(keystrokes),
            id=str(data.get("id", "")),
            start_time=float(data.get("start_time", 0.0)),
            end_time=float(end_time) if end_time is not None else None,
            target_wpm=float(data.get("target_wpm", 0.0)),
        )
