"""Real-time typing metrics and session recording.

The recorder turns a stream of keystrokes into the ``PerformanceSession``
records the adaptive engine consumes. Timestamps are milliseconds.
"""

from __future__ import annotations

import time
import uuid
from collections import Counter, deque
from typing import Callable, Optional

from typetutor.engine.session import AccuracyMetrics, Keystroke, PerformanceSession, Position
from typetutor.engine.stats import mean

WINDOW_MS = 5000
AVERAGE_WORD_LENGTH = 5
PASTE_THRESHOLD_MS = 10
CORRECTION_KEYS = ("Backspace", "Delete")


def _now_ms() -> float:
    return time.time() * 1000


def words_per_minute(text: str, elapsed_minutes: float) -> float:
    """Whitespace-delimited word count of ``text`` per elapsed minute."""
    if elapsed_minutes <= 0:
        return 0.0
    return len(text.strip().split()) / elapsed_minutes


class KeystrokeBuffer:
    """Bounded FIFO of the most recent keystrokes."""

    def __init__(self, max_size: int = 1000):
        self._events: deque[Keystroke] = deque(maxlen=max_size)

    def push(self, event: Keystroke) -> None:
        self._events.append(event)

    def recent(self, count: int) -> list[Keystroke]:
        if count <= 0:
            return []
        return list(self._events)[-count:]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


class TypingCalculator:
    def __init__(self, buffer_size: int = 1000):
        self.buffer = KeystrokeBuffer(buffer_size)

    def add_keystroke(self, keystroke: Keystroke) -> None:
        self.buffer.push(keystroke)

    def clear(self) -> None:
        self.buffer.clear()

    def real_time_wpm(self, now: Optional[float] = None) -> int:
        """WPM over the sliding window ending at ``now``.

        Only correct, typed (not corrected or pasted) keystrokes count; spans
        under one second report 0.
        """
        if len(self.buffer) < 2:
            return 0
        now = _now_ms() if now is None else now

        events = [e for e in self.buffer.recent(200) if now - e.timestamp <= WINDOW_MS]
        if len(events) < 2:
            return 0

        valid = [
            e for e in events
            if e.is_correct and e.key not in CORRECTION_KEYS and not _is_pasted(e)
        ]
        timestamps = sorted(e.timestamp for e in events)
        span = timestamps[-1] - timestamps[0]
        if span < 1000:
            return 0

        words = len(valid) / AVERAGE_WORD_LENGTH
        return round(words / span * 60000)

    def accuracy(self) -> AccuracyMetrics:
        events = self.buffer.recent(500)
        if not events:
            return AccuracyMetrics()

        total = len(events)
        correct = sum(1 for e in events if e.is_correct)
        typos = total - correct
        corrected = _count_corrections(events)

        return AccuracyMetrics(
            raw=correct / total * 100,
            adjusted=max(0.0, (correct - corrected) / total * 100),
            error_rate=typos / total * 100,
            correction_ratio=corrected / typos if typos > 0 else 0.0,
        )

    def consistency(self) -> float:
        """Keystroke rhythm score: 100 minus the coefficient of variation (in %)."""
        events = self.buffer.recent(100)
        if len(events) < 10:
            return 0.0

        timings = [e.time_delta for e in events if 0 < e.time_delta < 1000]
        if len(timings) < 5:
            return 0.0

        avg = mean(timings)
        stdev = mean([(t - avg) ** 2 for t in timings]) ** 0.5
        return max(0.0, 100 - stdev / avg * 100)

    def error_patterns(self) -> dict[str, int]:
        counts = Counter(e.pattern for e in self.buffer.recent(500) if not e.is_correct)
        return dict(counts)


def _is_pasted(keystroke: Keystroke) -> bool:
    return keystroke.time_delta < PASTE_THRESHOLD_MS and len(keystroke.key) > 1


def _count_corrections(events: list[Keystroke]) -> int:
    """Correction keys pressed directly after a mistake."""
    return sum(
        1
        for previous, current in zip(events, events[1:])
        if current.key in CORRECTION_KEYS and not previous.is_correct
    )


class SessionRecorder:
    """Records one exercise at a time and hands back the completed session."""

    def __init__(self, clock: Callable[[], float] = _now_ms, target_wpm: float = 60):
        self._clock = clock
        self.default_target_wpm = target_wpm
        self.calculator = TypingCalculator()
        self.active = False
        self.wpm = 0
        self._drill_type: Optional[str] = None
        self._session_id = ""
        self._target_wpm = float(target_wpm)
        self._start_time = 0.0
        self._last_time = 0.0
        self._keystrokes: list[Keystroke] = []

    @property
    def in_session(self) -> bool:
        return self._drill_type is not None

    def start(self, drill_type: str, target_wpm: Optional[float] = None) -> None:
        now = self._clock()
        self._drill_type = drill_type
        self._session_id = f"session_{int(now)}_{uuid.uuid4().hex[:9]}"
        self._target_wpm = self.default_target_wpm if target_wpm is None else target_wpm
        self._start_time = now
        self._last_time = now
        self._keystrokes = []
        self.wpm = 0
        self.active = True
        self.calculator.clear()

    def record_keystroke(self, key: str, expected: str, position: Optional[Position] = None) -> None:
        if not self.active or not self.in_session:
            return

        now = self._clock()
        keystroke = Keystroke(
            key=key,
            expected=expected,
            is_correct=key == expected,
            timestamp=now,
            time_delta=now - self._last_time,
            position=position or Position(),
        )
        self.calculator.add_keystroke(keystroke)
        self._keystrokes.append(keystroke)
        self.wpm = self.calculator.real_time_wpm(now)
        self._last_time = now

    def pause(self) -> None:
        self.active = False

    def resume(self) -> None:
        if self.in_session:
            self.active = True
            self._last_time = self._clock()

    def reset(self) -> None:
        self.calculator.clear()
        self._drill_type = None
        self._keystrokes = []
        self.active = False
        self.wpm = 0

    def progress_score(self) -> int:
        """Half WPM progress toward the target, half accuracy, out of 100."""
        if not self.in_session or self._target_wpm <= 0:
            return 0
        wpm_score = min(self.wpm / self._target_wpm, 1) * 50
        accuracy_score = self.calculator.accuracy().raw / 100 * 50
        return round(wpm_score + accuracy_score)

    def end(self) -> Optional[PerformanceSession]:
        if not self.in_session:
            return None

        session = PerformanceSession(
            drill_type=self._drill_type,
            final_wpm=self.wpm,
            accuracy=self.calculator.accuracy(),
            keystrokes=tuple(self._keystrokes),
            id=self._session_id,
            start_time=self._start_time,
            end_time=self._clock(),
            target_wpm=self._target_wpm,
        )
        self._drill_type = None
        self._keystrokes = []
        self.active = False
        return session
