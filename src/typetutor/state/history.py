"""SQLite-backed session history for TypeTutor."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from typetutor.engine.session import PerformanceSession


class SessionStore:
    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or (Path.home() / ".typetutor" / "history.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sessions (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    session_id TEXT DEFAULT '',
                    drill_type TEXT NOT NULL,
                    document TEXT NOT NULL,
                    recorded_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS learner (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def save_session(self, session: PerformanceSession) -> None:
        now = datetime.now().isoformat()
        with self._conn() as conn:
            conn.execute(
                """INSERT INTO sessions (session_id, drill_type, document, recorded_at)
                   VALUES (?, ?, ?, ?)""",
                (session.id, session.drill_type, json.dumps(session.to_dict()), now),
            )

    def recent_sessions(self, limit: int = 50) -> list[PerformanceSession]:
        """Most recent ``limit`` sessions, oldest first."""
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT document FROM sessions ORDER BY seq DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [PerformanceSession.from_dict(json.loads(r[0])) for r in reversed(rows)]

    def count(self) -> int:
        with self._conn() as conn:
            return conn.execute("SELECT COUNT(*) FROM sessions").fetchone()[0]

    def get_level(self) -> Optional[str]:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT value FROM learner WHERE key = 'level'"
            ).fetchone()
        return row[0] if row else None

    def set_level(self, level_id: str) -> None:
        now = datetime.now().isoformat()
        with self._conn() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO learner (key, value, updated_at) VALUES ('level', ?, ?)",
                (level_id, now),
            )

    def clear(self) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM sessions")
            conn.execute("DELETE FROM learner")
