"""Persistence helpers for per-lesson learner progress."""
from __future__ import annotations

import sqlite3
from typing import Optional

from course_progress.models import LessonProgress

from .sqlite import Database, utc_now


def row_to_progress(row: sqlite3.Row) -> LessonProgress:
    return LessonProgress(
        user_id=row["user_id"],
        lesson_id=row["lesson_id"],
        completed=bool(row["completed"]),
        score=row["score"],
        time_spent=row["time_spent"],
        last_accessed_at=row["last_accessed_at"],
    )


class LessonProgressStore:  # SQLite-backed (user, lesson) progress rows
    def __init__(self, db: Database) -> None:
        self._db = db

    def find(self, user_id: str, lesson_id: str) -> Optional[LessonProgress]:
        with self._db.connect() as conn:
            row = conn.execute(
                """
                SELECT user_id, lesson_id, completed, score, time_spent, last_accessed_at
                FROM lesson_progress
                WHERE user_id = ? AND lesson_id = ?
                """,
                (user_id, lesson_id),
            ).fetchone()
        return row_to_progress(row) if row is not None else None

    def upsert(
        self,
        user_id: str,
        lesson_id: str,
        *,
        completed: bool = True,
        time_spent: Optional[int] = None,
        score: Optional[float] = None,
    ) -> LessonProgress:
        """Create or update the row for ``(user_id, lesson_id)``.

        ``time_spent`` is added to the stored total; ``score`` replaces the
        stored one only when given.
        """

        now = utc_now()
        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO lesson_progress (user_id, lesson_id, completed, score, time_spent, last_accessed_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT (user_id, lesson_id) DO UPDATE SET
                    completed = MAX(lesson_progress.completed, excluded.completed),
                    score = COALESCE(excluded.score, lesson_progress.score),
                    time_spent = lesson_progress.time_spent + excluded.time_spent,
                    last_accessed_at = excluded.last_accessed_at
                """,
                (user_id, lesson_id, int(completed), score, int(time_spent or 0), now),
            )
            row = conn.execute(
                """
                SELECT user_id, lesson_id, completed, score, time_spent, last_accessed_at
                FROM lesson_progress
                WHERE user_id = ? AND lesson_id = ?
                """,
                (user_id, lesson_id),
            ).fetchone()
        return row_to_progress(row)


__all__ = ["LessonProgressStore", "row_to_progress"]
