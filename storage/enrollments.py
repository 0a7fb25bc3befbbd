"""Persistence helpers for course enrollments."""
from __future__ import annotations

import sqlite3
from typing import Any, Optional
from uuid import uuid4

from course_progress.models import Enrollment

from .sqlite import Database, utc_now

_UPDATABLE = ("status", "progress", "completed_at", "has_interview_access")


def _enrollment(row: sqlite3.Row) -> Enrollment:
    return Enrollment(
        id=row["id"],
        user_id=row["user_id"],
        course_id=row["course_id"],
        status=row["status"],
        progress=row["progress"],
        has_interview_access=bool(row["has_interview_access"]),
        enrolled_at=row["enrolled_at"],
        completed_at=row["completed_at"],
    )


class EnrollmentStore:  # SQLite-backed (user, course) enrollments
    def __init__(self, db: Database) -> None:
        self._db = db

    def find(self, user_id: str, course_id: str) -> Optional[Enrollment]:
        with self._db.connect() as conn:
            row = conn.execute(
                """
                SELECT id, user_id, course_id, status, progress, has_interview_access, enrolled_at, completed_at
                FROM enrollments
                WHERE user_id = ? AND course_id = ?
                """,
                (user_id, course_id),
            ).fetchone()
        return _enrollment(row) if row is not None else None

    def create(self, user_id: str, course_id: str, *, has_interview_access: bool = False) -> Enrollment:
        """Insert an ACTIVE enrollment.

        Raises:
            sqlite3.IntegrityError: If the pair is already enrolled.
        """

        enrollment = Enrollment(
            id=uuid4().hex,
            user_id=user_id,
            course_id=course_id,
            has_interview_access=has_interview_access,
            enrolled_at=utc_now(),
        )
        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO enrollments (id, user_id, course_id, status, progress, has_interview_access, enrolled_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    enrollment.id,
                    user_id,
                    course_id,
                    enrollment.status,
                    enrollment.progress,
                    int(has_interview_access),
                    enrollment.enrolled_at,
                ),
            )
        return enrollment

    def update(self, enrollment_id: str, **fields: Any) -> None:
        unknown = set(fields) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Unsupported enrollment fields: {sorted(unknown)}")
        if not fields:
            return
        assignments = ", ".join(f"{name} = ?" for name in fields)
        values = [int(v) if isinstance(v, bool) else v for v in fields.values()]
        with self._db.connect() as conn:
            conn.execute(f"UPDATE enrollments SET {assignments} WHERE id = ?", (*values, enrollment_id))

    def upsert_access(self, user_id: str, course_id: str, *, interview_access: bool) -> Enrollment:
        """Create an ACTIVE enrollment or upgrade interview access on the existing one."""

        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO enrollments (id, user_id, course_id, status, progress, has_interview_access, enrolled_at)
                VALUES (?, ?, ?, 'ACTIVE', 0, ?, ?)
                ON CONFLICT (user_id, course_id) DO UPDATE SET
                    has_interview_access = MAX(enrollments.has_interview_access, excluded.has_interview_access)
                """,
                (uuid4().hex, user_id, course_id, int(interview_access), utc_now()),
            )
            row = conn.execute(
                """
                SELECT id, user_id, course_id, status, progress, has_interview_access, enrolled_at, completed_at
                FROM enrollments
                WHERE user_id = ? AND course_id = ?
                """,
                (user_id, course_id),
            ).fetchone()
        return _enrollment(row)


__all__ = ["EnrollmentStore"]
