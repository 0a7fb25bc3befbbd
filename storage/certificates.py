"""Persistence helpers for issued course certificates."""
from __future__ import annotations

import sqlite3
from typing import Optional

from certificates.models import Certificate

from .sqlite import Database

_COLUMNS = (
    "id, unique_id, user_id, course_id, enrollment_id, student_name, course_name, course_category, "
    "grade, score, signatory_name, signatory_title, issued_at, expires_at, is_valid"
)


def _certificate(row: sqlite3.Row) -> Certificate:
    data = dict(row)
    data["is_valid"] = bool(data["is_valid"])
    return Certificate(**data)


class CertificateStore:  # SQLite-backed certificate registry
    def __init__(self, db: Database) -> None:
        self._db = db

    def next_sequence(self, prefix: str) -> int:
        """Advance and return the issuing counter for ``prefix``."""

        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO certificate_sequences (prefix, current) VALUES (?, 1)
                ON CONFLICT (prefix) DO UPDATE SET current = certificate_sequences.current + 1
                """,
                (prefix,),
            )
            row = conn.execute(
                "SELECT current FROM certificate_sequences WHERE prefix = ?",
                (prefix,),
            ).fetchone()
        return int(row["current"])

    def insert(self, certificate: Certificate) -> None:
        with self._db.connect() as conn:
            conn.execute(
                f"""
                INSERT INTO certificates ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    certificate.id,
                    certificate.unique_id,
                    certificate.user_id,
                    certificate.course_id,
                    certificate.enrollment_id,
                    certificate.student_name,
                    certificate.course_name,
                    certificate.course_category,
                    certificate.grade,
                    certificate.score,
                    certificate.signatory_name,
                    certificate.signatory_title,
                    certificate.issued_at,
                    certificate.expires_at,
                    int(certificate.is_valid),
                ),
            )

    def find_by_unique_id(self, unique_id: str) -> Optional[Certificate]:
        with self._db.connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM certificates WHERE unique_id = ?",
                (unique_id,),
            ).fetchone()
        return _certificate(row) if row is not None else None

    def find_for(self, user_id: str, course_id: str) -> Optional[Certificate]:
        with self._db.connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM certificates WHERE user_id = ? AND course_id = ?",
                (user_id, course_id),
            ).fetchone()
        return _certificate(row) if row is not None else None

    def invalidate(self, unique_id: str) -> bool:
        with self._db.connect() as conn:
            cur = conn.execute("UPDATE certificates SET is_valid = 0 WHERE unique_id = ?", (unique_id,))
        return cur.rowcount > 0


__all__ = ["CertificateStore"]
