"""Persistence helpers for the interview question bank."""
from __future__ import annotations

import sqlite3
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from interview_engine.types import Difficulty, QuestionBankEntry

from .sqlite import Database, utc_now


class QuestionPayload(BaseModel):
    domain: str = Field(min_length=1)
    difficulty: Difficulty
    topic: str = Field(min_length=1)
    content: str = Field(min_length=1)


class QuestionBankStats(BaseModel):
    total: int
    by_difficulty: Dict[str, int] = Field(default_factory=dict)
    by_domain: Dict[str, int] = Field(default_factory=dict)


def _entry(row: sqlite3.Row) -> QuestionBankEntry:
    return QuestionBankEntry(
        id=row["id"],
        domain=row["domain"],
        difficulty=row["difficulty"],
        topic=row["topic"],
        content=row["content"],
        created_at=row["created_at"],
    )


class QuestionBankStore:  # SQLite-backed question bank
    def __init__(self, db: Database) -> None:
        self._db = db

    def count(self, domain: str, difficulty: Difficulty) -> int:
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM question_bank WHERE domain = ? AND difficulty = ?",
                (domain, difficulty),
            ).fetchone()
        return int(row[0])

    def find_random_one(self, domain: str, difficulty: Difficulty, skip: int) -> Optional[QuestionBankEntry]:
        """Return the entry at offset ``skip`` within the matching pool."""

        with self._db.connect() as conn:
            row = conn.execute(
                """
                SELECT id, domain, difficulty, topic, content, created_at
                FROM question_bank
                WHERE domain = ? AND difficulty = ?
                ORDER BY created_at, id
                LIMIT 1 OFFSET ?
                """,
                (domain, difficulty, max(0, int(skip))),
            ).fetchone()
        return _entry(row) if row is not None else None

    def add(self, **data: object) -> QuestionBankEntry:
        payload = QuestionPayload(**data)
        entry = QuestionBankEntry(id=uuid4().hex, created_at=utc_now(), **payload.model_dump())
        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO question_bank (id, domain, difficulty, topic, content, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (entry.id, entry.domain, entry.difficulty, entry.topic, entry.content, entry.created_at),
            )
        return entry

    def list_entries(self, *, domain: Optional[str] = None, search: Optional[str] = None) -> List[QuestionBankEntry]:
        clauses: List[str] = []
        params: List[str] = []
        if domain:
            clauses.append("domain = ?")
            params.append(domain)
        if search:
            clauses.append("(domain LIKE ? OR topic LIKE ? OR content LIKE ?)")
            pattern = f"%{search}%"
            params.extend([pattern, pattern, pattern])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with self._db.connect() as conn:
            rows = conn.execute(
                f"""
                SELECT id, domain, difficulty, topic, content, created_at
                FROM question_bank
                {where}
                ORDER BY created_at DESC, id DESC
                """,
                params,
            ).fetchall()
        return [_entry(row) for row in rows]

    def stats(self) -> QuestionBankStats:
        with self._db.connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM question_bank").fetchone()[0]
            by_difficulty = conn.execute(
                "SELECT difficulty, COUNT(*) FROM question_bank GROUP BY difficulty"
            ).fetchall()
            by_domain = conn.execute("SELECT domain, COUNT(*) FROM question_bank GROUP BY domain").fetchall()
        return QuestionBankStats(
            total=int(total),
            by_difficulty={row[0]: int(row[1]) for row in by_difficulty},
            by_domain={row[0]: int(row[1]) for row in by_domain},
        )


__all__ = ["QuestionBankStats", "QuestionBankStore", "QuestionPayload"]
