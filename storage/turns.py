"""Persistence helpers for the append-only interview turn log."""
from __future__ import annotations

from typing import List, Optional

from interview_engine.types import Difficulty, EvaluationResult, InterviewSummary, StoredTurn

from .sqlite import Database, utc_now


class InterviewTurnStore:  # SQLite-backed per-interview turn history
    def __init__(self, db: Database) -> None:
        self._db = db

    def append(
        self,
        interview_id: str,
        *,
        question: str,
        answer: str,
        evaluation: EvaluationResult,
        question_id: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
        topic: Optional[str] = None,
    ) -> StoredTurn:
        now = utc_now()
        with self._db.transaction() as conn:
            next_sequence = conn.execute(
                "SELECT COALESCE(MAX(sequence), 0) + 1 FROM interview_turns WHERE interview_id = ?",
                (interview_id,),
            ).fetchone()[0]
            conn.execute(
                """
                INSERT INTO interview_turns (
                    interview_id, sequence, question_id, question, answer,
                    score, feedback, sentiment, difficulty, topic, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    interview_id,
                    int(next_sequence),
                    question_id,
                    question,
                    answer,
                    evaluation.score,
                    evaluation.feedback,
                    evaluation.sentiment,
                    difficulty,
                    topic,
                    now,
                ),
            )
        return StoredTurn(
            interview_id=interview_id,
            sequence=int(next_sequence),
            question_id=question_id,
            question=question,
            answer=answer,
            score=evaluation.score,
            feedback=evaluation.feedback,
            sentiment=evaluation.sentiment,
            difficulty=difficulty,
            topic=topic,
            created_at=now,
        )

    def history(self, interview_id: str) -> List[StoredTurn]:
        with self._db.connect() as conn:
            rows = conn.execute(
                """
                SELECT interview_id, sequence, question_id, question, answer, score,
                       feedback, sentiment, difficulty, topic, created_at
                FROM interview_turns
                WHERE interview_id = ?
                ORDER BY sequence ASC
                """,
                (interview_id,),
            ).fetchall()
        return [StoredTurn(**dict(row)) for row in rows]

    def summary(self, interview_id: str) -> InterviewSummary:
        turns = self.history(interview_id)
        scores = [turn.score or 0 for turn in turns]
        average = float(f"{sum(scores) / len(scores):.1f}") if scores else 0.0
        return InterviewSummary(
            interview_id=interview_id,
            turns=len(turns),
            average_score=average,
            last_difficulty=turns[-1].difficulty if turns else None,
        )


__all__ = ["InterviewTurnStore"]
