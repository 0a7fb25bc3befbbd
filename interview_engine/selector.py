"""Difficulty-adaptive question selection over a question bank."""
from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence

from observability.logger import log_event

from .types import Difficulty, InterviewTurn, NextQuestion, QuestionBankEntry

ADVANCED_ABOVE = 80
BEGINNER_BELOW = 40

FALLBACK_QUESTION = "Tell me about yourself."
FALLBACK_TOPIC = "Intro"


class QuestionBank(Protocol):  # Read side of the question bank store
    def count(self, domain: str, difficulty: Difficulty) -> int: ...

    def find_random_one(self, domain: str, difficulty: Difficulty, skip: int) -> Optional[QuestionBankEntry]: ...


def target_difficulty(history: Sequence[InterviewTurn]) -> Difficulty:
    """Resolve the next difficulty from the most recent turn only."""

    if not history:
        return "INTERMEDIATE"
    last_score = history[-1].score or 0
    if last_score > ADVANCED_ABOVE:
        return "ADVANCED"
    if last_score < BEGINNER_BELOW:
        return "BEGINNER"
    return "INTERMEDIATE"


def select_next_question(
    bank: QuestionBank,
    domain: str,
    history: Sequence[InterviewTurn],
    *,
    rng: Optional[random.Random] = None,
    ref: str = "-",
) -> NextQuestion:
    """Pick a uniformly random bank entry at the adaptive difficulty.

    An empty pool degrades to a generic intro prompt instead of failing.
    """

    difficulty = target_difficulty(history)
    count = bank.count(domain, difficulty)
    entry: Optional[QuestionBankEntry] = None
    if count > 0:
        skip = (rng or random).randrange(count)
        entry = bank.find_random_one(domain, difficulty, skip)

    if entry is None:
        log_event("question_pool_empty", ref, domain=domain, difficulty=difficulty)
        return NextQuestion(question=FALLBACK_QUESTION, difficulty=difficulty, topic=FALLBACK_TOPIC)

    log_event("question_selected", ref, domain=domain, difficulty=difficulty, question_id=entry.id)
    return NextQuestion(
        question=entry.content,
        difficulty=difficulty,
        topic=entry.topic,
        question_id=entry.id,
    )


__all__ = [
    "ADVANCED_ABOVE",
    "BEGINNER_BELOW",
    "FALLBACK_QUESTION",
    "FALLBACK_TOPIC",
    "QuestionBank",
    "select_next_question",
    "target_difficulty",
]
