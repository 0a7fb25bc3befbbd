"""Adaptive interview engine: question selection and answer evaluation."""
from .evaluator import evaluate, score_answer
from .selector import FALLBACK_QUESTION, FALLBACK_TOPIC, select_next_question, target_difficulty
from .types import (
    DIFFICULTIES,
    Difficulty,
    EvaluationResult,
    InterviewSummary,
    InterviewTurn,
    NextQuestion,
    QuestionBankEntry,
    Sentiment,
    StoredTurn,
)

__all__ = [
    "DIFFICULTIES",
    "Difficulty",
    "EvaluationResult",
    "FALLBACK_QUESTION",
    "FALLBACK_TOPIC",
    "InterviewSummary",
    "InterviewTurn",
    "NextQuestion",
    "QuestionBankEntry",
    "Sentiment",
    "StoredTurn",
    "evaluate",
    "score_answer",
    "select_next_question",
    "target_difficulty",
]
