"""Shared type definitions for the interview engine."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["BEGINNER", "INTERMEDIATE", "ADVANCED"]
Sentiment = Literal["POSITIVE", "NEUTRAL", "NEGATIVE"]

DIFFICULTIES: tuple[Difficulty, ...] = ("BEGINNER", "INTERMEDIATE", "ADVANCED")


class QuestionBankEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    domain: str
    difficulty: Difficulty
    topic: str
    content: str
    created_at: Optional[str] = None


class InterviewTurn(BaseModel):
    question_id: Optional[str] = None
    score: Optional[float] = None  # 0..100, None counts as 0


class StoredTurn(InterviewTurn):
    interview_id: str
    sequence: int
    question: str
    answer: str
    feedback: str
    sentiment: Sentiment
    difficulty: Optional[Difficulty] = None
    topic: Optional[str] = None
    created_at: str


class NextQuestion(BaseModel):
    question: str
    difficulty: Difficulty
    topic: str
    question_id: Optional[str] = None


class EvaluationResult(BaseModel):
    score: int = Field(ge=0, le=100)
    feedback: str
    sentiment: Sentiment


class InterviewSummary(BaseModel):
    interview_id: str
    turns: int
    average_score: float
    last_difficulty: Optional[Difficulty] = None
