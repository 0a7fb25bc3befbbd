"""Pydantic schemas for the TechWell HTTP adapter."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from certificates.models import Certificate
from course_progress.models import CourseView, Enrollment, LessonProgress
from interview_engine.types import Difficulty, EvaluationResult, NextQuestion, StoredTurn


class NextQuestionReq(BaseModel):
    domain: str = Field(min_length=1)


class NextQuestionResp(NextQuestion):
    interview_id: str
    turn: int


class ResponseReq(BaseModel):
    question: str
    answer: str = ""
    question_id: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    topic: Optional[str] = None


class ResponseResp(BaseModel):
    turn: StoredTurn
    evaluation: EvaluationResult


class HistoryResp(BaseModel):
    interview_id: str
    turns: List[StoredTurn] = Field(default_factory=list)


class QuestionCreateReq(BaseModel):
    domain: str
    difficulty: Difficulty
    topic: str
    content: str


class EnrollReq(BaseModel):
    user_id: str


class EnrollResp(BaseModel):
    message: str
    enrollment: Enrollment


class LearnResp(BaseModel):
    course: CourseView


class LessonCompleteReq(BaseModel):
    user_id: str
    time_spent: Optional[int] = Field(default=None, ge=0)
    score: Optional[float] = None


class LessonCompleteResp(BaseModel):
    progress: LessonProgress
    course_completed: bool
    course_id: str


class CertificateReq(BaseModel):
    user_id: str
    course_id: str
    student_name: str = Field(min_length=1)
    grade: Optional[str] = None
    score: Optional[float] = None


class CertificateResp(BaseModel):
    message: str
    certificate: Certificate
