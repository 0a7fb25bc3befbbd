"""FastAPI routes for interviews, the question bank, courses and certificates."""
from __future__ import annotations

import random
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from api.errors import http_errors
from api.schemas import (
    CertificateReq,
    CertificateResp,
    EnrollReq,
    EnrollResp,
    HistoryResp,
    LearnResp,
    LessonCompleteReq,
    LessonCompleteResp,
    NextQuestionReq,
    NextQuestionResp,
    QuestionCreateReq,
    ResponseReq,
    ResponseResp,
)
from certificates.issuer import CertificateIssuer
from certificates.models import VerificationResult
from certificates.pdf import render_certificate_pdf
from course_progress.engine import ProgressEngine
from interview_engine import score_answer, select_next_question
from interview_engine.types import InterviewSummary, QuestionBankEntry
from storage.question_bank import QuestionBankStats, QuestionBankStore
from storage.sqlite import Database
from storage.turns import InterviewTurnStore


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_rng(request: Request) -> Optional[random.Random]:
    return getattr(request.app.state, "rng", None)


interviews = APIRouter(prefix="/api/interviews", tags=["interviews"])
knowledge_base = APIRouter(prefix="/api/knowledge-base", tags=["knowledge-base"])
courses = APIRouter(prefix="/api/courses", tags=["courses"])
certificates = APIRouter(prefix="/api/certificates", tags=["certificates"])


@interviews.post("/{interview_id}/next-question", response_model=NextQuestionResp)
def next_question(
    interview_id: str,
    req: NextQuestionReq,
    db: Database = Depends(get_db),
    rng: Optional[random.Random] = Depends(get_rng),
) -> NextQuestionResp:
    history = InterviewTurnStore(db).history(interview_id)
    picked = select_next_question(QuestionBankStore(db), req.domain, history, rng=rng, ref=interview_id)
    return NextQuestionResp(interview_id=interview_id, turn=len(history) + 1, **picked.model_dump())


@interviews.post("/{interview_id}/response", response_model=ResponseResp)
def submit_response(interview_id: str, req: ResponseReq, db: Database = Depends(get_db)) -> ResponseResp:
    evaluation = score_answer(req.question, req.answer, ref=interview_id)
    turn = InterviewTurnStore(db).append(
        interview_id,
        question=req.question,
        answer=req.answer,
        evaluation=evaluation,
        question_id=req.question_id,
        difficulty=req.difficulty,
        topic=req.topic,
    )
    return ResponseResp(turn=turn, evaluation=evaluation)


@interviews.get("/{interview_id}/history", response_model=HistoryResp)
def interview_history(interview_id: str, db: Database = Depends(get_db)) -> HistoryResp:
    return HistoryResp(interview_id=interview_id, turns=InterviewTurnStore(db).history(interview_id))


@interviews.get("/{interview_id}/summary", response_model=InterviewSummary)
def interview_summary(interview_id: str, db: Database = Depends(get_db)) -> InterviewSummary:
    return InterviewTurnStore(db).summary(interview_id)


@knowledge_base.get("", response_model=List[QuestionBankEntry])
def list_questions(
    domain: Optional[str] = None,
    search: Optional[str] = None,
    db: Database = Depends(get_db),
) -> List[QuestionBankEntry]:
    return QuestionBankStore(db).list_entries(domain=domain, search=search)


@knowledge_base.post("", response_model=QuestionBankEntry, status_code=201)
def create_question(req: QuestionCreateReq, db: Database = Depends(get_db)) -> QuestionBankEntry:
    return QuestionBankStore(db).add(**req.model_dump())


@knowledge_base.get("/stats", response_model=QuestionBankStats)
def question_stats(db: Database = Depends(get_db)) -> QuestionBankStats:
    return QuestionBankStore(db).stats()


@courses.post("/{course_id}/enroll", response_model=EnrollResp, status_code=201)
def enroll(course_id: str, req: EnrollReq, db: Database = Depends(get_db)) -> EnrollResp:
    with http_errors():
        enrollment = ProgressEngine(db).enroll(req.user_id, course_id)
    return EnrollResp(message="Enrolled successfully", enrollment=enrollment)


@courses.get("/{course_id}/learn", response_model=LearnResp)
def learn(course_id: str, user_id: str = Query(...), db: Database = Depends(get_db)) -> LearnResp:
    with http_errors():
        view = ProgressEngine(db).get_course_view(user_id, course_id)
    return LearnResp(course=view)


@courses.post("/{course_id}/lessons/{lesson_id}/complete", response_model=LessonCompleteResp)
def complete_lesson(
    course_id: str,
    lesson_id: str,
    req: LessonCompleteReq,
    db: Database = Depends(get_db),
) -> LessonCompleteResp:
    with http_errors():
        result = ProgressEngine(db).record_lesson_completion(
            req.user_id,
            lesson_id,
            time_spent=req.time_spent,
            score=req.score,
            course_id=course_id,
        )
    return LessonCompleteResp(**result.model_dump())


@certificates.post("/generate", response_model=CertificateResp, status_code=201)
def generate_certificate(req: CertificateReq, db: Database = Depends(get_db)) -> CertificateResp:
    with http_errors():
        certificate = CertificateIssuer(db).issue(
            req.user_id,
            req.course_id,
            student_name=req.student_name,
            grade=req.grade,
            score=req.score,
        )
    return CertificateResp(message="Certificate generated successfully", certificate=certificate)


@certificates.get("/verify/{unique_id}", response_model=VerificationResult)
def verify_certificate(unique_id: str, db: Database = Depends(get_db)) -> VerificationResult:
    with http_errors():
        return CertificateIssuer(db).verify(unique_id)


@certificates.put("/{unique_id}/invalidate", response_model=CertificateResp)
def invalidate_certificate(unique_id: str, db: Database = Depends(get_db)) -> CertificateResp:
    with http_errors():
        certificate = CertificateIssuer(db).invalidate(unique_id)
    return CertificateResp(message="Certificate invalidated", certificate=certificate)


@certificates.get("/{unique_id}/pdf")
def certificate_pdf(unique_id: str, db: Database = Depends(get_db)) -> Response:
    with http_errors():
        certificate = CertificateIssuer(db).get(unique_id)
    return Response(
        content=render_certificate_pdf(certificate),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{unique_id}.pdf"'},
    )


ROUTERS = [interviews, knowledge_base, courses, certificates]

__all__ = ["ROUTERS", "get_db", "get_rng"]
