"""Answer scoring with a pluggable model and a length-based fallback."""
from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import ValidationError

from config.registry import EVAL_KEY, find_model
from observability.logger import log_event

from .types import EvaluationResult

logger = logging.getLogger(__name__)

SHORT_MAX_CHARS = 50
MEDIUM_MAX_CHARS = 100


def evaluate(question: str, answer: str) -> EvaluationResult:
    """Score an answer by length.

    Stand-in for a real NLP evaluator; the signature and result shape are
    what a substituted model must honour.
    """

    length = len(answer or "")
    if length <= SHORT_MAX_CHARS:
        return EvaluationResult(score=50, feedback="Answer is too short.", sentiment="NEUTRAL")
    if length <= MEDIUM_MAX_CHARS:
        return EvaluationResult(score=70, feedback="Good points but elaborate more.", sentiment="POSITIVE")
    return EvaluationResult(
        score=85,
        feedback="Excellent, detailed answer using STAR method.",
        sentiment="POSITIVE",
    )


def _clamped(raw: Any) -> Any:
    score = raw.get("score") if isinstance(raw, dict) else None
    if isinstance(score, (int, float)) and math.isfinite(score):
        return {**raw, "score": int(max(0, min(100, round(score))))}
    return raw


def score_answer(question: str, answer: str, *, ref: str = "-") -> EvaluationResult:
    """Evaluate with the bound model, falling back to :func:`evaluate`."""

    model = find_model(EVAL_KEY)
    if model is None:
        result = evaluate(question, answer)
    else:
        raw = model(question=question, answer=answer)
        try:
            result = EvaluationResult.model_validate(_clamped(raw))
        except ValidationError:
            logger.warning("Evaluator model returned an invalid payload; using length heuristic")
            log_event("evaluator_fallback", ref, reason="schema")
            result = evaluate(question, answer)

    log_event("answer_evaluated", ref, score=result.score, sentiment=result.sentiment)
    return result


__all__ = ["evaluate", "score_answer"]
