import math

import pytest

from config.registry import EVAL_KEY, bind_model
from interview_engine.evaluator import evaluate, score_answer


def test_empty_answer_is_short():
    result = evaluate("Q", "")
    assert result.score == 50
    assert result.sentiment == "NEUTRAL"
    assert result.feedback == "Answer is too short."


def test_length_boundaries():
    assert evaluate("Q", "x" * 50).score == 50
    medium = evaluate("Q", "x" * 51)
    assert (medium.score, medium.sentiment) == (70, "POSITIVE")
    assert evaluate("Q", "x" * 100).score == 70
    long = evaluate("Q", "x" * 101)
    assert (long.score, long.sentiment) == (85, "POSITIVE")
    assert long.feedback == "Excellent, detailed answer using STAR method."


def test_score_answer_defaults_to_heuristic():
    assert score_answer("Q", "x" * 60).score == 70


def test_bound_model_replaces_heuristic():
    calls = []

    def fake_model(**kwargs):
        calls.append(kwargs)
        return {"score": 92, "feedback": "Strong trade-off discussion.", "sentiment": "POSITIVE"}

    bind_model(EVAL_KEY, fake_model)
    result = score_answer("Explain CAP", "short")
    assert result.score == 92
    assert calls == [{"question": "Explain CAP", "answer": "short"}]


def test_model_score_is_clamped():
    bind_model(EVAL_KEY, lambda **_: {"score": 140.4, "feedback": "ok", "sentiment": "POSITIVE"})
    assert score_answer("Q", "A").score == 100


def test_invalid_model_output_falls_back():
    bind_model(EVAL_KEY, lambda **_: {"unexpected": True})
    result = score_answer("Q", "x" * 120)
    assert result.score == 85
    assert result.sentiment == "POSITIVE"


@pytest.mark.parametrize("score", [math.inf, -math.inf, math.nan])
def test_non_finite_model_score_falls_back(score):
    bind_model(EVAL_KEY, lambda **_: {"score": score, "feedback": "??", "sentiment": "POSITIVE"})
    result = score_answer("Q", "x" * 120)
    assert result.score == 85
    assert result.feedback == "Excellent, detailed answer using STAR method."
