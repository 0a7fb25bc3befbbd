import random
from typing import List, Optional

import pytest

from interview_engine.selector import FALLBACK_QUESTION, select_next_question, target_difficulty
from interview_engine.types import InterviewTurn, QuestionBankEntry


class FakeBank:
    def __init__(self, entries: List[QuestionBankEntry]) -> None:
        self.entries = entries
        self.skips: List[int] = []

    def _pool(self, domain: str, difficulty: str) -> List[QuestionBankEntry]:
        return [e for e in self.entries if e.domain == domain and e.difficulty == difficulty]

    def count(self, domain: str, difficulty: str) -> int:
        return len(self._pool(domain, difficulty))

    def find_random_one(self, domain: str, difficulty: str, skip: int) -> Optional[QuestionBankEntry]:
        self.skips.append(skip)
        pool = self._pool(domain, difficulty)
        return pool[skip] if skip < len(pool) else None


def _entry(ident: str, difficulty: str, domain: str = "TECHNOLOGY") -> QuestionBankEntry:
    return QuestionBankEntry(
        id=ident,
        domain=domain,
        difficulty=difficulty,
        topic=f"topic-{ident}",
        content=f"question {ident}",
    )


def _history(*scores) -> List[InterviewTurn]:
    return [InterviewTurn(question_id=f"q{i}", score=s) for i, s in enumerate(scores)]


@pytest.mark.parametrize(
    "scores, expected",
    [
        ((), "INTERMEDIATE"),
        ((81,), "ADVANCED"),
        ((100,), "ADVANCED"),
        ((80,), "INTERMEDIATE"),
        ((40,), "INTERMEDIATE"),
        ((39,), "BEGINNER"),
        ((0,), "BEGINNER"),
        ((None,), "BEGINNER"),
        ((95, 10), "BEGINNER"),
        ((10, 95), "ADVANCED"),
    ],
)
def test_target_difficulty_uses_last_turn(scores, expected):
    assert target_difficulty(_history(*scores)) == expected


def test_selects_from_matching_pool():
    bank = FakeBank([_entry("a1", "ADVANCED"), _entry("b1", "BEGINNER"), _entry("x1", "ADVANCED", "FINANCE")])
    picked = select_next_question(bank, "TECHNOLOGY", _history(90), rng=random.Random(1))
    assert picked.question == "question a1"
    assert picked.difficulty == "ADVANCED"
    assert picked.topic == "topic-a1"
    assert picked.question_id == "a1"


def test_empty_pool_falls_back_to_intro():
    bank = FakeBank([_entry("a1", "ADVANCED")])
    picked = select_next_question(bank, "TECHNOLOGY", _history(20))
    assert picked.model_dump() == {
        "question": FALLBACK_QUESTION,
        "difficulty": "BEGINNER",
        "topic": "Intro",
        "question_id": None,
    }
    assert bank.skips == []


def test_unknown_domain_never_raises():
    picked = select_next_question(FakeBank([]), "UNKNOWN", [])
    assert picked.question == "Tell me about yourself."
    assert picked.difficulty == "INTERMEDIATE"
    assert picked.topic == "Intro"


def test_vanished_row_falls_back():
    class ShrinkingBank(FakeBank):
        def find_random_one(self, domain, difficulty, skip):
            return None

    picked = select_next_question(ShrinkingBank([_entry("i1", "INTERMEDIATE")]), "TECHNOLOGY", [])
    assert picked.topic == "Intro"


def test_skip_covers_whole_pool():
    entries = [_entry(f"i{n}", "INTERMEDIATE") for n in range(3)]
    bank = FakeBank(entries)
    rng = random.Random(42)
    seen = {select_next_question(bank, "TECHNOLOGY", [], rng=rng).question_id for _ in range(300)}
    assert seen == {"i0", "i1", "i2"}
    assert all(0 <= skip < 3 for skip in bank.skips)


def test_selection_is_stateless_across_calls():
    bank = FakeBank([_entry("i1", "INTERMEDIATE"), _entry("a1", "ADVANCED")])
    first = select_next_question(bank, "TECHNOLOGY", _history(90))
    second = select_next_question(bank, "TECHNOLOGY", _history(90, 60))
    assert first.difficulty == "ADVANCED"
    assert second.difficulty == "INTERMEDIATE"
