from typing import Dict, List, Sequence

import pytest

from course_progress.engine import build_course_view, percent
from course_progress.errors import NotEnrolledError
from course_progress.models import Course, CourseTree, Enrollment, Lesson, LessonProgress, Module

NOW = "2026-01-01T00:00:00+00:00"


def _lesson(ident: str, order: int, *, preview: bool = False, published: bool = True) -> Lesson:
    return Lesson(id=ident, module_id="m", title=ident, order=order, is_preview=preview, is_published=published)


def _tree(modules: Sequence[Module], done: Sequence[str] = (), *, enrolled: bool = True) -> CourseTree:
    progress: Dict[str, LessonProgress] = {
        ident: LessonProgress(user_id="u1", lesson_id=ident, completed=True, time_spent=60, last_accessed_at=NOW)
        for ident in done
    }
    enrollment = Enrollment(id="e1", user_id="u1", course_id="c1", enrolled_at=NOW) if enrolled else None
    return CourseTree(
        user_id="u1",
        course=Course(id="c1", title="Course", modules=list(modules)),
        progress=progress,
        enrollment=enrollment,
    )


def _module(ident: str, order_index: int, lessons: List[Lesson], *, published: bool = True) -> Module:
    return Module(id=ident, course_id="c1", title=ident, order_index=order_index, lessons=lessons, is_published=published)


def _locks(view) -> Dict[str, bool]:
    return {lesson.id: lesson.is_locked for module in view.modules for lesson in module.lessons}


def test_preview_unlocks_itself_but_still_gates_the_next_lesson():
    view = build_course_view(_tree([_module("m1", 0, [_lesson("A", 0), _lesson("B", 1, preview=True), _lesson("C", 2)])]))
    assert _locks(view) == {"A": False, "B": False, "C": True}


def test_completing_previous_lesson_unlocks_next():
    modules = [_module("m1", 0, [_lesson("A", 0), _lesson("B", 1), _lesson("C", 2)])]
    view = build_course_view(_tree(modules, done=["A"]))
    assert _locks(view) == {"A": False, "B": False, "C": True}


def test_gate_only_looks_at_the_immediately_preceding_lesson():
    modules = [_module("m1", 0, [_lesson("A", 0), _lesson("B", 1, preview=True), _lesson("C", 2)])]
    view = build_course_view(_tree(modules, done=["B"]))
    assert _locks(view) == {"A": False, "B": False, "C": False}


def test_gate_crosses_module_boundaries():
    modules = [
        _module("m2", 1, [_lesson("B", 0)]),
        _module("m1", 0, [_lesson("A", 0)]),
    ]
    view = build_course_view(_tree(modules))
    assert [module.id for module in view.modules] == ["m1", "m2"]
    assert _locks(view) == {"A": False, "B": True}

    view = build_course_view(_tree(modules, done=["A"]))
    assert _locks(view) == {"A": False, "B": False}


def test_unpublished_content_is_excluded():
    modules = [
        _module("m1", 0, [_lesson("A", 0), _lesson("hidden", 1, published=False), _lesson("B", 2)]),
        _module("draft", 1, [_lesson("D", 0)], published=False),
    ]
    view = build_course_view(_tree(modules, done=["A"]))
    assert _locks(view) == {"A": False, "B": False}
    assert view.total_lessons == 2
    assert view.progress == 50


def test_lessons_follow_stored_order():
    modules = [_module("m1", 0, [_lesson("C", 2), _lesson("A", 0), _lesson("B", 1)])]
    view = build_course_view(_tree(modules))
    assert [lesson.id for lesson in view.modules[0].lessons] == ["A", "B", "C"]


@pytest.mark.parametrize(
    "done, expected",
    [((), 0), (("A",), 33), (("A", "B"), 67), (("A", "B", "C"), 100)],
)
def test_progress_rounding(done, expected):
    modules = [_module("m1", 0, [_lesson("A", 0), _lesson("B", 1), _lesson("C", 2)])]
    view = build_course_view(_tree(modules, done=done))
    assert view.progress == expected
    assert view.completed_lessons == len(done)


def test_empty_course_has_zero_progress():
    view = build_course_view(_tree([]))
    assert view.total_lessons == 0
    assert view.progress == 0


def test_percent_rounds_halves_up():
    assert percent(1, 8) == 13
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(0, 0) == 0


def test_missing_enrollment_is_rejected():
    with pytest.raises(NotEnrolledError):
        build_course_view(_tree([], enrolled=False))


def test_lesson_view_carries_progress_details():
    modules = [_module("m1", 0, [_lesson("A", 0), _lesson("B", 1)])]
    view = build_course_view(_tree(modules, done=["A"]))
    first, second = view.modules[0].lessons
    assert first.is_completed and first.time_spent == 60
    assert not second.is_completed and second.time_spent == 0 and second.last_score is None
    assert view.enrollment_status == "ACTIVE"
