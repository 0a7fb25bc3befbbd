"""Per-learner lock state, completion percentage and the completion cascade."""
from __future__ import annotations

import sqlite3
from typing import Dict, Iterable, List, Optional, Tuple

from observability.logger import log_event
from storage.courses import CourseStore
from storage.enrollments import EnrollmentStore
from storage.progress import LessonProgressStore
from storage.sqlite import Database, utc_now

from .errors import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    CourseUnavailableError,
    InvalidProgressError,
    LessonNotFoundError,
    NotEnrolledError,
)
from .models import (
    CompletionResult,
    CourseTree,
    CourseView,
    Enrollment,
    Lesson,
    LessonProgress,
    LessonView,
    Module,
    ModuleView,
)


def percent(done: int, total: int) -> int:
    """Whole percentage of ``done`` over ``total``, halves rounded up."""

    if total <= 0:
        return 0
    return (done * 200 + total) // (2 * total)


def _published_modules(modules: Iterable[Module]) -> List[Module]:
    return sorted((m for m in modules if m.is_published), key=lambda m: m.order_index)


def _published_lessons(lessons: Iterable[Lesson]) -> List[Lesson]:
    return sorted((lesson for lesson in lessons if lesson.is_published), key=lambda lesson: lesson.order)


def _lesson_view(lesson: Lesson, row: Optional[LessonProgress], gate_open: bool) -> LessonView:
    return LessonView(
        id=lesson.id,
        title=lesson.title,
        type=lesson.type,
        duration=lesson.duration,
        is_preview=lesson.is_preview,
        is_locked=not gate_open and not lesson.is_preview,
        is_completed=bool(row and row.completed),
        last_score=row.score if row else None,
        time_spent=row.time_spent if row else 0,
    )


def annotate_module(
    module: Module,
    progress: Dict[str, LessonProgress],
    gate_open: bool,
) -> Tuple[ModuleView, bool]:
    """Fold one module's lessons, returning the view and the outgoing gate.

    The gate for each lesson is the completion of the lesson right before it,
    across module boundaries; previews ignore the gate but still close it for
    the next lesson when they are not completed.
    """

    views: List[LessonView] = []
    for lesson in _published_lessons(module.lessons):
        view = _lesson_view(lesson, progress.get(lesson.id), gate_open)
        views.append(view)
        gate_open = view.is_completed
    module_view = ModuleView(
        id=module.id,
        title=module.title,
        description=module.description,
        order_index=module.order_index,
        lessons=views,
    )
    return module_view, gate_open


def build_course_view(tree: CourseTree) -> CourseView:
    """Annotate a loaded course tree for its learner.

    Raises:
        NotEnrolledError: If the tree carries no enrollment.
    """

    course = tree.course
    if tree.enrollment is None:
        raise NotEnrolledError(tree.user_id, course.id)

    module_views: List[ModuleView] = []
    gate_open = True  # the first lesson of a course is always reachable
    for module in _published_modules(course.modules):
        module_view, gate_open = annotate_module(module, tree.progress, gate_open)
        module_views.append(module_view)

    lessons = [lesson for module_view in module_views for lesson in module_view.lessons]
    completed = sum(1 for lesson in lessons if lesson.is_completed)
    return CourseView(
        id=course.id,
        title=course.title,
        category=course.category,
        modules=module_views,
        total_lessons=len(lessons),
        completed_lessons=completed,
        progress=percent(completed, len(lessons)),
        enrollment_status=tree.enrollment.status,
    )


class ProgressEngine:  # Course progress and enrollment lifecycle
    def __init__(self, db: Database) -> None:
        self._db = db
        self._courses = CourseStore(db)
        self._enrollments = EnrollmentStore(db)
        self._progress = LessonProgressStore(db)

    def get_course_view(self, user_id: str, course_id: str) -> CourseView:
        """Build the learner's annotated module/lesson tree.

        Raises:
            CourseNotFoundError: If ``course_id`` does not exist.
            NotEnrolledError: If ``user_id`` holds no enrollment for it.
        """

        with self._db.snapshot():
            tree = self._courses.get_course_with_tree(course_id, user_id)
        if tree is None:
            raise CourseNotFoundError(course_id)
        if tree.enrollment is None:
            raise NotEnrolledError(user_id, course_id)
        return build_course_view(tree)

    def record_lesson_completion(
        self,
        user_id: str,
        lesson_id: str,
        *,
        time_spent: Optional[int] = None,
        score: Optional[float] = None,
        course_id: Optional[str] = None,
    ) -> CompletionResult:
        """Mark a lesson complete and run the enrollment completion cascade.

        The upsert, the recomputation and the enrollment transition commit
        together or not at all. Not safe to retry blindly: ``time_spent``
        accumulates. When ``course_id`` is given the lesson must belong to it.

        Raises:
            InvalidProgressError: If ``time_spent`` is negative.
            LessonNotFoundError: If the lesson does not exist in the course.
        """

        if time_spent is not None and time_spent < 0:
            raise InvalidProgressError(f"time_spent must not be negative: {time_spent}")

        with self._db.transaction():
            owner = self._courses.find_lesson_course_id(lesson_id)
            if owner is None or (course_id is not None and owner != course_id):
                raise LessonNotFoundError(lesson_id)
            course_id = owner

            progress = self._progress.upsert(user_id, lesson_id, time_spent=time_spent, score=score)
            view = self.get_course_view(user_id, course_id)
            enrollment = self._enrollments.find(user_id, course_id)
            if enrollment is None:  # pragma: no cover - checked by get_course_view
                raise NotEnrolledError(user_id, course_id)

            log_event(
                "lesson_completed",
                lesson_id,
                user_id=user_id,
                course_id=course_id,
                progress=view.progress,
            )

            if view.progress == 100:
                if enrollment.status == "COMPLETED":
                    return CompletionResult(progress=progress, course_completed=False, course_id=course_id)
                self._enrollments.update(
                    enrollment.id,
                    status="COMPLETED",
                    completed_at=utc_now(),
                    progress=100,
                )
                log_event("course_completed", enrollment.id, user_id=user_id, course_id=course_id)
                return CompletionResult(progress=progress, course_completed=True, course_id=course_id)

            self._enrollments.update(enrollment.id, progress=view.progress)
            return CompletionResult(progress=progress, course_completed=False, course_id=course_id)

    def enroll(self, user_id: str, course_id: str) -> Enrollment:
        """Enroll a learner in a published course.

        Raises:
            CourseNotFoundError: If the course does not exist.
            CourseUnavailableError: If the course is not published.
            AlreadyEnrolledError: If the learner is already enrolled.
        """

        with self._db.transaction():
            course = self._courses.find_course(course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            if not course.is_published:
                raise CourseUnavailableError(course_id)
            if self._enrollments.find(user_id, course_id) is not None:
                raise AlreadyEnrolledError(user_id, course_id)
            try:
                enrollment = self._enrollments.create(user_id, course_id)
            except sqlite3.IntegrityError as exc:
                raise AlreadyEnrolledError(user_id, course_id) from exc

        log_event("enrolled", enrollment.id, user_id=user_id, course_id=course_id)
        return enrollment

    def grant_access(self, user_id: str, course_id: str, *, interview_access: bool = False) -> Enrollment:
        """Create the enrollment or upgrade the existing one after a purchase.

        Interview access is only ever raised; status and progress are left alone.
        """

        with self._db.transaction():
            if self._courses.find_course(course_id) is None:
                raise CourseNotFoundError(course_id)
            enrollment = self._enrollments.upsert_access(user_id, course_id, interview_access=interview_access)

        log_event(
            "enrolled",
            enrollment.id,
            user_id=user_id,
            course_id=course_id,
            reason="grant",
        )
        return enrollment


__all__ = ["ProgressEngine", "annotate_module", "build_course_view", "percent"]
