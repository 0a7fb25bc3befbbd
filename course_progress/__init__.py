"""Course progress engine: lesson unlocking, completion and enrollment state.

The engine itself lives in :mod:`course_progress.engine`.
"""
from .errors import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    CourseUnavailableError,
    LessonNotFoundError,
    NotEnrolledError,
    NotFoundError,
    ProgressError,
)
from .models import (
    CompletionResult,
    Course,
    CourseTree,
    CourseView,
    Enrollment,
    Lesson,
    LessonProgress,
    LessonView,
    Module,
    ModuleView,
)

__all__ = [
    "AlreadyEnrolledError",
    "CompletionResult",
    "Course",
    "CourseNotFoundError",
    "CourseTree",
    "CourseUnavailableError",
    "CourseView",
    "Enrollment",
    "Lesson",
    "LessonNotFoundError",
    "LessonProgress",
    "LessonView",
    "Module",
    "ModuleView",
    "NotEnrolledError",
    "NotFoundError",
    "ProgressError",
]
