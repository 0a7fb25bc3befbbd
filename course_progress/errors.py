"""Error taxonomy for the course progress engine."""
from __future__ import annotations


class ProgressError(RuntimeError):  # Base engine error
    pass


class NotFoundError(ProgressError, LookupError):  # Referenced record missing
    def __init__(self, kind: str, ident: str) -> None:
        super().__init__(f"{kind} not found: {ident}")
        self.kind = kind
        self.ident = ident


class CourseNotFoundError(NotFoundError):
    def __init__(self, course_id: str) -> None:
        super().__init__("Course", course_id)


class LessonNotFoundError(NotFoundError):
    def __init__(self, lesson_id: str) -> None:
        super().__init__("Lesson", lesson_id)


class NotEnrolledError(ProgressError):  # Learner holds no enrollment for the course
    def __init__(self, user_id: str, course_id: str) -> None:
        super().__init__(f"User {user_id} is not enrolled in course {course_id}")
        self.user_id = user_id
        self.course_id = course_id


class AlreadyEnrolledError(ProgressError):
    def __init__(self, user_id: str, course_id: str) -> None:
        super().__init__(f"User {user_id} is already enrolled in course {course_id}")
        self.user_id = user_id
        self.course_id = course_id


class CourseUnavailableError(ProgressError):  # Course exists but is not published
    def __init__(self, course_id: str) -> None:
        super().__init__(f"Course is not available: {course_id}")
        self.course_id = course_id


class InvalidProgressError(ProgressError, ValueError):  # Rejected completion input
    pass


__all__ = [
    "AlreadyEnrolledError",
    "CourseNotFoundError",
    "CourseUnavailableError",
    "InvalidProgressError",
    "LessonNotFoundError",
    "NotEnrolledError",
    "NotFoundError",
    "ProgressError",
]
