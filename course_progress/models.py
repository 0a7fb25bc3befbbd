"""Course, progress and enrollment models for the learning engine."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

EnrollmentStatus = Literal["ACTIVE", "COMPLETED"]


class Lesson(BaseModel):  # Single lesson inside a module
    id: str
    module_id: str
    title: str
    type: str = "VIDEO"
    duration: int = Field(default=0, ge=0)
    order: int = 0
    is_published: bool = True
    is_preview: bool = False
    content: str = ""
    video_url: Optional[str] = None


class Module(BaseModel):  # Ordered group of lessons
    id: str
    course_id: str
    title: str
    description: str = ""
    order_index: int = 0
    is_published: bool = True
    lessons: List[Lesson] = Field(default_factory=list)


class Course(BaseModel):  # Course with its module tree
    id: str
    title: str
    category: str = ""
    is_published: bool = True
    modules: List[Module] = Field(default_factory=list)


class LessonProgress(BaseModel):  # Per (user, lesson) progress row
    user_id: str
    lesson_id: str
    completed: bool = False
    score: Optional[float] = None
    time_spent: int = Field(default=0, ge=0)
    last_accessed_at: str


class Enrollment(BaseModel):  # Per (user, course) enrollment row
    id: str
    user_id: str
    course_id: str
    status: EnrollmentStatus = "ACTIVE"
    progress: int = Field(default=0, ge=0, le=100)
    has_interview_access: bool = False
    enrolled_at: str
    completed_at: Optional[str] = None


class CourseTree(BaseModel):  # Course snapshot with one learner's rows pre-joined
    user_id: str
    course: Course
    progress: Dict[str, LessonProgress] = Field(default_factory=dict)
    enrollment: Optional[Enrollment] = None


class LessonView(BaseModel):  # Lesson annotated with lock and completion state
    id: str
    title: str
    type: str
    duration: int
    is_preview: bool
    is_locked: bool
    is_completed: bool
    last_score: Optional[float] = None
    time_spent: int = 0


class ModuleView(BaseModel):
    id: str
    title: str
    description: str
    order_index: int
    lessons: List[LessonView] = Field(default_factory=list)


class CourseView(BaseModel):  # Learner-facing course structure
    id: str
    title: str
    category: str
    modules: List[ModuleView] = Field(default_factory=list)
    total_lessons: int
    completed_lessons: int
    progress: int = Field(ge=0, le=100)
    enrollment_status: EnrollmentStatus


class CompletionResult(BaseModel):  # Outcome of recording a lesson completion
    progress: LessonProgress
    course_completed: bool
    course_id: str


__all__ = [
    "CompletionResult",
    "Course",
    "CourseTree",
    "CourseView",
    "Enrollment",
    "EnrollmentStatus",
    "Lesson",
    "LessonProgress",
    "LessonView",
    "Module",
    "ModuleView",
]
