"""Persistence helpers for the course, module and lesson tree."""
from __future__ import annotations

import sqlite3
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from course_progress.models import Course, CourseTree, Lesson, LessonProgress, Module

from .enrollments import EnrollmentStore
from .progress import row_to_progress
from .sqlite import Database, utc_now


class CoursePayload(BaseModel):
    title: str = Field(min_length=1)
    category: str = ""
    is_published: bool = False


class ModulePayload(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    order_index: int = 0
    is_published: bool = True


class LessonPayload(BaseModel):
    title: str = Field(min_length=1)
    type: str = "VIDEO"
    duration: int = Field(default=0, ge=0)
    order: int = 0
    is_published: bool = True
    is_preview: bool = False
    content: str = ""
    video_url: Optional[str] = None


def _lesson(row: sqlite3.Row) -> Lesson:
    return Lesson(
        id=row["id"],
        module_id=row["module_id"],
        title=row["title"],
        type=row["type"],
        duration=row["duration"],
        order=row["lesson_order"],
        is_published=bool(row["is_published"]),
        is_preview=bool(row["is_preview"]),
        content=row["content"],
        video_url=row["video_url"],
    )


class CourseStore:  # SQLite-backed course catalogue
    def __init__(self, db: Database) -> None:
        self._db = db

    def create_course(self, **data: object) -> Course:
        payload = CoursePayload(**data)
        course = Course(id=uuid4().hex, **payload.model_dump())
        with self._db.connect() as conn:
            conn.execute(
                "INSERT INTO courses (id, title, category, is_published, created_at) VALUES (?, ?, ?, ?, ?)",
                (course.id, course.title, course.category, int(course.is_published), utc_now()),
            )
        return course

    def add_module(self, course_id: str, **data: object) -> Module:
        payload = ModulePayload(**data)
        module = Module(id=uuid4().hex, course_id=course_id, **payload.model_dump())
        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO modules (id, course_id, title, description, order_index, is_published)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    module.id,
                    course_id,
                    module.title,
                    module.description,
                    module.order_index,
                    int(module.is_published),
                ),
            )
        return module

    def add_lesson(self, module_id: str, **data: object) -> Lesson:
        payload = LessonPayload(**data)
        lesson = Lesson(id=uuid4().hex, module_id=module_id, **payload.model_dump())
        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO lessons (
                    id, module_id, title, type, duration, lesson_order,
                    is_published, is_preview, content, video_url
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    lesson.id,
                    module_id,
                    lesson.title,
                    lesson.type,
                    lesson.duration,
                    lesson.order,
                    int(lesson.is_published),
                    int(lesson.is_preview),
                    lesson.content,
                    lesson.video_url,
                ),
            )
        return lesson

    def find_course(self, course_id: str) -> Optional[Course]:
        """Return the course header without its module tree."""

        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT id, title, category, is_published FROM courses WHERE id = ?",
                (course_id,),
            ).fetchone()
        if row is None:
            return None
        return Course(
            id=row["id"],
            title=row["title"],
            category=row["category"],
            is_published=bool(row["is_published"]),
        )

    def find_lesson_course_id(self, lesson_id: str) -> Optional[str]:
        with self._db.connect() as conn:
            row = conn.execute(
                """
                SELECT m.course_id
                FROM lessons l
                JOIN modules m ON m.id = l.module_id
                WHERE l.id = ?
                """,
                (lesson_id,),
            ).fetchone()
        return row["course_id"] if row is not None else None

    def get_course_with_tree(self, course_id: str, user_id: str) -> Optional[CourseTree]:
        """Load the full tree plus ``user_id``'s progress and enrollment rows.

        Modules come back by ``order_index`` and lessons by ``order``; nothing
        is filtered here.
        """

        course = self.find_course(course_id)
        if course is None:
            return None
        with self._db.connect() as conn:
            module_rows = conn.execute(
                """
                SELECT id, course_id, title, description, order_index, is_published
                FROM modules
                WHERE course_id = ?
                ORDER BY order_index ASC, id ASC
                """,
                (course_id,),
            ).fetchall()
            lesson_rows = conn.execute(
                """
                SELECT l.id, l.module_id, l.title, l.type, l.duration, l.lesson_order,
                       l.is_published, l.is_preview, l.content, l.video_url
                FROM lessons l
                JOIN modules m ON m.id = l.module_id
                WHERE m.course_id = ?
                ORDER BY l.lesson_order ASC, l.id ASC
                """,
                (course_id,),
            ).fetchall()
            progress_rows = conn.execute(
                """
                SELECT p.user_id, p.lesson_id, p.completed, p.score, p.time_spent, p.last_accessed_at
                FROM lesson_progress p
                JOIN lessons l ON l.id = p.lesson_id
                JOIN modules m ON m.id = l.module_id
                WHERE m.course_id = ? AND p.user_id = ?
                """,
                (course_id, user_id),
            ).fetchall()

        lessons_by_module: Dict[str, List[Lesson]] = {}
        for row in lesson_rows:
            lessons_by_module.setdefault(row["module_id"], []).append(_lesson(row))

        course.modules = [
            Module(
                id=row["id"],
                course_id=row["course_id"],
                title=row["title"],
                description=row["description"],
                order_index=row["order_index"],
                is_published=bool(row["is_published"]),
                lessons=lessons_by_module.get(row["id"], []),
            )
            for row in module_rows
        ]
        progress: Dict[str, LessonProgress] = {
            row["lesson_id"]: row_to_progress(row) for row in progress_rows
        }
        return CourseTree(
            user_id=user_id,
            course=course,
            progress=progress,
            enrollment=EnrollmentStore(self._db).find(user_id, course_id),
        )


__all__ = ["CoursePayload", "CourseStore", "LessonPayload", "ModulePayload"]
