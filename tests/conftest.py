import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import pytest

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.registry import EVAL_KEY, unbind_model
from config.settings import settings
from course_progress.models import Course, Lesson
from storage.courses import CourseStore
from storage.migrate import migrate
from storage.sqlite import Database

CourseFactory = Callable[..., Tuple[Course, List[Lesson]]]


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        td.cleanup()


@pytest.fixture(autouse=True)
def _reset_evaluator():
    unbind_model(EVAL_KEY)
    yield
    unbind_model(EVAL_KEY)


@pytest.fixture
def db(tmp_db) -> Database:
    return Database(tmp_db, timeout_s=10.0)


@pytest.fixture
def make_course(db) -> CourseFactory:
    """Build a course from a layout of modules, each a list of preview flags."""

    def _make(layout: Sequence[Sequence[bool]] = ((False, False, False),), *, published: bool = True):
        store = CourseStore(db)
        course = store.create_course(title="System Design", category="TECHNOLOGY", is_published=published)
        lessons: List[Lesson] = []
        for m_index, previews in enumerate(layout):
            module = store.add_module(course.id, title=f"Module {m_index + 1}", order_index=m_index)
            for l_index, is_preview in enumerate(previews):
                lessons.append(
                    store.add_lesson(
                        module.id,
                        title=f"Lesson {m_index + 1}.{l_index + 1}",
                        order=l_index,
                        duration=300,
                        is_preview=is_preview,
                    )
                )
        return course, lessons

    return _make
