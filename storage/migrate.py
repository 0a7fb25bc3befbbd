"""SQLite schema migrations."""
from __future__ import annotations

import os
import sqlite3
from typing import Iterable

from config.settings import settings

SCHEMA: Iterable[str] = [
    """
CREATE TABLE IF NOT EXISTS question_bank (
  id TEXT PRIMARY KEY,
  domain TEXT NOT NULL,
  difficulty TEXT NOT NULL CHECK (difficulty IN ('BEGINNER', 'INTERMEDIATE', 'ADVANCED')),
  topic TEXT NOT NULL,
  content TEXT NOT NULL,
  created_at TEXT NOT NULL
);
""",
    """
CREATE INDEX IF NOT EXISTS idx_question_bank_pool ON question_bank (domain, difficulty);
""",
    """
CREATE TABLE IF NOT EXISTS interview_turns (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  interview_id TEXT NOT NULL,
  sequence INTEGER NOT NULL,
  question_id TEXT,
  question TEXT NOT NULL,
  answer TEXT NOT NULL,
  score REAL,
  feedback TEXT NOT NULL,
  sentiment TEXT NOT NULL,
  difficulty TEXT,
  topic TEXT,
  created_at TEXT NOT NULL,
  UNIQUE (interview_id, sequence)
);
""",
    """
CREATE TABLE IF NOT EXISTS courses (
  id TEXT PRIMARY KEY,
  title TEXT NOT NULL,
  category TEXT NOT NULL DEFAULT '',
  is_published INTEGER NOT NULL DEFAULT 0,
  created_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS modules (
  id TEXT PRIMARY KEY,
  course_id TEXT NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
  title TEXT NOT NULL,
  description TEXT NOT NULL DEFAULT '',
  order_index INTEGER NOT NULL DEFAULT 0,
  is_published INTEGER NOT NULL DEFAULT 1
);
""",
    """
CREATE TABLE IF NOT EXISTS lessons (
  id TEXT PRIMARY KEY,
  module_id TEXT NOT NULL REFERENCES modules(id) ON DELETE CASCADE,
  title TEXT NOT NULL,
  type TEXT NOT NULL DEFAULT 'VIDEO',
  duration INTEGER NOT NULL DEFAULT 0,
  lesson_order INTEGER NOT NULL DEFAULT 0,
  is_published INTEGER NOT NULL DEFAULT 1,
  is_preview INTEGER NOT NULL DEFAULT 0,
  content TEXT NOT NULL DEFAULT '',
  video_url TEXT
);
""",
    """
CREATE TABLE IF NOT EXISTS lesson_progress (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  user_id TEXT NOT NULL,
  lesson_id TEXT NOT NULL REFERENCES lessons(id) ON DELETE CASCADE,
  completed INTEGER NOT NULL DEFAULT 0,
  score REAL,
  time_spent INTEGER NOT NULL DEFAULT 0,
  last_accessed_at TEXT NOT NULL,
  UNIQUE (user_id, lesson_id)
);
""",
    """
CREATE TABLE IF NOT EXISTS enrollments (
  id TEXT PRIMARY KEY,
  user_id TEXT NOT NULL,
  course_id TEXT NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
  status TEXT NOT NULL DEFAULT 'ACTIVE' CHECK (status IN ('ACTIVE', 'COMPLETED')),
  progress INTEGER NOT NULL DEFAULT 0,
  has_interview_access INTEGER NOT NULL DEFAULT 0,
  enrolled_at TEXT NOT NULL,
  completed_at TEXT,
  UNIQUE (user_id, course_id)
);
""",
    """
CREATE TABLE IF NOT EXISTS certificate_sequences (
  prefix TEXT PRIMARY KEY,
  current INTEGER NOT NULL DEFAULT 0
);
""",
    """
CREATE TABLE IF NOT EXISTS certificates (
  id TEXT PRIMARY KEY,
  unique_id TEXT NOT NULL UNIQUE,
  user_id TEXT NOT NULL,
  course_id TEXT NOT NULL REFERENCES courses(id),
  enrollment_id TEXT REFERENCES enrollments(id),
  student_name TEXT NOT NULL,
  course_name TEXT NOT NULL,
  course_category TEXT NOT NULL DEFAULT '',
  grade TEXT,
  score REAL,
  signatory_name TEXT NOT NULL,
  signatory_title TEXT NOT NULL,
  issued_at TEXT NOT NULL,
  expires_at TEXT,
  is_valid INTEGER NOT NULL DEFAULT 1,
  UNIQUE (user_id, course_id)
);
""",
]


def migrate(db_path: str | None = None) -> None:
    """Apply schema migrations to the SQLite database."""

    db_path = db_path or settings.DB_PATH
    directory = os.path.dirname(db_path) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


if __name__ == "__main__":
    migrate()
