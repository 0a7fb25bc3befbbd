"""Structured logging utilities for the learning and interview engines."""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from typing import Any, Callable

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "1") in ("1", "true", "True")
LOG_FILE = os.getenv("LOG_FILE", "logs/techwell.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "5242880"))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
HUMAN_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Event fields echoed on the human line, in this order
HUMAN_FIELDS = (
    "user_id",
    "course_id",
    "lesson_id",
    "domain",
    "difficulty",
    "score",
    "sentiment",
    "progress",
    "unique_id",
    "reason",
)

_logger = logging.getLogger("techwell")
_logger.setLevel(LOG_LEVEL)
_logger.propagate = False


def _is_json(record: logging.LogRecord) -> bool:
    return getattr(record, "is_json", False) is True


def _is_human(record: logging.LogRecord) -> bool:
    return not _is_json(record)


def human_log_path(path: str) -> str:
    """Sibling file for human lines: ``logs/x.log`` -> ``logs/x-human.log``."""

    root, ext = os.path.splitext(path)
    return f"{root}-human{ext or '.log'}"


def _human_formatter() -> logging.Formatter:
    return logging.Formatter(HUMAN_FORMAT, datefmt=HUMAN_DATEFMT)


def _attach(handler: logging.Handler, formatter: logging.Formatter, accept: Callable[[logging.LogRecord], bool]) -> None:
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(formatter)
    handler.addFilter(accept)
    _logger.addHandler(handler)


def _rotating(path: str) -> logging.handlers.RotatingFileHandler:
    return logging.handlers.RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)


def _ensure_handlers() -> None:
    if _logger.handlers:
        return

    _attach(logging.StreamHandler(stream=sys.stdout), _human_formatter(), _is_human)
    if not ENABLE_FILE_LOGS:
        return

    log_dir = os.path.dirname(LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    _attach(_rotating(LOG_FILE), logging.Formatter("%(message)s"), _is_json)
    _attach(_rotating(human_log_path(LOG_FILE)), _human_formatter(), _is_human)


def format_human(evt: dict[str, Any]) -> str:
    parts = [f"ref={evt.get('ref')}", f"kind={evt.get('kind')}"]
    parts.extend(f"{key}={evt[key]}" for key in HUMAN_FIELDS if key in evt)
    return " ".join(parts)


def _emit(msg: str, *, is_json: bool) -> None:
    record = _logger.makeRecord(_logger.name, logging.INFO, "", 0, msg, (), None)
    record.is_json = is_json  # type: ignore[attr-defined]
    _logger.handle(record)


def log_event(kind: str, ref: str, **fields: Any) -> None:
    """Emit a human line to console/file and a JSON line to the event log.

    ``ref`` is the primary identifier the event is about (an interview id,
    a lesson id, a certificate id).
    """

    _ensure_handlers()

    payload: dict[str, Any] = {"ts": time.time(), "trace": uuid.uuid4().hex, "kind": kind, "ref": ref}
    payload.update(fields)

    _emit(format_human(payload), is_json=False)
    if ENABLE_FILE_LOGS:
        _emit(json.dumps(payload, ensure_ascii=False, default=str), is_json=True)


__all__ = ["format_human", "human_log_path", "log_event"]
