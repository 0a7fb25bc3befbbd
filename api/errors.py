"""Translation of engine errors into HTTP responses."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from certificates.errors import CertificateExistsError, CertificateNotEligibleError
from course_progress.errors import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    InvalidProgressError,
    NotEnrolledError,
    NotFoundError,
)


@contextmanager
def http_errors() -> Iterator[None]:
    """Re-raise known engine errors as ``HTTPException``."""

    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NotEnrolledError as exc:
        raise HTTPException(status_code=403, detail="Access denied. Not enrolled.") from exc
    except (AlreadyEnrolledError, CertificateExistsError) as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (CourseUnavailableError, CertificateNotEligibleError, InvalidProgressError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


__all__ = ["http_errors"]
