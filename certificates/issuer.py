"""Certificate issuance for completed enrollments."""
from __future__ import annotations

import calendar
import sqlite3
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from config.settings import Settings, settings as default_settings
from course_progress.errors import CourseNotFoundError
from observability.logger import log_event
from storage.certificates import CertificateStore
from storage.courses import CourseStore
from storage.enrollments import EnrollmentStore
from storage.sqlite import Database

from .errors import CertificateExistsError, CertificateNotEligibleError, CertificateNotFoundError
from .models import Certificate, VerificationResult


def add_months(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` by whole months, clamping to the target month's last day."""

    index = moment.month - 1 + months
    year, month = moment.year + index // 12, index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def format_unique_id(prefix: str, sequence: int, *, digits: int, year: Optional[int]) -> str:
    padded = str(sequence).zfill(digits)
    return f"{prefix}-{year}-{padded}" if year is not None else f"{prefix}-{padded}"


def _parse(value: str) -> datetime:
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = datetime.fromisoformat(normalized)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class CertificateIssuer:  # Issues and verifies course certificates
    def __init__(self, db: Database, config: Optional[Settings] = None) -> None:
        self._db = db
        self._config = config or default_settings
        self._certificates = CertificateStore(db)
        self._courses = CourseStore(db)
        self._enrollments = EnrollmentStore(db)

    def issue(
        self,
        user_id: str,
        course_id: str,
        *,
        student_name: str,
        grade: Optional[str] = None,
        score: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> Certificate:
        """Issue the single certificate for a completed ``(user_id, course_id)``.

        Raises:
            CourseNotFoundError: If the course does not exist.
            CertificateNotEligibleError: If the enrollment is missing or not COMPLETED.
            CertificateExistsError: If a certificate was already issued.
        """

        cfg = self._config
        now = now or datetime.now(timezone.utc)
        with self._db.transaction():
            course = self._courses.find_course(course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            enrollment = self._enrollments.find(user_id, course_id)
            if enrollment is None or enrollment.status != "COMPLETED":
                raise CertificateNotEligibleError(user_id, course_id)
            existing = self._certificates.find_for(user_id, course_id)
            if existing is not None:
                raise CertificateExistsError(existing.unique_id)

            sequence = self._certificates.next_sequence(cfg.CERTIFICATE_PREFIX)
            expires_at = None
            if cfg.CERTIFICATE_VALIDITY_MONTHS:
                expires_at = add_months(now, cfg.CERTIFICATE_VALIDITY_MONTHS).isoformat(timespec="seconds")
            certificate = Certificate(
                id=uuid4().hex,
                unique_id=format_unique_id(
                    cfg.CERTIFICATE_PREFIX,
                    sequence,
                    digits=cfg.CERTIFICATE_SEQUENCE_DIGITS,
                    year=now.year if cfg.CERTIFICATE_YEAR_IN_ID else None,
                ),
                user_id=user_id,
                course_id=course_id,
                enrollment_id=enrollment.id,
                student_name=student_name,
                course_name=course.title,
                course_category=course.category,
                grade=grade,
                score=score,
                signatory_name=cfg.CERTIFICATE_SIGNATORY_NAME,
                signatory_title=cfg.CERTIFICATE_SIGNATORY_TITLE,
                issued_at=now.isoformat(timespec="seconds"),
                expires_at=expires_at,
            )
            try:
                self._certificates.insert(certificate)
            except sqlite3.IntegrityError as exc:
                raise CertificateExistsError(certificate.unique_id) from exc

        log_event(
            "certificate_issued",
            certificate.id,
            unique_id=certificate.unique_id,
            user_id=user_id,
            course_id=course_id,
        )
        return certificate

    def get(self, unique_id: str) -> Certificate:
        certificate = self._certificates.find_by_unique_id(unique_id)
        if certificate is None:
            raise CertificateNotFoundError(unique_id)
        return certificate

    def verify(self, unique_id: str, *, now: Optional[datetime] = None) -> VerificationResult:
        certificate = self.get(unique_id)
        now = now or datetime.now(timezone.utc)
        is_expired = bool(certificate.expires_at and _parse(certificate.expires_at) < now)
        return VerificationResult(
            verified=certificate.is_valid and not is_expired,
            is_expired=is_expired,
            certificate=certificate,
        )

    def invalidate(self, unique_id: str) -> Certificate:
        if not self._certificates.invalidate(unique_id):
            raise CertificateNotFoundError(unique_id)
        log_event("certificate_invalidated", unique_id, unique_id=unique_id)
        return self.get(unique_id)


__all__ = ["CertificateIssuer", "add_months", "format_unique_id"]
