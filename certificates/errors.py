from __future__ import annotations  # Certificate issuance errors

from course_progress.errors import NotFoundError


class CertificateError(RuntimeError):  # Base certificate error
    pass


class CertificateNotFoundError(NotFoundError):
    def __init__(self, unique_id: str) -> None:
        super().__init__("Certificate", unique_id)


class CertificateNotEligibleError(CertificateError):  # Enrollment missing or not completed
    def __init__(self, user_id: str, course_id: str) -> None:
        super().__init__(f"Course {course_id} not completed by {user_id}; cannot issue certificate")
        self.user_id = user_id
        self.course_id = course_id


class CertificateExistsError(CertificateError):
    def __init__(self, unique_id: str) -> None:
        super().__init__(f"Certificate already issued: {unique_id}")
        self.unique_id = unique_id


__all__ = [
    "CertificateError",
    "CertificateExistsError",
    "CertificateNotEligibleError",
    "CertificateNotFoundError",
]
