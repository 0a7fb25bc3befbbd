from __future__ import annotations  # Certificate domain models

from typing import Optional

from pydantic import BaseModel, computed_field


class Certificate(BaseModel):  # Issued course completion certificate
    id: str
    unique_id: str
    user_id: str
    course_id: str
    enrollment_id: Optional[str] = None
    student_name: str
    course_name: str
    course_category: str = ""
    grade: Optional[str] = None
    score: Optional[float] = None
    signatory_name: str
    signatory_title: str
    issued_at: str
    expires_at: Optional[str] = None
    is_valid: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def verification_url(self) -> str:
        return f"/certificates/verify/{self.unique_id}"


class VerificationResult(BaseModel):  # Public verification outcome
    verified: bool
    is_expired: bool
    certificate: Certificate


__all__ = ["Certificate", "VerificationResult"]
