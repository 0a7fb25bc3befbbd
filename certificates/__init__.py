"""Course completion certificates.

Issuance lives in :mod:`certificates.issuer`, rendering in :mod:`certificates.pdf`.
"""
from .errors import (
    CertificateError,
    CertificateExistsError,
    CertificateNotEligibleError,
    CertificateNotFoundError,
)
from .models import Certificate, VerificationResult

__all__ = [
    "Certificate",
    "CertificateError",
    "CertificateExistsError",
    "CertificateNotEligibleError",
    "CertificateNotFoundError",
    "VerificationResult",
]
