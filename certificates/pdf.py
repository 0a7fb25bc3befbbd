from __future__ import annotations  # Styled PDF rendering for course certificates

import os
from datetime import datetime
from typing import Any, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import Certificate

DEJAVU_SANS = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"  # System font
DEJAVU_SANS_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"  # System font

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color


def _format_date(value: str | None) -> str:  # Format ISO timestamp for display
    if not value:
        return "-"
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return value
    return parsed.strftime("%d %B %Y").lstrip("0")


class CertificatePDF(FPDF):  # Landscape certificate page with a framed border
    def __init__(self, *args: Any, accent: Tuple[int, int, int] = ACCENT, **kwargs: Any) -> None:
        super().__init__(*args, orientation="L", format="A4", **kwargs)
        self.accent = accent
        self._font_regular = "Helvetica"
        self._font_bold = "Helvetica"
        self._supports_unicode = False

    def use_unicode_fonts(self) -> None:  # Switch to DejaVu when installed
        if not (os.path.exists(DEJAVU_SANS) and os.path.exists(DEJAVU_SANS_BOLD)):
            return
        self.add_font("DejaVu", "", DEJAVU_SANS)
        self.add_font("DejaVu", "B", DEJAVU_SANS_BOLD)
        self._font_regular = "DejaVu"
        self._font_bold = "DejaVu"
        self._supports_unicode = True

    def prepare_text(self, text: Any) -> str:  # Sanitize text for non-unicode fonts
        value = "" if text is None else str(text)
        if self._supports_unicode:
            return value
        return value.encode("latin-1", "ignore").decode("latin-1")

    def frame(self) -> None:  # Draw the double border
        self.set_draw_color(*self.accent)
        self.set_line_width(1.2)
        self.rect(8, 8, self.w - 16, self.h - 16)
        self.set_draw_color(*RULE)
        self.set_line_width(0.4)
        self.rect(12, 12, self.w - 24, self.h - 24)

    def centered(self, text: str, *, size: int, bold: bool = False, color=TEXT, height: float = 10) -> None:
        self.set_text_color(*color)
        self.set_font(self._font_bold if bold else self._font_regular, "B" if bold else "", size)
        self.set_x(self.l_margin)
        self.cell(0, height, self.prepare_text(text), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def render_certificate_pdf(certificate: Certificate) -> bytes:
    """Render a one-page landscape certificate and return the PDF bytes."""

    pdf = CertificatePDF()
    pdf.use_unicode_fonts()
    pdf.set_margins(20, 20, 20)
    pdf.set_auto_page_break(auto=False)
    pdf.add_page()
    pdf.frame()

    pdf.set_y(32)
    pdf.centered("CERTIFICATE OF COMPLETION", size=28, bold=True, color=pdf.accent, height=14)
    pdf.ln(6)
    pdf.centered("This is to certify that", size=13, color=MUTED)
    pdf.ln(2)
    pdf.centered(certificate.student_name, size=26, bold=True, height=14)
    pdf.ln(2)
    pdf.centered("has successfully completed the course", size=13, color=MUTED)
    pdf.ln(2)
    pdf.centered(certificate.course_name, size=20, bold=True, height=12)
    if certificate.course_category:
        pdf.centered(certificate.course_category, size=11, color=MUTED, height=7)
    if certificate.grade or certificate.score is not None:
        parts = []
        if certificate.grade:
            parts.append(f"Grade {certificate.grade}")
        if certificate.score is not None:
            parts.append(f"Score {certificate.score:g}")
        pdf.ln(2)
        pdf.centered(" | ".join(parts), size=12, height=8)

    pdf.set_y(pdf.h - 62)
    pdf.set_draw_color(*TEXT)
    pdf.set_line_width(0.3)
    left_x = pdf.l_margin + 20
    pdf.line(left_x, pdf.get_y(), left_x + 70, pdf.get_y())
    pdf.set_xy(left_x, pdf.get_y() + 2)
    pdf.set_font(pdf._font_bold, "B", 11)
    pdf.set_text_color(*TEXT)
    pdf.cell(70, 6, pdf.prepare_text(certificate.signatory_name), align="C", new_x=XPos.LEFT, new_y=YPos.NEXT)
    pdf.set_font(pdf._font_regular, "", 10)
    pdf.set_text_color(*MUTED)
    pdf.cell(70, 6, pdf.prepare_text(certificate.signatory_title), align="C")

    right_x = pdf.w - pdf.r_margin - 110
    pdf.set_xy(right_x, pdf.h - 60)
    pdf.set_font(pdf._font_regular, "", 10)
    rows = [
        ("Certificate ID", certificate.unique_id),
        ("Issued", _format_date(certificate.issued_at)),
        ("Valid until", _format_date(certificate.expires_at) if certificate.expires_at else "No expiry"),
        ("Verify at", certificate.verification_url),
    ]
    for label, value in rows:
        pdf.set_x(right_x)
        pdf.set_text_color(*MUTED)
        pdf.cell(32, 6, label, new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.set_text_color(*TEXT)
        pdf.cell(78, 6, pdf.prepare_text(value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    return bytes(pdf.output())


__all__ = ["CertificatePDF", "render_certificate_pdf"]
