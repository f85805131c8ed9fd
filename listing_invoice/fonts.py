"""Font discovery and text rendering helpers."""

from __future__ import annotations

import os
from typing import List, Optional, Tuple

from fpdf import FPDF  # type: ignore
from loguru import logger


def find_font_path(env_var: str, candidates: List[str]) -> Optional[str]:
    override = os.getenv(env_var)
    if override and os.path.exists(override):
        return override

    for path in candidates:
        if os.path.exists(path):
            return path
    return None


class FontManager:
    """Selects a Unicode TTF font when one is available.

    Without one, the PDF core Helvetica is used and text is reduced to
    Latin-1, which is all the core fonts can encode.
    """

    FAMILY = "InvoiceFont"
    CORE_FAMILY = "helvetica"
    SYSTEM_REGULAR_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans.ttf",
        "/Library/Fonts/DejaVuSans.ttf",
    ]
    SYSTEM_BOLD_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/Library/Fonts/DejaVuSans-Bold.ttf",
    ]

    def __init__(self, pdf: FPDF) -> None:
        self.pdf = pdf
        self.family = self.CORE_FAMILY
        self.unicode = False
        self.has_bold = True

        regular_path = find_font_path(
            "INVOICE_FONT_PATH",
            self.SYSTEM_REGULAR_CANDIDATES,
        )
        if not regular_path:
            logger.debug("No Unicode font found, using core {}", self.CORE_FAMILY)
            return

        bold_path = find_font_path(
            "INVOICE_FONT_BOLD_PATH",
            self.SYSTEM_BOLD_CANDIDATES,
        )
        self.pdf.add_font(self.FAMILY, "", regular_path)
        self.family = self.FAMILY
        self.unicode = True
        self.has_bold = False
        if bold_path:
            self.pdf.add_font(self.FAMILY, "B", bold_path)
            self.has_bold = True

    def encode(self, text: str) -> str:
        if self.unicode:
            return text
        return text.encode("latin-1", "replace").decode("latin-1")

    def set_font(self, size: int, bold: bool = False) -> None:
        style = "B" if bold and self.has_bold else ""
        self.pdf.set_font(self.family, style, size)

    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        self.set_font(size, bold)
        return self.pdf.get_string_width(self.encode(text))

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        self.pdf.set_text_color(*color)
        self.set_font(size, bold)
        text = self.encode(text)
        if bold and not self.has_bold:
            self.pdf.text(x, y, text)
            self.pdf.text(x + 0.15, y, text)
        else:
            self.pdf.text(x, y, text)
