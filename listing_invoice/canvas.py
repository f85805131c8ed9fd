"""fpdf-backed drawing surface used by the invoice renderer."""

from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from typing import Optional, Protocol, Tuple

from fpdf import FPDF  # type: ignore

from .errors import PDFError
from .fonts import FontManager
from .models import ImagePayload
from .pdf_constants import COLOR_RULE, PAGE_FORMAT, RULE_WIDTH

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Canvas(Protocol):
    """The drawing operations the renderer needs; coordinates in mm."""

    def text(
        self,
        x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        ...

    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        ...

    def rule(self, y: float, from_x: float, to_x: float) -> None:
        ...

    def image(self, payload: ImagePayload, x: float, y: float, width: float, height: float) -> None:
        ...

    def add_page(self) -> None:
        ...

    def output(self) -> bytes:
        ...


class PdfCanvas:
    def __init__(self, creation_date: Optional[datetime] = None) -> None:
        self.pdf = FPDF(unit="mm", format=PAGE_FORMAT)
        self.pdf.set_auto_page_break(False)
        # Pinned so identical input renders identical bytes.
        creation_date = creation_date or EPOCH
        if creation_date.tzinfo is None:
            creation_date = creation_date.replace(tzinfo=timezone.utc)
        self.pdf.creation_date = creation_date
        self.pdf.add_page()
        self.fonts = FontManager(self.pdf)

    @property
    def page_count(self) -> int:
        return self.pdf.page

    def text(
        self,
        x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        self.fonts.draw_text(x, y, text, size, color, bold=bold)

    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        return self.fonts.text_width(text, size, bold=bold)

    def rule(self, y: float, from_x: float, to_x: float) -> None:
        self.pdf.set_draw_color(*COLOR_RULE)
        self.pdf.set_line_width(RULE_WIDTH)
        self.pdf.line(from_x, y, to_x, y)

    def image(self, payload: ImagePayload, x: float, y: float, width: float, height: float) -> None:
        self.pdf.image(BytesIO(payload.data), x=x, y=y, w=width, h=height)

    def add_page(self) -> None:
        self.pdf.add_page()

    def output(self) -> bytes:
        pdf_blob = self.pdf.output()
        if isinstance(pdf_blob, (bytes, bytearray)):
            return bytes(pdf_blob)
        raise PDFError(f"Unexpected PDF output type: {type(pdf_blob).__name__}")
