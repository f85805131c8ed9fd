"""Invoice PDF rendering logic."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from .canvas import Canvas, PdfCanvas
from .formatting import fmt_date, is_present, parse_timestamp, wrap_text
from .layout import LayoutCursor, fit_image, split_columns
from .models import ImagePayload, Listing
from .pagination import place_lines
from .pdf_constants import (
    COLOR_FOOTER,
    COLOR_META,
    COLOR_SECTION,
    COLOR_TEXT,
    COLUMN_GAP,
    COLUMN_W,
    CONTENT_RIGHT,
    CONTENT_W,
    DESCRIPTION_LINE_H,
    DETAILS_MIN_H,
    FONT_SIZE_EMPHASIS,
    FONT_SIZE_NORMAL,
    FONT_SIZE_SECTION,
    FONT_SIZE_SMALL,
    FONT_SIZE_TITLE,
    FOOTER_GAP,
    HEADER_GAP,
    IMAGE_MAX_H,
    IMAGE_MAX_W,
    LABEL_W,
    LINE_H,
    LOGO_H,
    LOGO_W,
    MARGIN,
    PAGE_BOTTOM,
    SECTION_SPACING,
    TITLE_GAP,
)
from .sections import Row, item_detail_rows, labeled_attributes, pricing_rows, specification_rows


class InvoiceRenderer:
    """Draws a listing invoice top to bottom.

    Each ``draw_*`` step takes the cursor where it starts and returns the
    cursor where the next step starts. Only the description may continue
    onto further pages.
    """

    def __init__(
        self,
        listing: Listing,
        attribute_labels: Optional[Dict[str, str]] = None,
        logo: Optional[ImagePayload] = None,
        image: Optional[ImagePayload] = None,
        canvas: Optional[Canvas] = None,
    ) -> None:
        self.listing = listing
        self.attribute_labels = attribute_labels or {}
        self.logo = logo
        self.image = image
        if canvas is None:
            canvas = PdfCanvas(creation_date=parse_timestamp(listing.updated_at))
        self.canvas = canvas
        self.page = 1

    def _ensure_page(self, page: int) -> None:
        while self.page < page:
            self.canvas.add_page()
            self.page += 1

    def _separator(self, cursor: LayoutCursor) -> LayoutCursor:
        self.canvas.rule(cursor.y, MARGIN, CONTENT_RIGHT)
        return cursor.advance(SECTION_SPACING)

    def _close_section(self, cursor: LayoutCursor) -> LayoutCursor:
        return self._separator(cursor.advance(SECTION_SPACING))

    def _section_header(self, cursor: LayoutCursor, title: str) -> LayoutCursor:
        self.canvas.text(MARGIN, cursor.y, title, FONT_SIZE_SECTION, COLOR_SECTION, bold=True)
        return cursor.advance(LINE_H + HEADER_GAP)

    def _key_value(self, x: float, y: float, row: Row, size: int = FONT_SIZE_NORMAL, bold: bool = False) -> None:
        label, value = row
        self.canvas.text(x, y, f"{label}:", size, COLOR_TEXT, bold=bold)
        self.canvas.text(x + LABEL_W, y, value, size, COLOR_TEXT, bold=bold)

    def _key_value_rows(self, cursor: LayoutCursor, rows: Sequence[Row]) -> LayoutCursor:
        for row in rows:
            self._key_value(MARGIN, cursor.y, row)
            cursor = cursor.advance(LINE_H)
        return cursor

    def draw_header(self, cursor: LayoutCursor) -> LayoutCursor:
        if self.logo is not None:
            self.canvas.image(self.logo, MARGIN, cursor.y, LOGO_W, LOGO_H)
            cursor = cursor.advance(LOGO_H + SECTION_SPACING)
        cursor = self._separator(cursor)
        return cursor.advance(TITLE_GAP)

    def draw_title(self, cursor: LayoutCursor) -> LayoutCursor:
        self.canvas.text(MARGIN, cursor.y, "INVOICE", FONT_SIZE_TITLE, COLOR_TEXT, bold=True)
        meta = f"Listing #{self.listing.display_id} · {fmt_date(self.listing.updated_at)}"
        meta_x = CONTENT_RIGHT - self.canvas.text_width(meta, FONT_SIZE_NORMAL)
        self.canvas.text(meta_x, cursor.y, meta, FONT_SIZE_NORMAL, COLOR_META)
        cursor = cursor.advance(LINE_H + SECTION_SPACING + HEADER_GAP)
        return self._separator(cursor)

    def draw_item_details(self, cursor: LayoutCursor) -> LayoutCursor:
        rows = item_detail_rows(self.listing)
        # Short detail lists still leave room for the primary image.
        band_h = max(len(rows) * LINE_H, DETAILS_MIN_H)

        band_top = self._section_header(cursor, "ITEM DETAILS")
        self._key_value_rows(band_top, rows)

        if self.image is not None:
            fitted = fit_image(self.image.width, self.image.height, IMAGE_MAX_W, min(IMAGE_MAX_H, band_h))
            if fitted is not None:
                width, height = fitted
                self.canvas.image(self.image, CONTENT_RIGHT - width, band_top.y, width, height)

        return self._separator(band_top.advance(band_h + SECTION_SPACING))

    def draw_pricing(self, cursor: LayoutCursor) -> LayoutCursor:
        selling, *others = pricing_rows(self.listing)
        cursor = self._section_header(cursor, "PRICING")
        self._key_value(MARGIN, cursor.y, selling, size=FONT_SIZE_EMPHASIS, bold=True)
        cursor = cursor.advance(LINE_H + HEADER_GAP)
        cursor = self._key_value_rows(cursor, others)
        return self._close_section(cursor)

    def draw_specifications(self, cursor: LayoutCursor) -> LayoutCursor:
        rows = specification_rows(self.listing)
        if not rows:
            return cursor
        cursor = self._section_header(cursor, "SPECIFICATIONS")
        cursor = self._key_value_rows(cursor, rows)
        return self._close_section(cursor)

    def draw_key_attributes(self, cursor: LayoutCursor) -> LayoutCursor:
        attributes = labeled_attributes(self.listing, self.attribute_labels)
        if not attributes:
            return cursor

        cursor = self._section_header(cursor, "KEY ATTRIBUTES")
        left, right = split_columns(attributes)
        right_x = MARGIN + COLUMN_W + COLUMN_GAP
        row_count = max(len(left), len(right))
        for index in range(row_count):
            row_y = cursor.y + index * LINE_H
            if index < len(left):
                self._key_value(MARGIN, row_y, left[index])
            if index < len(right):
                self._key_value(right_x, row_y, right[index])

        return self._close_section(cursor.advance(row_count * LINE_H))

    def draw_description(self, cursor: LayoutCursor) -> LayoutCursor:
        description = self.listing.listing_description
        if not is_present(description):
            return cursor

        cursor = self._section_header(cursor, "DESCRIPTION")
        lines = wrap_text(self.canvas, str(description), CONTENT_W, FONT_SIZE_SMALL)
        placements, cursor = place_lines(lines, cursor, DESCRIPTION_LINE_H, MARGIN, PAGE_BOTTOM)
        for line_cursor, line in placements:
            self._ensure_page(line_cursor.page)
            self.canvas.text(MARGIN, line_cursor.y, line, FONT_SIZE_SMALL, COLOR_TEXT)
        return self._close_section(cursor)

    def draw_footer(self, cursor: LayoutCursor) -> LayoutCursor:
        cursor = self._separator(cursor.advance(FOOTER_GAP))
        self.canvas.text(MARGIN, cursor.y, f"Listing ID: {self.listing.id}", FONT_SIZE_SMALL, COLOR_FOOTER)
        return cursor

    def render(self) -> bytes:
        cursor = LayoutCursor(y=MARGIN)
        for step in (
            self.draw_header,
            self.draw_title,
            self.draw_item_details,
            self.draw_pricing,
            self.draw_specifications,
            self.draw_key_attributes,
            self.draw_description,
            self.draw_footer,
        ):
            cursor = step(cursor)
        return self.canvas.output()


def render_invoice(
    listing: Listing,
    attribute_labels: Optional[Dict[str, str]] = None,
    logo: Optional[ImagePayload] = None,
    image: Optional[ImagePayload] = None,
) -> bytes:
    return InvoiceRenderer(listing, attribute_labels, logo=logo, image=image).render()
