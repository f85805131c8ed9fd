"""Page geometry, typography and colors (millimetres, top-left origin)."""

from __future__ import annotations

PAGE_FORMAT = "A4"
PAGE_W = 210.0
PAGE_H = 297.0
MARGIN = 20.0
CONTENT_W = PAGE_W - MARGIN * 2
CONTENT_RIGHT = PAGE_W - MARGIN
PAGE_BOTTOM = PAGE_H - MARGIN

LINE_H = 5.0
SECTION_SPACING = 4.0
HEADER_GAP = 2.0
TITLE_GAP = 4.0
LABEL_W = 45.0

LOGO_W = 50.0
LOGO_H = 12.0

DETAILS_MIN_H = 35.0
IMAGE_MAX_W = 70.0
IMAGE_MAX_H = 50.0

COLUMN_GAP = 12.0
COLUMN_W = (CONTENT_W - COLUMN_GAP) / 2

DESCRIPTION_LINE_H = 3.5
FOOTER_GAP = 4.0

FONT_SIZE_TITLE = 22
FONT_SIZE_SECTION = 11
FONT_SIZE_EMPHASIS = 11
FONT_SIZE_NORMAL = 9
FONT_SIZE_SMALL = 8

COLOR_TEXT = (0, 0, 0)
COLOR_SECTION = (40, 40, 40)
COLOR_META = (90, 90, 90)
COLOR_FOOTER = (100, 100, 100)
COLOR_RULE = (200, 200, 200)
RULE_WIDTH = 0.2

ATTRIBUTE_FALLBACK_LABEL = "Attribute"
ATTRIBUTE_SENTINEL_VALUES = frozenset({"pumper-engine"})
