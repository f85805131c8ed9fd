"""Placement of wrapped text lines that may run over several pages."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .layout import LayoutCursor


def place_lines(
    lines: Sequence[str],
    cursor: LayoutCursor,
    line_h: float,
    page_top: float,
    page_bottom: float,
) -> Tuple[List[Tuple[LayoutCursor, str]], LayoutCursor]:
    """Assign each line a cursor, starting a new page before any line
    whose box would cross ``page_bottom``.

    Returns the placements and the cursor just below the last line.
    """
    placements: List[Tuple[LayoutCursor, str]] = []
    for line in lines:
        if cursor.y + line_h > page_bottom:
            cursor = cursor.next_page(page_top)
        placements.append((cursor, line))
        cursor = cursor.advance(line_h)
    return placements, cursor
