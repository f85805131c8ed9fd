"""Cursor and geometry helpers for the invoice layout."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LayoutCursor:
    """Vertical position on the current page, top-left origin."""

    y: float
    page: int = 1

    def advance(self, dy: float) -> "LayoutCursor":
        return replace(self, y=self.y + dy)

    def next_page(self, top: float) -> "LayoutCursor":
        return LayoutCursor(y=top, page=self.page + 1)


def fit_image(
    width: float,
    height: float,
    max_width: float,
    max_height: float,
) -> Optional[Tuple[float, float]]:
    """Scale to ``max_height``, or to ``max_width`` when that is binding.

    Returns None for images without a usable size.
    """
    if width <= 0 or height <= 0:
        return None
    aspect_ratio = width / height
    display_h = max_height
    display_w = display_h * aspect_ratio
    if display_w > max_width:
        display_w = max_width
        display_h = max_width / aspect_ratio
    return display_w, display_h


def split_columns(items: Sequence[T]) -> Tuple[List[T], List[T]]:
    """Left column takes the first ceil(n/2) items, order preserved."""
    mid = (len(items) + 1) // 2
    return list(items[:mid]), list(items[mid:])
