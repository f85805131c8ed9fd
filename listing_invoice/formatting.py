"""Formatting and text layout helpers."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Optional, Protocol

from dateutil import parser as dateutil_parser

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)
INVALID_DATE = "Invalid Date"
# Fields missing from a partial timestamp; dateutil would otherwise use today.
PARSE_DEFAULT = datetime(1970, 1, 1)


class TextWidthProvider(Protocol):
    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        ...


def is_present(value: Any) -> bool:
    """None and empty strings are absent; zero is a value."""
    return value is not None and value != ""


def _to_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def fmt_currency(amount: Any, decimals: int = 2) -> str:
    """Format ``amount`` as US dollars, e.g. ``$1,234.50``.

    Rounds half away from zero at the requested precision.
    """
    value = _to_decimal(amount)
    if value is None:
        return f"${amount}"
    if value.is_nan():
        return "$NaN"
    if value.is_infinite():
        return "-$∞" if value < 0 else "$∞"

    rounded = value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.{decimals}f}"


def fmt_number(value: Any, max_decimals: int = 3) -> str:
    """Group thousands and keep at most ``max_decimals`` fraction digits."""
    number = _to_decimal(value)
    if number is None or not number.is_finite():
        return str(value)
    rounded = number.quantize(Decimal(1).scaleb(-max_decimals), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def fmt_plain_number(value: Any) -> str:
    try:
        number = float(value)
        if number.is_integer():
            return str(int(number))
        return str(number)
    except (TypeError, ValueError, OverflowError):
        return str(value)


def parse_timestamp(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return dateutil_parser.parse(raw.strip(), default=PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None


def fmt_date(raw: Any) -> str:
    """Parse a timestamp and return it formatted as 'Mar 4, 2025'."""
    dt = parse_timestamp(raw)
    if dt is None:
        return INVALID_DATE
    return f"{dt:%b} {dt.day}, {dt.year}"


def _title_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def fmt_delivery_method(code: Optional[str]) -> str:
    """Turn a code such as ``GROUND_LTL`` into ``Ground (LTL)``.

    Parts of three characters or fewer are treated as acronyms.
    """
    if not code:
        return ""
    parts = code.split("_")
    if len(parts) == 1:
        return code if len(code) <= 3 else _title_word(code)

    first = _title_word(parts[0])
    second = parts[1]
    if len(second) <= 3:
        return f"{first} ({second})"
    return f"{first} {second}"


def extract_uuid_from_garage_url(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    match = UUID_PATTERN.search(text)
    return match.group(0) if match else None


def wrap_text(
    fonts_obj: TextWidthProvider,
    text: str,
    max_width: float,
    font_size: int,
    bold: bool = False,
) -> List[str]:
    def line_width(value: str) -> float:
        return fonts_obj.text_width(value, font_size, bold=bold)

    def wrap_paragraph(paragraph: str) -> List[str]:
        words = paragraph.split()
        if not words:
            return [""]

        lines: List[str] = []
        current = ""
        for word in words:
            candidate = word if not current else f"{current} {word}"
            if line_width(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = ""
                if line_width(word) <= max_width:
                    current = word
                    continue

            chunk = ""
            for char in word:
                candidate_chunk = chunk + char
                if chunk and line_width(candidate_chunk) > max_width:
                    lines.append(chunk)
                    chunk = char
                else:
                    chunk = candidate_chunk
            current = chunk

        if current:
            lines.append(current)
        return lines

    result: List[str] = []
    for paragraph in text.replace("\r\n", "\n").split("\n"):
        result.extend(wrap_paragraph(paragraph))
    return result if result else [text]
