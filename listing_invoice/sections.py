"""Rows shown in each invoice section, derived from a listing.

Every builder drops absent values (None or empty string) but keeps
zero, so a zero price or dimension still renders.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

from .formatting import (
    fmt_currency,
    fmt_delivery_method,
    fmt_number,
    fmt_plain_number,
    is_present,
)
from .models import Listing
from .pdf_constants import ATTRIBUTE_FALLBACK_LABEL, ATTRIBUTE_SENTINEL_VALUES

Row = Tuple[str, str]

# Attribute values that reference other records start like a UUID.
ATTRIBUTE_ID_PREFIX = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-", re.IGNORECASE)


def _text(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return fmt_plain_number(value)
    return str(value)


def item_detail_rows(listing: Listing) -> List[Row]:
    candidates = [
        ("Listing", listing.listing_title),
        ("Category", listing.category.name if listing.category is not None else None),
        ("Brand", listing.item_brand),
        ("Year", listing.item_age),
        ("Delivery", fmt_delivery_method(listing.delivery_method)),
        ("Location", listing.address.state if listing.address is not None else None),
    ]
    return [(label, _text(value)) for label, value in candidates if is_present(value)]


def pricing_rows(listing: Listing) -> List[Row]:
    """Selling price first, always; the remaining rows only when present."""
    selling_price = listing.selling_price if is_present(listing.selling_price) else 0
    rows: List[Row] = [("Selling Price", fmt_currency(selling_price))]
    if is_present(listing.appraised_price):
        rows.append(("Appraised Price", fmt_currency(listing.appraised_price)))
    if is_present(listing.estimated_price_min) and is_present(listing.estimated_price_max):
        low = fmt_currency(listing.estimated_price_min)
        high = fmt_currency(listing.estimated_price_max)
        rows.append(("Est. Range", f"{low} - {high}"))
    return rows


def specification_rows(listing: Listing) -> List[Row]:
    rows: List[Row] = []
    dimensions = [
        f'{fmt_plain_number(value)}" {unit}'
        for value, unit in (
            (listing.item_length, "L"),
            (listing.item_width, "W"),
            (listing.item_height, "H"),
        )
        if is_present(value)
    ]
    if dimensions:
        rows.append(("Dimensions", " x ".join(dimensions)))
    if is_present(listing.item_weight):
        rows.append(("Weight", f"{fmt_number(listing.item_weight)} lbs"))
    if is_present(listing.vin):
        rows.append(("VIN", str(listing.vin)))
    return rows


def is_displayable_attribute(value: Any) -> bool:
    if not is_present(value):
        return False
    text = str(value)
    return not ATTRIBUTE_ID_PREFIX.match(text) and text not in ATTRIBUTE_SENTINEL_VALUES


def attribute_display_value(value: Any) -> str:
    text = str(value)
    if text == "true":
        return "Yes"
    if text == "false":
        return "No"
    return text


def labeled_attributes(listing: Listing, labels: Dict[str, str]) -> List[Row]:
    rows: List[Row] = []
    for attribute in listing.attributes:
        if not is_displayable_attribute(attribute.value):
            continue
        label = labels.get(attribute.category_attribute_id)
        if label is None:
            label = ATTRIBUTE_FALLBACK_LABEL
        rows.append((label, attribute_display_value(attribute.value)))
    return rows
