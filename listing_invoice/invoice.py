"""End-to-end invoice generation: listing URL in, named PDF out."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from .api import category_labels, fetch_listing
from .config import LOGO_URL, OUTPUT_DIR
from .errors import InvalidListingUrlError, InvoiceError
from .formatting import extract_uuid_from_garage_url
from .images import JPEG, PNG, load_image
from .models import ImagePayload, Listing
from .rendering import render_invoice
from .result import Result, failure, success, unwrap_or


@dataclass(frozen=True)
class InvoiceDocument:
    filename: str
    content: bytes = field(repr=False)
    listing: Listing


def invoice_filename(listing: Listing) -> str:
    return f"invoice-{listing.display_id}.pdf"


def resolve_listing(text: str) -> Listing:
    """Extract the listing UUID from ``text`` and fetch the listing.

    Raises InvalidListingUrlError or a ListingFetchError.
    """
    listing_id = extract_uuid_from_garage_url(text)
    if listing_id is None:
        raise InvalidListingUrlError()
    return fetch_listing(listing_id)


def _best_effort_image(url: Optional[str], image_format: str) -> Optional[ImagePayload]:
    if not url:
        return None
    return unwrap_or(load_image(url, image_format), None)


def build_invoice(listing: Listing, logo_url: Optional[str] = LOGO_URL) -> InvoiceDocument:
    """Render a listing. Missing labels or images never stop the render."""
    logo = _best_effort_image(logo_url, PNG)
    labels = category_labels(listing.resolved_category_id)
    image = _best_effort_image(listing.primary_image_url, JPEG)

    content = render_invoice(listing, labels, logo=logo, image=image)
    document = InvoiceDocument(filename=invoice_filename(listing), content=content, listing=listing)
    logger.info("Rendered {} ({} bytes)", document.filename, len(content))
    return document


def generate_invoice(text: str) -> Result:
    """Build the invoice for the listing referenced by ``text``.

    Hard failures come back as a failed Result with a short message.
    """
    try:
        listing = resolve_listing(text)
    except InvoiceError as exc:
        logger.error("Invoice generation failed: {}", exc)
        return failure(str(exc))
    return success(build_invoice(listing))


def save_invoice(document: InvoiceDocument, directory: str = OUTPUT_DIR) -> str:
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, document.filename)
    with open(path, "wb") as handle:
        handle.write(document.content)
    return path
