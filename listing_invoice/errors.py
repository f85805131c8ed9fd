"""Exception hierarchy for listing invoice generation.

Only hard failures are raised. Best-effort lookups (attribute labels,
images) report through :mod:`listing_invoice.result` instead.
"""

from __future__ import annotations

from typing import Optional


class InvoiceError(Exception):
    """Base exception for all invoice generation errors."""


class ValidationError(InvoiceError):
    """Invalid input, e.g. text without a listing identifier."""


class InvalidListingUrlError(ValidationError):
    def __init__(self, message: str = "Could not find a valid listing UUID in the URL.") -> None:
        super().__init__(message)


class NetworkError(InvoiceError):
    """Transport-level failure talking to a remote service."""


class ListingFetchError(InvoiceError):
    """The listing record could not be retrieved."""


class ListingHttpError(ListingFetchError):
    """The listing endpoint answered with a non-success status."""

    def __init__(self, status: int, message: Optional[str] = None) -> None:
        self.status = status
        super().__init__(message or f"Failed to fetch listing: {status}")


class ListingNotFoundError(ListingHttpError):
    def __init__(self, status: int = 404, message: Optional[str] = None) -> None:
        super().__init__(status, message)


class ListingNetworkError(ListingFetchError, NetworkError):
    pass


class ListingParseError(ListingFetchError):
    """The listing body was not a JSON object with an identifier."""


class PDFError(InvoiceError):
    """PDF serialization failed."""
