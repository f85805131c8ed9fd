"""Marketplace API reads: listing records and category attribute labels."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from loguru import logger

from .config import API_BASE_URL, HTTP_TIMEOUT, USER_AGENT
from .errors import ListingHttpError, ListingNetworkError, ListingNotFoundError, ListingParseError
from .models import Listing
from .result import Result, failure, from_exception, success, unwrap_or

HEADERS = {"User-Agent": USER_AGENT, "Accept": "application/json"}


def request_api(url: str) -> requests.Response:
    return requests.get(url, headers=HEADERS, timeout=HTTP_TIMEOUT)


def is_success(status: int) -> bool:
    # Response.ok also accepts 3xx.
    return 200 <= status < 300


def fetch_listing(listing_id: str, base_url: str = API_BASE_URL) -> Listing:
    """Fetch a single listing.

    Raises:
        ListingNotFoundError: the endpoint answered 404
        ListingHttpError: any other non-success status
        ListingNetworkError: the request never got a response
        ListingParseError: the body is not a JSON object with an id
    """
    url = f"{base_url}/listings/{listing_id}"
    logger.debug("Fetching listing {}", url)
    try:
        response = request_api(url)
    except requests.RequestException as exc:
        raise ListingNetworkError(f"Failed to fetch listing: {exc}") from exc

    if response.status_code == 404:
        raise ListingNotFoundError(response.status_code)
    if not is_success(response.status_code):
        raise ListingHttpError(response.status_code)

    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise ListingParseError(f"Listing response is not valid JSON: {exc}") from exc
    return Listing.from_dict(payload)


def fetch_category_attributes(category_id: str, base_url: str = API_BASE_URL) -> Result:
    """Fetch the attribute-id to label mapping for a category.

    Never raises; a failed Result carries the reason.
    """
    url = f"{base_url}/categories/{category_id}/attributes"
    try:
        response = request_api(url)
    except requests.RequestException as exc:
        logger.warning("Category attribute fetch failed for {}: {}", category_id, exc)
        return from_exception(exc)

    if not is_success(response.status_code):
        logger.warning("Category attribute fetch for {} returned {}", category_id, response.status_code)
        return failure(f"HTTP {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        logger.warning("Category attribute response for {} is not JSON", category_id)
        return from_exception(exc)

    if not isinstance(payload, dict):
        logger.warning("Category attribute response for {} is not an object", category_id)
        return failure("Unexpected category attribute payload")

    attributes = payload.get("attributes")
    if attributes is None:
        attributes = []
    if not isinstance(attributes, list):
        logger.warning("Category attributes for {} are not a list", category_id)
        return failure("Unexpected category attribute payload")

    labels: Dict[str, str] = {}
    for attribute in attributes:
        if not isinstance(attribute, dict):
            continue
        attribute_id = attribute.get("id")
        label = attribute.get("label")
        if isinstance(attribute_id, str) and isinstance(label, str):
            labels[attribute_id] = label
    return success(labels)


def category_labels(category_id: Optional[str]) -> Dict[str, str]:
    if not category_id:
        return {}
    return unwrap_or(fetch_category_attributes(category_id), {})
