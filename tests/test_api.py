import unittest
from importlib import util as importlib_util
from unittest.mock import MagicMock, patch

REQUESTS_AVAILABLE = importlib_util.find_spec("requests") is not None
if REQUESTS_AVAILABLE:
    import requests

    from listing_invoice.api import category_labels, fetch_category_attributes, fetch_listing
    from listing_invoice.errors import (
        ListingHttpError,
        ListingNetworkError,
        ListingNotFoundError,
        ListingParseError,
        NetworkError,
    )

LISTING_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"


def fake_response(status: int = 200, payload: object = None, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


@unittest.skipUnless(REQUESTS_AVAILABLE, "requests is not installed")
class FetchListingTests(unittest.TestCase):
    def test_parses_listing(self) -> None:
        payload = {"id": LISTING_ID, "listingTitle": "Pumper", "sellingPrice": 1000, "imageUrls": []}
        with patch("listing_invoice.api.request_api", return_value=fake_response(payload=payload)) as request:
            listing = fetch_listing(LISTING_ID, base_url="https://api.test")

        request.assert_called_once_with(f"https://api.test/listings/{LISTING_ID}")
        self.assertEqual(listing.id, LISTING_ID)
        self.assertEqual(listing.listing_title, "Pumper")

    def test_not_found_carries_status(self) -> None:
        with patch("listing_invoice.api.request_api", return_value=fake_response(404)):
            with self.assertRaises(ListingNotFoundError) as ctx:
                fetch_listing(LISTING_ID)

        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(str(ctx.exception), "Failed to fetch listing: 404")

    def test_server_error_is_http_error(self) -> None:
        with patch("listing_invoice.api.request_api", return_value=fake_response(503)):
            with self.assertRaises(ListingHttpError) as ctx:
                fetch_listing(LISTING_ID)

        self.assertNotIsInstance(ctx.exception, ListingNotFoundError)
        self.assertEqual(ctx.exception.status, 503)

    def test_redirect_status_is_http_error(self) -> None:
        response = fake_response(304, payload={"id": LISTING_ID})
        with patch("listing_invoice.api.request_api", return_value=response):
            with self.assertRaises(ListingHttpError) as ctx:
                fetch_listing(LISTING_ID)

        self.assertEqual(ctx.exception.status, 304)
        response.json.assert_not_called()

    def test_transport_failure_is_network_error(self) -> None:
        with patch("listing_invoice.api.request_api", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(ListingNetworkError) as ctx:
                fetch_listing(LISTING_ID)

        self.assertIsInstance(ctx.exception, NetworkError)

    def test_invalid_json_is_parse_error(self) -> None:
        with patch("listing_invoice.api.request_api", return_value=fake_response(json_error=True)):
            with self.assertRaises(ListingParseError):
                fetch_listing(LISTING_ID)


@unittest.skipUnless(REQUESTS_AVAILABLE, "requests is not installed")
class CategoryAttributeTests(unittest.TestCase):
    def test_builds_label_mapping(self) -> None:
        payload = {"attributes": [{"id": "a1", "label": "Pump Capacity"}, {"id": "a2", "label": "Fuel"}]}
        with patch("listing_invoice.api.request_api", return_value=fake_response(payload=payload)) as request:
            result = fetch_category_attributes("cat-1", base_url="https://api.test")

        request.assert_called_once_with("https://api.test/categories/cat-1/attributes")
        self.assertTrue(result["ok"])
        self.assertEqual(result["value"], {"a1": "Pump Capacity", "a2": "Fuel"})

    def test_http_failure_is_reported_not_raised(self) -> None:
        with patch("listing_invoice.api.request_api", return_value=fake_response(500)):
            result = fetch_category_attributes("cat-1")

        self.assertFalse(result["ok"])
        self.assertEqual(result["error"], "HTTP 500")

    def test_network_and_parse_failures_are_reported(self) -> None:
        with patch("listing_invoice.api.request_api", side_effect=requests.Timeout("slow")):
            self.assertFalse(fetch_category_attributes("cat-1")["ok"])
        with patch("listing_invoice.api.request_api", return_value=fake_response(json_error=True)):
            self.assertFalse(fetch_category_attributes("cat-1")["ok"])
        with patch("listing_invoice.api.request_api", return_value=fake_response(payload=["bad"])):
            self.assertFalse(fetch_category_attributes("cat-1")["ok"])

    def test_malformed_attribute_list_is_reported(self) -> None:
        with patch("listing_invoice.api.request_api", return_value=fake_response(payload={"attributes": 5})):
            result = fetch_category_attributes("cat-1")

        self.assertFalse(result["ok"])
        self.assertEqual(result["error"], "Unexpected category attribute payload")

    def test_entries_without_string_id_or_label_are_skipped(self) -> None:
        payload = {
            "attributes": [
                {"id": ["a1"], "label": "Fuel"},
                {"id": "a2", "label": None},
                {"id": "a3", "label": ""},
                "junk",
                {"id": "a4", "label": "Pump Capacity"},
            ]
        }
        with patch("listing_invoice.api.request_api", return_value=fake_response(payload=payload)):
            result = fetch_category_attributes("cat-1")

        self.assertTrue(result["ok"])
        self.assertEqual(result["value"], {"a3": "", "a4": "Pump Capacity"})

    def test_category_labels_survives_odd_payloads(self) -> None:
        for payload in ({"attributes": 5}, {"attributes": "a1"}, {"attributes": None}):
            with patch("listing_invoice.api.request_api", return_value=fake_response(payload=payload)):
                self.assertEqual(category_labels("cat-1"), {})

    def test_category_labels_defaults_to_empty(self) -> None:
        with patch("listing_invoice.api.request_api", return_value=fake_response(500)):
            self.assertEqual(category_labels("cat-1"), {})

        with patch("listing_invoice.api.request_api") as request:
            self.assertEqual(category_labels(None), {})
        request.assert_not_called()


if __name__ == "__main__":
    unittest.main()
