import unittest
from importlib import util as importlib_util
from typing import Any, List, Tuple

FPDF_AVAILABLE = importlib_util.find_spec("fpdf") is not None
if FPDF_AVAILABLE:
    from listing_invoice.models import ImagePayload, Listing
    from listing_invoice.rendering import InvoiceRenderer, render_invoice

LISTING_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
SECTION_TITLES = ["ITEM DETAILS", "PRICING", "SPECIFICATIONS", "KEY ATTRIBUTES", "DESCRIPTION"]
LOGO_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 48">'
    b'<rect x="0" y="0" width="200" height="48" fill="#ff6600"/></svg>'
)


class RecordingCanvas:
    """Canvas double that records draw calls; text is 0.2mm per char per point."""

    def __init__(self) -> None:
        self.ops: List[Tuple[Any, ...]] = []
        self.pages = 1

    def text(self, x, y, text, size, color, bold=False) -> None:
        self.ops.append(("text", self.pages, x, y, text))

    def text_width(self, text, size, bold=False) -> float:
        return len(text) * size * 0.2

    def rule(self, y, from_x, to_x) -> None:
        self.ops.append(("rule", self.pages, from_x, y, to_x))

    def image(self, payload, x, y, width, height) -> None:
        self.ops.append(("image", self.pages, x, y, width, height))

    def add_page(self) -> None:
        self.pages += 1
        self.ops.append(("page", self.pages))

    def output(self) -> bytes:
        return b"%PDF-recorded"

    def texts(self) -> List[str]:
        return [op[4] for op in self.ops if op[0] == "text"]

    def text_op(self, text: str) -> Tuple[Any, ...]:
        return next(op for op in self.ops if op[0] == "text" and op[4] == text)


def make_listing(**fields: object) -> "Listing":
    payload = {
        "id": LISTING_ID,
        "secondaryId": 1042,
        "listingTitle": "2004 Pierce Pumper",
        "sellingPrice": 85000,
        "updatedAt": "2026-01-15T10:00:00.000Z",
        "imageUrls": [],
    }
    payload.update(fields)
    return Listing.from_dict(payload)


def full_listing(**fields: object) -> "Listing":
    values = {
        "itemLength": 300,
        "itemWeight": 38000,
        "vin": "4P1CT02S14A000123",
        "listingDescription": "Single stage pump, recently serviced.",
        "ListingAttribute": [
            {"categoryAttributeId": "a1", "value": "true"},
            {"categoryAttributeId": "a2", "value": "1500 GPM"},
            {"categoryAttributeId": "a3", "value": "Diesel"},
        ],
    }
    values.update(fields)
    return make_listing(**values)


@unittest.skipUnless(FPDF_AVAILABLE, "fpdf is not installed")
class LayoutSequenceTests(unittest.TestCase):
    def render(self, listing, **kwargs) -> RecordingCanvas:
        canvas = RecordingCanvas()
        InvoiceRenderer(listing, canvas=canvas, **kwargs).render()
        return canvas

    def test_minimal_listing_has_details_and_pricing_only(self) -> None:
        texts = self.render(make_listing()).texts()

        self.assertIn("ITEM DETAILS", texts)
        self.assertIn("PRICING", texts)
        for title in ("SPECIFICATIONS", "KEY ATTRIBUTES", "DESCRIPTION"):
            self.assertNotIn(title, texts)
        self.assertEqual(texts[-1], f"Listing ID: {LISTING_ID}")

    def test_full_listing_renders_sections_in_order(self) -> None:
        texts = self.render(full_listing()).texts()

        positions = [texts.index(title) for title in SECTION_TITLES]
        self.assertEqual(positions, sorted(positions))

    def test_header_meta_uses_display_id_and_date(self) -> None:
        texts = self.render(make_listing()).texts()
        self.assertIn("Listing #1042 · Jan 15, 2026", texts)

        texts = self.render(make_listing(secondaryId=None)).texts()
        self.assertIn("Listing #3fa85f64 · Jan 15, 2026", texts)

    def test_missing_logo_reserves_no_space(self) -> None:
        canvas = self.render(make_listing())
        self.assertEqual(canvas.ops[0], ("rule", 1, 20.0, 20.0, 190.0))

    def test_logo_is_drawn_above_first_separator(self) -> None:
        logo = ImagePayload(data=b"", width=500, height=120, image_format="PNG")
        canvas = self.render(make_listing(), logo=logo)

        self.assertEqual(canvas.ops[0], ("image", 1, 20.0, 20.0, 50.0, 12.0))
        self.assertEqual(canvas.ops[1], ("rule", 1, 20.0, 36.0, 190.0))

    def test_primary_image_is_right_aligned_in_details_band(self) -> None:
        image = ImagePayload(data=b"", width=400, height=200)
        canvas = self.render(make_listing(), image=image)

        first_row = canvas.text_op("Listing:")
        images = [op for op in canvas.ops if op[0] == "image"]
        self.assertEqual(len(images), 1)
        _, _, x, y, width, height = images[0]
        self.assertEqual((width, height), (70.0, 35.0))
        self.assertAlmostEqual(x + width, 190.0)
        self.assertEqual(y, first_row[3])

    def test_details_band_keeps_minimum_height(self) -> None:
        canvas = self.render(make_listing())

        band_top = canvas.text_op("Listing:")[3]
        pricing_y = canvas.text_op("PRICING")[3]
        self.assertAlmostEqual(pricing_y - band_top, 35.0 + 4.0 + 4.0)

    def test_key_attributes_split_into_two_columns(self) -> None:
        labels = {"a1": "Has Pump", "a2": "Pump Capacity", "a3": "Fuel"}
        canvas = self.render(full_listing(), attribute_labels=labels)

        pump = canvas.text_op("Has Pump:")
        capacity = canvas.text_op("Pump Capacity:")
        fuel = canvas.text_op("Fuel:")
        self.assertEqual((pump[2], capacity[2], fuel[2]), (20.0, 20.0, 111.0))
        self.assertEqual(fuel[3], pump[3])
        self.assertAlmostEqual(capacity[3] - pump[3], 5.0)

    def test_long_description_overflows_and_footer_follows_last_line(self) -> None:
        description = " ".join(f"word{i}" for i in range(3000))
        canvas = self.render(make_listing(listingDescription=description))

        self.assertGreaterEqual(canvas.pages, 2)
        text_ops = [op for op in canvas.ops if op[0] == "text"]
        footers = [op for op in text_ops if op[4].startswith("Listing ID:")]
        self.assertEqual(len(footers), 1)
        self.assertIs(text_ops[-1], footers[0])
        self.assertEqual(footers[0][1], canvas.pages)

        last_description_line = text_ops[-2]
        self.assertTrue(last_description_line[4].endswith("word2999"))
        self.assertGreater(footers[0][3], last_description_line[3])
        for op in text_ops[:-1]:
            self.assertLessEqual(op[3], 277.0)

    def test_render_does_not_mutate_listing(self) -> None:
        listing = full_listing()
        before = repr(listing)
        self.render(listing)
        self.assertEqual(repr(listing), before)


@unittest.skipUnless(FPDF_AVAILABLE, "fpdf is not installed")
class PdfOutputTests(unittest.TestCase):
    def test_render_invoice_returns_pdf_bytes(self) -> None:
        pdf = render_invoice(full_listing(), {"a1": "Has Pump"})

        self.assertIsInstance(pdf, bytes)
        self.assertTrue(pdf.startswith(b"%PDF"))
        self.assertGreater(len(pdf), 100)

    def test_identical_input_renders_identical_bytes(self) -> None:
        listing = full_listing()
        self.assertEqual(render_invoice(listing), render_invoice(listing))

    def test_svg_logo_is_embedded(self) -> None:
        logo = ImagePayload(data=LOGO_SVG, width=200, height=48, image_format="SVG")
        listing = full_listing()

        plain = render_invoice(listing)
        branded = render_invoice(listing, logo=logo)

        self.assertTrue(branded.startswith(b"%PDF"))
        self.assertNotEqual(branded, plain)
        self.assertGreater(len(branded), len(plain))

    def test_long_description_adds_pdf_pages(self) -> None:
        description = "\n".join(f"Service record line {i}" for i in range(100))
        renderer = InvoiceRenderer(make_listing(listingDescription=description))
        renderer.render()

        self.assertEqual(renderer.canvas.page_count, 2)


if __name__ == "__main__":
    unittest.main()
