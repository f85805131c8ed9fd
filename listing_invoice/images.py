"""Image fetching and normalization for embedding in the invoice."""

from __future__ import annotations

from io import BytesIO
from typing import Tuple

import requests
from fpdf.svg import SVGObject  # type: ignore
from loguru import logger
from PIL import Image

from .config import HTTP_TIMEOUT, USER_AGENT
from .models import ImagePayload
from .result import Result, from_exception, success

JPEG = "JPEG"
PNG = "PNG"
SVG = "SVG"
JPEG_QUALITY = 85
BACKGROUND = (255, 255, 255)


def is_svg(content: bytes) -> bool:
    # Same prefixes fpdf checks before drawing bytes as SVG.
    head = content.lstrip()
    return head.startswith(b"<svg ") or head.startswith(b"<?xml ")


def svg_size(content: bytes) -> Tuple[float, float]:
    """Intrinsic size of an SVG document, from width/height or the viewBox."""
    svg = SVGObject(content)
    width, height = svg.width, svg.height
    if (not width or not height) and svg.viewbox:
        width, height = svg.viewbox[2], svg.viewbox[3]
    return width or 0, height or 0


def encode_image(image: Image.Image, image_format: str = JPEG) -> ImagePayload:
    """Re-encode a decoded image.

    PNG keeps the alpha channel; JPEG flattens it onto a white background.
    """
    rgba = image.convert("RGBA")
    buffer = BytesIO()
    if image_format == PNG:
        rgba.save(buffer, format=PNG)
    else:
        flattened = Image.new("RGB", rgba.size, BACKGROUND)
        flattened.paste(rgba, mask=rgba.getchannel("A"))
        flattened.save(buffer, format=JPEG, quality=JPEG_QUALITY)
    width, height = rgba.size
    return ImagePayload(data=buffer.getvalue(), width=width, height=height, image_format=image_format)


def load_image(url: str, image_format: str = JPEG) -> Result:
    """Fetch and re-encode an image; failures come back as a failed Result.

    SVG documents are kept as-is, whatever ``image_format`` asks for,
    since the PDF backend draws them as vectors.
    """
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=HTTP_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Image fetch failed for {}: {}", url, exc)
        return from_exception(exc)

    content = response.content
    try:
        if is_svg(content):
            width, height = svg_size(content)
            payload = ImagePayload(data=content, width=width, height=height, image_format=SVG)
        else:
            with Image.open(BytesIO(content)) as image:
                payload = encode_image(image, image_format)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        logger.warning("Image decode failed for {}: {}", url, exc)
        return from_exception(exc)

    if payload.width <= 0 or payload.height <= 0:
        return from_exception(ValueError(f"empty image {payload.width}x{payload.height}"))
    return success(payload)
