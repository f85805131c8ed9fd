"""Public package API for listing invoice generation."""

from __future__ import annotations

from typing import Any, Dict, Optional


def render_invoice(
    listing: Any,
    attribute_labels: Optional[Dict[str, str]] = None,
    logo: Any = None,
    image: Any = None,
) -> bytes:
    from .rendering import render_invoice as _render_invoice

    return _render_invoice(listing, attribute_labels, logo=logo, image=image)


def generate_invoice(text: str):
    from .invoice import generate_invoice as _generate_invoice

    return _generate_invoice(text)


def run(host: str = "0.0.0.0", port: int = 8080) -> None:
    from .server import run as _run

    _run(host, port)


__all__ = ["generate_invoice", "render_invoice", "run"]
