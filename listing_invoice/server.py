"""HTTP server entrypoints for listing invoices."""

from __future__ import annotations

import errno
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

from loguru import logger

from .config import LISTEN_BACKLOG, MAX_INFLIGHT_RENDERS, RENDER_QUEUE_TIMEOUT_MS
from .errors import InvalidListingUrlError, ListingFetchError, ListingNotFoundError
from .formatting import extract_uuid_from_garage_url

RENDER_INFLIGHT_SEMAPHORE = threading.BoundedSemaphore(MAX_INFLIGHT_RENDERS)
ValidationError = Tuple[int, Dict[str, Any]]

# Peers that hang up mid-response are not server errors.
DISCONNECT_ERRNOS = {errno.EPIPE, errno.ECONNRESET, errno.ETIMEDOUT}

INVOICE_PATHS = ("/invoice", "/generate")
HEALTH_PATHS = ("/", "/health", "/healthz", "/ready")


def is_client_disconnect(exc: BaseException) -> bool:
    if isinstance(exc, (BrokenPipeError, ConnectionResetError, TimeoutError)):
        return True
    return isinstance(exc, OSError) and exc.errno in DISCONNECT_ERRNOS


class DependencyError(RuntimeError):
    """Raised when a required runtime dependency is missing."""


def load_invoice_builder():
    try:
        from .invoice import build_invoice, resolve_listing
    except ModuleNotFoundError as exc:
        if exc.name in ("fpdf", "PIL", "requests"):
            raise DependencyError(
                f"Missing dependency '{exc.name}'. Install the project with 'pip install .'."
            ) from exc
        raise
    return resolve_listing, build_invoice


def validate_invoice_query(query: str) -> Tuple[Optional[str], Optional[ValidationError]]:
    """Pull the listing reference out of ``?url=`` (or ``?id=``)."""
    params = parse_qs(query)
    values = params.get("url") or params.get("id") or []
    text = values[0].strip() if values else ""
    if not text:
        return None, (
            400,
            {"error": "invalid_listing_url", "detail": "Query parameter 'url' is required."},
        )
    if extract_uuid_from_garage_url(text) is None:
        return None, (
            400,
            {"error": "invalid_listing_url", "detail": str(InvalidListingUrlError())},
        )
    return text, None


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{filename}"'


class InvoiceHandler(BaseHTTPRequestHandler):
    def _write_response(
        self,
        status: int,
        content_type: str,
        body: bytes,
        headers: Optional[Dict[str, str]] = None,
    ) -> bool:
        try:
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(body)))
            for name, value in (headers or {}).items():
                self.send_header(name, value)
            self.end_headers()
            self.wfile.write(body)
            return True
        except Exception as exc:
            if is_client_disconnect(exc):
                return False
            raise

    def _send_json(self, status: int, payload: Dict[str, Any]) -> bool:
        body = json.dumps(payload).encode("utf-8")
        return self._write_response(status, "application/json", body)

    def _send_invoice(self, text: str) -> None:
        resolve_listing, build_invoice = load_invoice_builder()
        try:
            listing = resolve_listing(text)
        except InvalidListingUrlError as exc:
            self._send_json(400, {"error": "invalid_listing_url", "detail": str(exc)})
            return
        except ListingNotFoundError as exc:
            self._send_json(404, {"error": "listing_not_found", "detail": str(exc)})
            return
        except ListingFetchError as exc:
            logger.warning("Listing fetch failed: {}", exc)
            self._send_json(502, {"error": "listing_fetch_failed", "detail": str(exc)})
            return

        try:
            document = build_invoice(listing)
        except Exception as exc:
            logger.exception("Rendering invoice for {} failed", listing.id)
            self._send_json(500, {"error": "render_failed", "detail": str(exc)})
            return

        self._write_response(
            200,
            "application/pdf",
            document.content,
            headers={"Content-Disposition": content_disposition(document.filename)},
        )

    def do_GET(self) -> None:
        parts = urlsplit(self.path)
        if parts.path in HEALTH_PATHS:
            self._send_json(200, {"status": "ok"})
            return
        if parts.path not in INVOICE_PATHS:
            self._send_json(404, {"error": "not_found", "detail": "Unsupported endpoint."})
            return

        text, validation_error = validate_invoice_query(parts.query)
        if validation_error is not None:
            status, payload_body = validation_error
            self._send_json(status, payload_body)
            return

        acquired = RENDER_INFLIGHT_SEMAPHORE.acquire(timeout=RENDER_QUEUE_TIMEOUT_MS / 1000.0)
        if not acquired:
            retry_after_seconds = max(1, (RENDER_QUEUE_TIMEOUT_MS + 999) // 1000)
            self._send_json(
                503,
                {
                    "error": "server_busy",
                    "detail": "Render queue is full; retry shortly.",
                    "retry_after_seconds": retry_after_seconds,
                    "max_inflight_renders": MAX_INFLIGHT_RENDERS,
                },
            )
            return

        try:
            self._send_invoice(text)
        finally:
            RENDER_INFLIGHT_SEMAPHORE.release()

    def handle_one_request(self) -> None:
        try:
            super().handle_one_request()
        except Exception as exc:
            if is_client_disconnect(exc):
                return
            raise

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("{} - {}", self.address_string(), format % args)


class InvoiceHTTPServer(ThreadingHTTPServer):
    daemon_threads = True
    allow_reuse_address = True
    request_queue_size = LISTEN_BACKLOG


def run(host: str = "0.0.0.0", port: int = 8080) -> None:
    load_invoice_builder()
    server = InvoiceHTTPServer((host, port), InvoiceHandler)
    logger.info("Invoice API server listening on http://{}:{}", host, port)
    server.serve_forever()
