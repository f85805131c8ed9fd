"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os


def env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > minimum else default


def env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


API_BASE_URL = env_str("INVOICE_API_BASE_URL", "https://garage-backend.onrender.com").rstrip("/")
LOGO_URL = env_str("INVOICE_LOGO_URL", "https://www.shopgarage.com/logos/garage/garage-logo.svg")
HTTP_TIMEOUT = env_float("INVOICE_HTTP_TIMEOUT", 30.0)
USER_AGENT = env_str("INVOICE_USER_AGENT", "listing-invoice/0.1")

OUTPUT_DIR = env_str("INVOICE_OUTPUT_DIR", ".")
LOG_LEVEL = env_str("INVOICE_LOG_LEVEL", "INFO").upper()

HOST = env_str("INVOICE_HOST", "0.0.0.0")
PORT = env_int("INVOICE_PORT", 8080, minimum=1)
MAX_INFLIGHT_RENDERS = env_int("INVOICE_MAX_INFLIGHT_RENDERS", 16, minimum=1)
RENDER_QUEUE_TIMEOUT_MS = env_int("INVOICE_RENDER_QUEUE_TIMEOUT_MS", 30000, minimum=0)
LISTEN_BACKLOG = env_int("INVOICE_LISTEN_BACKLOG", 128, minimum=1)
