"""Module entrypoint.

``python -m listing_invoice <listing-url>`` writes the invoice PDF;
without an argument the invoice API server is started.
"""

from __future__ import annotations

import sys

from .config import HOST, OUTPUT_DIR, PORT
from .logsetup import setup_logging
from .server import DependencyError, load_invoice_builder, run


def generate(text: str) -> int:
    load_invoice_builder()
    from .invoice import generate_invoice, save_invoice

    result = generate_invoice(text)
    if not result["ok"]:
        print(result["error"], file=sys.stderr)
        return 1
    print(save_invoice(result["value"], OUTPUT_DIR))
    return 0


def main() -> None:
    setup_logging()
    args = sys.argv[1:]
    try:
        if args:
            raise SystemExit(generate(args[0]))
        run(HOST, PORT)
    except DependencyError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
