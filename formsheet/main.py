from __future__ import annotations

import argparse
import logging
import os
import sys

import uvicorn

from .config import Settings
from .web.app import create_app


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve a form endpoint that appends submissions to Google Sheets."
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface to bind. Defaults to 127.0.0.1.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to listen on. Defaults to 8000.",
    )
    parser.add_argument(
        "--backend",
        choices=("google", "memory"),
        default=None,
        help="Override SHEETS_BACKEND for this run.",
    )
    return parser.parse_args()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = parse_args()

    if args.backend:
        os.environ["SHEETS_BACKEND"] = args.backend

    try:
        settings = Settings.from_env()
    except RuntimeError as exc:
        logging.error("%s", exc)
        return 1

    logging.info(
        "Serving %s backend on %s:%d (default sheet '%s')",
        settings.backend,
        args.host,
        args.port,
        settings.default_sheet_name,
    )
    if not settings.to_address:
        logging.info("No TO_ADDRESS configured; forms choose their own recipient.")

    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
