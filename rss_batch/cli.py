"""CLI for running one batch request from a JSON file or stdin."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import Settings
from .core import ArticleFetcher
from .exceptions import InvalidBatchRequest
from .report import error_response, validation_error_response

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rss-batch",
        description="Fetch one batch of RSS/Atom sources and print the filtered article report.",
    )
    parser.add_argument(
        "request",
        nargs="?",
        default="-",
        help="Path to the request JSON ({\"sourceBatch\": {...}}); '-' reads stdin (default).",
    )
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument("--delay-ms", type=int, default=None)
    parser.add_argument("--timeout-ms", type=int, default=None)
    parser.add_argument("--output", default=None, help="Write the response here instead of stdout.")
    return parser.parse_args(argv)


def _read_request(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _write_response(payload: dict, path: Optional[str]) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("Saved response to %s", path)
    else:
        sys.stdout.write(text + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # Quiet noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    overrides = {
        k: v for k, v in (
            ("batch_size", args.batch_size),
            ("batch_delay_ms", args.delay_ms),
            ("timeout_ms", args.timeout_ms),
        ) if v is not None
    }
    settings = replace(settings, **overrides)

    try:
        body = _read_request(args.request)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read request %s: %s", args.request, e)
        _write_response(validation_error_response(f"Could not read request: {e}"), args.output)
        return EXIT_INVALID

    fetcher = ArticleFetcher.from_settings(settings)
    try:
        payload = fetcher.handle(body)
    except InvalidBatchRequest as e:
        logger.error("Rejected request: %s", e)
        _write_response(validation_error_response(str(e)), args.output)
        return EXIT_INVALID
    except Exception as e:
        logger.exception("Error in article fetcher")
        _write_response(error_response(str(e) or "Unknown error occurred"), args.output)
        return EXIT_ERROR

    _write_response(payload, args.output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
