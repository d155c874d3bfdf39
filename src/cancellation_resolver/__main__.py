"""Command-line entry point: ``python -m cancellation_resolver``.

Prints the result envelope (or the error body) as JSON. Exit status is 0 on
success and 1 on any failure.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from cancellation_resolver.config import resolve_config
from cancellation_resolver.handler import handle_request


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve a subscription's cancellation link and instructions",
        prog="python -m cancellation_resolver",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--page-id", help="Page whose Service property names the service")
    target.add_argument("--service", help="Service name to resolve directly")
    parser.add_argument(
        "--no-write",
        action="store_true",
        help="Resolve without updating the page",
    )
    parser.add_argument(
        "--env-file", help="Read credentials and settings from this .env file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log stage progress to stderr"
    )
    return parser


def _emit(body: dict[str, Any]) -> None:
    print(json.dumps(body, indent=2, default=str))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = resolve_config(env_file=args.env_file).to_frozen()
    except (FileNotFoundError, ValueError) as e:
        _emit({"success": False, "error": str(e), "kind": "MisconfigurationError"})
        return 1

    body = {"pageId": args.page_id} if args.page_id else {"service": args.service}
    response = asyncio.run(
        handle_request("POST", body, config=config, write=not args.no_write)
    )
    _emit(response.body)
    return 0 if response.ok else 1


if __name__ == "__main__":
    sys.exit(main())
