"""
Command line entry point.

    python -m image_lookup serve [--host HOST] [--port PORT]
    python -m image_lookup lookup pizza margherita
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys

from .application.image_lookup import ImageLookupService
from .shared.config import get_config
from .shared.exceptions import ImageLookupError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="image_lookup", description="Keyword to image URL lookup")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API server")
    serve.add_argument("--host", help="Host to bind to")
    serve.add_argument("--port", type=int, help="Port to bind to")

    lookup = sub.add_parser("lookup", help="Print the image URL for some keywords")
    lookup.add_argument("keywords", nargs="+", help="Search keywords")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = get_config()

    if args.command == "serve":
        from .api.server import run_api_server

        overrides = {}
        if args.host:
            overrides["api_host"] = args.host
        if args.port:
            overrides["api_port"] = args.port
        run_api_server(dataclasses.replace(config, **overrides))
        return 0

    service = ImageLookupService(config)
    try:
        url = asyncio.run(service.lookup(" ".join(args.keywords)))
    except ImageLookupError as e:
        print(f"{e.kind}: {e}", file=sys.stderr)
        return 1
    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
