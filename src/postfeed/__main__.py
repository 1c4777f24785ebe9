"""Command line entry point: ``python -m postfeed [ADDRESS]``."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import Optional, Sequence

from .config import ConfigurationError, env_str, get_feed_settings
from .exceptions import ApplicationError
from .feed_page import run_feed
from .logging_config import setup_logging
from .post_container import PostContainer, PostEntry
from .status_reporter import StatusReporter

logger = logging.getLogger(__name__)


class _PrintingPostContainer(PostContainer):
    """Post container that also echoes each new post to stdout."""

    def render_post(self, event) -> PostEntry:
        entry = super().render_post(event)
        print(entry.text, flush=True)
        return entry


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="postfeed", description="Follow the live post feed of one address")
    parser.add_argument("address", nargs="?", help="Feed address (defaults to $POSTFEED_ADDRESS)")
    parser.add_argument("--base-url", type=str, help="Override the feed base URL ($POSTFEED_BASE_URL)")
    parser.add_argument("--log-file", action="store_true", help="Also write logs/postfeed.log")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging("postfeed" if args.log_file else None, user_friendly=True)

    address = args.address or env_str("POSTFEED_ADDRESS")
    if not address:
        print("postfeed: no address given and POSTFEED_ADDRESS is not set", file=sys.stderr)
        return 2

    try:
        settings = get_feed_settings()
        if args.base_url:
            settings = dataclasses.replace(settings, base_url=args.base_url)
    except ConfigurationError as exc:
        print(f"postfeed: {exc}", file=sys.stderr)
        return 2

    reporter = StatusReporter()
    try:
        asyncio.run(run_feed(address, status_reporter=reporter, posts=_PrintingPostContainer(), settings=settings))
    except ApplicationError:
        print(reporter.display.text, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 0
    print(reporter.display.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
