"""Command that prints the block engine's tip accounts."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from jitorpc.client import JitoClient, JitoError, prettify

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://mainnet.block-engine.jito.wtf/api/v1"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jitorpc", description="Fetch tip accounts from a block engine."
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    parser.add_argument("--uuid", default=None, help="UUID for rate-limited access")
    parser.add_argument(
        "--random",
        action="store_true",
        help="print one tip account chosen at random",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("JITORPC_LOG", "info"),
        help="logging level (default: info)",
    )
    return parser


async def _run(args: argparse.Namespace) -> None:
    async with JitoClient(args.base_url, args.uuid) as client:
        try:
            if args.random:
                print(await client.get_random_tip_account())
            else:
                print(prettify(await client.get_tip_accounts()))
        except JitoError as exc:
            logger.error("Error fetching tip accounts: %s", exc)


def main(argv: list[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = _parser().parse_args(argv)
    level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, stream=sys.stderr)
    asyncio.run(_run(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())