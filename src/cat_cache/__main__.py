"""Command-line entry point: ``python -m cat_cache -h HOST -p PORT -c DIR``."""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

import uvicorn

from cat_cache.api import create_app
from cat_cache.config import Settings
from cat_cache.errors import StorageError
from cat_cache.repositories import FileCacheRepository

logger = logging.getLogger("cat_cache")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    ``-h`` is the host, so help lives on ``--help`` only. Host, port and cache
    dir are required unless the environment provides them.
    """
    parser = argparse.ArgumentParser(
        prog="cat_cache",
        description="Caching proxy for http.cat images",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument(
        "-h", "--host",
        default=os.getenv("CACHE_HOST"),
        required=os.getenv("CACHE_HOST") is None,
        help="address of the server",
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=os.getenv("CACHE_PORT"),
        required=os.getenv("CACHE_PORT") is None,
        help="port of the server",
    )
    parser.add_argument(
        "-c", "--cache",
        type=Path,
        default=os.getenv("CACHE_DIR"),
        required=os.getenv("CACHE_DIR") is None,
        help="path to cache directory",
    )
    parser.add_argument("--origin", help="upstream base URL (default: $ORIGIN_BASE_URL or https://http.cat)")
    parser.add_argument("--timeout", type=float, help="upstream request timeout in seconds")
    parser.add_argument(
        "--strict-reads",
        action="store_true",
        default=None,
        help="answer 500 instead of fetching from origin when a cache read fails",
    )
    parser.add_argument("--log-level", help="logging level (default: $LOG_LEVEL or INFO)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Overlay parsed arguments on environment-derived settings."""
    overrides = {
        "host": args.host,
        "port": int(args.port),
        "cache_dir": Path(args.cache),
        "origin_base_url": args.origin,
        "origin_timeout": args.timeout,
        "strict_reads": args.strict_reads,
        "log_level": args.log_level,
    }
    return Settings(**{name: value for name, value in overrides.items() if value is not None})


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, prepare the cache dir and serve until interrupted."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        FileCacheRepository.create(settings.cache_dir)
    except StorageError as e:
        logger.error("Error creating cache dir: %s", e)
        return 1

    logger.info("Server listening at http://%s:%d/", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
