"""Main application entry point.

Converts a feed once and prints the result, or starts the HTTP API.
"""

import argparse
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from feedjson import __version__
from feedjson.api.routes import router
from feedjson.config.settings import settings
from feedjson.encoders.json_encoder import render_output
from feedjson.exceptions import ConfigurationError, FeedJsonError
from feedjson.services.feed_manager import FeedManager
from feedjson.utils.logger import configure_logging, get_logger


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        title="feedjson API",
        description="RSS feeds as JSON and JSONP",
        version=__version__,
    )
    app.include_router(router)
    return app


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="feedjson - RSS to JSON/JSONP")
    parser.add_argument(
        "url",
        nargs="?",
        default=settings.feed_url,
        help="Feed URL (default: FEEDJSON_FEED_URL)",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Always fetch the feed, never read or write the cache",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help=f"Cache directory (default: {settings.cache_dir})",
    )
    parser.add_argument(
        "--format",
        default=None,
        help=f"Input feed format (default: {settings.feed_format})",
    )
    parser.add_argument(
        "--jsonp",
        action="store_true",
        help="Wrap the output in a callback invocation",
    )
    parser.add_argument(
        "--callback",
        default=None,
        help=f"JSONP callback name (default: {settings.default_callback}); implies --jsonp",
    )
    parser.add_argument(
        "--no-force-object",
        action="store_true",
        help="Emit JSON arrays instead of index-keyed objects",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP API instead of converting a single feed",
    )
    parser.add_argument(
        "--host",
        default=settings.api_host,
        help=f"API server host (default: {settings.api_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"API server port (default: {settings.api_port})",
    )
    return parser


def run_cli_once(args: argparse.Namespace) -> int:
    """Convert one feed and write it to stdout.

    Returns:
        Process exit code.
    """
    logger = get_logger("cli")

    try:
        manager = FeedManager.from_settings(
            settings,
            feed_url=args.url or "",
            is_cache=False if args.no_cache else None,
            cache_dir=args.cache_dir,
            format=args.format,
        )
        data = manager.process()
        output = render_output(
            data,
            callback=args.callback,
            jsonp=args.jsonp,
            force_object=not args.no_force_object and settings.force_object,
            default_callback=settings.default_callback,
        )
    except ConfigurationError as e:
        logger.error("Invalid configuration", error=str(e))
        return 2
    except FeedJsonError as e:
        logger.error("Feed conversion failed", error=str(e))
        return 1

    sys.stdout.write(output + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
    )

    if args.serve:
        uvicorn.run(
            create_app(),
            host=args.host,
            port=args.port,
            log_level=settings.log_level.lower(),
        )
        return 0

    return run_cli_once(args)


if __name__ == "__main__":
    sys.exit(main())
