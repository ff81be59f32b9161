#!/usr/bin/env python3
"""Hummingbird — Entry point.

Serves a page built from independent modules.

Usage:
    python3 main.py                        # Serve dashboard.yaml on :5000
    python3 main.py --config other.yaml    # Different page config
    python3 main.py --log-level DEBUG      # Verbose logging
"""

__version__ = "1.0.0"

import argparse
import logging

from config import (
    DEFAULT_CONFIG_PATH, DEFAULT_HOST, DEFAULT_PORT, LOG_DATEFMT, LOG_FORMAT, SEVERITIES,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Hummingbird — a small page-module framework, at your service",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH,
        help=f"Path to page YAML config (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Web server port")
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"Hummingbird {__version__}",
    )
    return parser.parse_args(argv)


def setup_logging(level_name: str) -> None:
    """Configure root logger with a consistent format."""
    level = SEVERITIES.get(level_name.upper()) or getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("Hummingbird v%s starting", __version__)

    from web_app import create_app, get_application
    app = create_app(args.config)
    logger.info("Page at http://%s:%d", args.host, args.port)

    try:
        app.run(host=args.host, port=args.port, threaded=True, debug=False)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        get_application(app).shutdown()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
