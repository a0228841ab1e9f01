"""
StudyHub API - Entry Point

Run with: python -m studyhub
"""

import argparse
import logging

import uvicorn

from studyhub.config import settings


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # SQL echo is driven by settings.DEBUG, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="studyhub",
        description="StudyHub API - shared study-resource catalog",
    )
    parser.add_argument("--host", default=settings.HOST, help=f"Bind address (default: {settings.HOST})")
    parser.add_argument("-p", "--port", type=int, default=settings.PORT, help=f"Listen port (default: {settings.PORT})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose (debug) logging")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    level = "DEBUG" if args.verbose else settings.LOG_LEVEL
    setup_logging(level)

    logger = logging.getLogger(__name__)
    logger.info("Starting StudyHub API on %s:%d (%s)", args.host, args.port, settings.APP_ENV)

    uvicorn.run("studyhub.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
