"""
CLI for running the AI Pipe HTTP service.

Defaults come from settings (.env / environment); flags override them.
"""

import argparse
import logging

from aipipe.logging_setup import setup_logging
from aipipe.settings import get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    cfg = get_settings()

    parser = argparse.ArgumentParser(
        description="Serve the AI Pipe text pipeline over HTTP"
    )

    parser.add_argument(
        "--host",
        default=cfg.api_host,
        help=f"Interface to bind (default: {cfg.api_host})"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=cfg.api_port,
        help=f"Port to listen on (default: {cfg.api_port})"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        default=cfg.api_reload,
        help="Auto-reload on code changes (dev only)"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=cfg.api_workers,
        help=f"Number of uvicorn workers (default: {cfg.api_workers})"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=cfg.log_level,
        help=f"Log level (default: {cfg.log_level})"
    )

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)

    import uvicorn

    logger.info(f"AI Pipe service listening on {args.host}:{args.port}")
    logger.info(f"Environment: {get_settings().env}")

    try:
        uvicorn.run(
            "api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=args.workers if not args.reload else 1,  # Workers only work without reload
            log_level=args.log_level.lower()
        )
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
