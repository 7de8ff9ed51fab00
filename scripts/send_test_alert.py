#!/usr/bin/env python3
"""Send a test alert to the configured AlertManager endpoint.

Usage::

    # Use the alertmanager section of the default config
    python scripts/send_test_alert.py

    # Custom config file and target URL
    python scripts/send_test_alert.py --config config/settings.yaml \\
        --url http://localhost:9093/api/v1/alerts
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from src.alertmanager.exceptions import AlertManagerError
from src.alertmanager.factory import create_alertmanager_service
from src.core.config import load_settings
from src.core.logging import setup_logging

logger = structlog.get_logger(__name__)


async def run(args: argparse.Namespace) -> int:
    """Validate config and run one self-test dispatch."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    try:
        service = create_alertmanager_service(settings)
    except AlertManagerError as exc:
        logger.error("alertmanager_config_invalid", error=str(exc))
        return 1

    options = service.test_options()
    if args.url:
        options = options.model_copy(update={"url": args.url})
    if args.retry_folder:
        options = options.model_copy(update={"retry_folder": args.retry_folder})

    async with service:
        try:
            await service.test(options)
        except AlertManagerError as exc:
            logger.error(
                "alertmanager_test_failed",
                url=options.url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return 1

    logger.info("alertmanager_test_sent", url=options.url)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Send a test alert to an AlertManager endpoint.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override the target URL from config",
    )
    parser.add_argument(
        "--retry-folder",
        default=None,
        help="Override the retry folder from config",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    args = parser.parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
