#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main entry point for the lead webhook sync service.

This module loads configuration, sets up logging and starts the webhook
receiver.
"""

import sys
import argparse
import logging
from typing import List, Optional

import uvicorn

from lead_webhook_sync import __version__
from lead_webhook_sync.api import create_app
from lead_webhook_sync.config import AppConfig
from lead_webhook_sync.exceptions import ConfigurationError
from lead_webhook_sync.sources import default_registry
from lead_webhook_sync.utils.logger import configure_logging


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Lead Webhook Sync",
        epilog="Receives SalesGodCRM and Smartlead webhooks and syncs contacts into HubSpot.",
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Interface to bind (default: HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: PORT or 3000)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = setup_argparse().parse_args(argv)

    config = AppConfig()
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.log_level:
        config.log_level = logging.getLevelName(args.log_level)

    logger = configure_logging(
        level=config.log_level,
        log_file=str(config.log_file_path) if config.log_file_path else None,
        json_logs=config.json_logs,
    )

    try:
        config.require_valid()
    except ConfigurationError as e:
        logger.error(f"ERROR: {e}")
        return 1

    app = create_app(config)

    logger.info("Lead Webhook Sync receiver active")
    logger.info(f"Listening on {config.host}:{config.port}")
    for source in default_registry():
        logger.info(f"Webhook endpoint: POST {source.path} ({source.audit_label})")
    logger.info("Health check: GET /health")

    uvicorn.run(app, host=config.host, port=config.port, log_level=logging.getLevelName(config.log_level).lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
