"""
Run the todo API gateway.

This module provides a command-line interface for starting the service.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from todoapi.config import settings


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """
    Set up logging configuration.

    Args:
        log_level: Log level
        log_file: Optional log file path
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Invalid log level: {log_level}")
        numeric_level = logging.INFO

    log_config = {
        'level': numeric_level,
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'datefmt': '%Y-%m-%d %H:%M:%S',
        'force': True,
    }

    if log_file:
        log_config['filename'] = log_file
        log_config['filemode'] = 'a'

    logging.basicConfig(**log_config)

    # Set uvicorn access logs to WARNING to reduce noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the todo API gateway")

    parser.add_argument(
        "--host",
        type=str,
        default=settings.api_gateway_host,
        help=f"Host to bind to (default: {settings.api_gateway_host})"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_gateway_port,
        help=f"Port to bind to (default: {settings.api_gateway_port})"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level.upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Log level (default: {settings.log_level})"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Log file path (default: None, logs to console)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable auto-reload (default: False)"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_args(argv)

    if args.debug:
        os.environ["DEBUG"] = "True"

    setup_logging(args.log_level, args.log_file)

    logging.info(f"Starting todo API gateway on {args.host}:{args.port}")

    # Imported late so the application is built after logging is configured
    from todoapi.api_gateway.gateway import run_gateway

    try:
        run_gateway(host=args.host, port=args.port, reload=args.debug)
    except Exception as e:
        logging.error(f"Error running API Gateway: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
