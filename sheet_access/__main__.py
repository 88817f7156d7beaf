"""
Run the sheet access HTTP service.

Usage:
    python -m sheet_access
    python -m sheet_access --config ./settings.yaml --port 8080 --auto-login
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import uvicorn

from .api import create_app
from .config import AccessConfig
from .exceptions import ValidationError
from .logging_utils import configure_logging
from .service import AccessService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheet_access",
        description="Sheet Access Service - accounts, sessions and sheet sharing",
    )
    parser.add_argument("--config", type=Path, help="Path to settings.yaml")
    parser.add_argument("--host", help="Interface to bind")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument(
        "--auto-login",
        action="store_true",
        default=None,
        help="Log new accounts in as part of registration",
    )
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit JSON logs")
    return parser


def load_config(args: argparse.Namespace) -> AccessConfig:
    """Config file, then environment, then command-line flags."""
    config = AccessConfig.load(args.config)
    overrides = {
        "host": args.host,
        "port": args.port,
        "register_auto_login": args.auto_login,
        "log_json": args.log_json,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config)
    service = AccessService.from_config(config)
    app = create_app(service)

    logger.info(
        f"Starting sheet access service on http://{config.host}:{config.port} "
        f"(register_auto_login={config.register_auto_login})"
    )
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
