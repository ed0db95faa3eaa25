#!/usr/bin/env python
import argparse
import sys
from typing import List, Optional

from core.exceptions import ConfigError
from frontend.controllers.ui_controller import UIController
from frontend.models.state import ViewerState
from inout.config_loader import ViewerConfig, load_config
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the current spectrum of a Spectryx Blue analyzer.")
    parser.add_argument("--config", help="Path to a YAML viewer configuration.", default=None)
    parser.add_argument("--url", help="Base URL of the spectrum server, e.g. http://localhost:8080", default=None)
    parser.add_argument("--refresh", type=float, default=None, help="Seconds between automatic re-fetches.")
    parser.add_argument("--log-file", default=None, help="Also write log output to this file.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    return parser


def apply_overrides(config: ViewerConfig, args: argparse.Namespace) -> ViewerConfig:
    if args.url:
        config.server.url = args.url
    if args.refresh is not None:
        config.view.refresh_interval = max(0.0, args.refresh)
    if args.log_file:
        config.logging.file = args.log_file
    if args.verbose:
        config.logging.level = "DEBUG"
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        setup_logging()
        logger.error("Invalid configuration: %s", e)
        return 2

    setup_logging(level=config.logging.level, log_file=config.logging.file)
    logger.debug("Verbose logging enabled.")
    state = ViewerState()
    UIController(state, config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
