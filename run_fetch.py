#!/usr/bin/env python
import argparse
import sys
from typing import List, Optional, Sequence

import numpy as np

from core.exceptions import ConfigError
from core.join import JoinCoordinator
from inout.config_loader import load_config
from inout.rpc_client import RpcTransport
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class SpectrumCapture:
    """Render target that keeps the joined scale/sample pair."""
    def __init__(self) -> None:
        self.wavelengths: Optional[np.ndarray] = None
        self.intensities: Optional[np.ndarray] = None

    def __call__(self, xs: Sequence[float], ys: Sequence[float]) -> None:
        n = min(len(xs), len(ys))
        self.wavelengths = np.asarray(xs[:n])
        self.intensities = np.asarray(ys[:n])


def main(argv: Optional[List[str]] = None) -> int:
    """
    Fetch one spectrum without opening a window.

    Command-line arguments:
      --url: Base URL of the spectrum server.
      --config: Optional YAML viewer configuration.
      --dump: Optional path to save the spectrum (e.g., spectrum.npz).
      --timeout: Seconds to wait for both datasets.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Fetch the current spectrum from a Spectryx Blue server.")
    parser.add_argument("--url", default=None, help="Base URL of the spectrum server.")
    parser.add_argument("--config", default=None, help="Path to a YAML viewer configuration.")
    parser.add_argument("--dump", default=None, help="Path to dump the spectrum (e.g. spectrum.npz)")
    parser.add_argument("--timeout", type=float, default=15.0, help="Seconds to wait for both datasets.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        setup_logging()
        logger.error("Invalid configuration: %s", e)
        return 2
    if args.url:
        config.server.url = args.url
    setup_logging(level="DEBUG" if args.verbose else config.logging.level, log_file=config.logging.file)

    capture = SpectrumCapture()
    transport = RpcTransport(config.server.url, config.server.path, timeout=config.server.timeout)
    try:
        coordinator = JoinCoordinator(transport, capture)
        coordinator.start()
        rendered = coordinator.wait(args.timeout)
    finally:
        transport.close()

    if not rendered:
        logger.error("No spectrum received from %s", config.server.url)
        return 1
    logger.info("Spectrum received: %d points", len(capture.wavelengths))

    if args.dump:
        np.savez(args.dump, wavelengths=capture.wavelengths, intensities=capture.intensities)
        print(f"Spectrum dumped to {args.dump}")
    else:
        for nm, value in zip(capture.wavelengths, capture.intensities):
            print(f"{nm / config.view.value_scale:g}\t{value / config.view.value_scale:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
