"""
Main entry point for the SWAPI Fetcher

Fetches every page of the people collection and prints each name on its own
line. Stops on SIGINT/SIGTERM or once the collection is exhausted, flushing
buffered names before exiting.

Usage:
    python -m swapi_fetcher.main

    # Custom start page
    python -m swapi_fetcher.main --url="https://swapi.dev/api/people/?page=3"

    # Also log to logs/swapi.log
    python -m swapi_fetcher.main --log-file
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import Optional, List, Dict, Any

from swapi_fetcher.config import get_config, load_config, set_config
from swapi_fetcher.coordination import FetcherCoordinator
from swapi_fetcher.utils.exceptions import ConfigError
from swapi_fetcher.utils.logging_config import get_logger, set_level, setup_file_logging

logger = get_logger("main")

# How often the main thread wakes up while waiting, so signals are handled promptly
WAIT_POLL_SECONDS = 0.1

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownRequest:
    """
    Signal handler that only records the signal.

    The main loop turns it into a stop request, so the handler never takes a
    lock the interrupted main thread might already hold.
    """

    def __init__(self):
        self.signum: Optional[int] = None

    def __call__(self, signum: int, frame) -> None:
        self.signum = signum


def run_pipeline(coordinator: FetcherCoordinator) -> Dict[str, Any]:
    """
    Run the pipeline until a shutdown signal arrives or data runs out.

    Args:
        coordinator: Not yet started coordinator

    Returns:
        Dict with run statistics
    """
    shutdown = ShutdownRequest()

    previous = {}
    try:
        for sig in SHUTDOWN_SIGNALS:
            previous[sig] = signal.signal(sig, shutdown)
    except ValueError:
        # Not in main thread, skip signal registration
        pass

    try:
        coordinator.start()
        while not coordinator.wait(timeout=WAIT_POLL_SECONDS):
            if shutdown.signum is not None:
                logger.info(f"Received signal {shutdown.signum}, shutting down...")
                coordinator.request_stop(f"signal {shutdown.signum}")
        return coordinator.stop()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="SWAPI Fetcher - Print every person's name from the paginated API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Default people collection
    python -m swapi_fetcher.main

    # Start from another page
    python -m swapi_fetcher.main --url="https://swapi.dev/api/people/?page=3"
        """
    )

    parser.add_argument(
        "--url",
        default=None,
        help="First page URL (default from config)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.json"
    )

    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Enable file logging to logs/swapi.log"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    set_config(config)

    set_level(config.logging.level)
    if args.log_file:
        log_dir = Path(config.logging.log_dir) if config.logging.log_dir else None
        log_file = setup_file_logging(log_dir)
        logger.info(f"Logging to {log_file}")

    coordinator = FetcherCoordinator(config=config, start_url=args.url)
    stats = run_pipeline(coordinator)

    logger.info("=== Pipeline Complete ===")
    for key, value in stats.items():
        logger.info(f"  {key}: {value}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
