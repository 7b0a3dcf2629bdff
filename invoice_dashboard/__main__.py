"""Entry point for running the dashboard as a module."""

import argparse
import atexit
import logging
import signal
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import ValidationError

from .app import DashboardApp
from .models.config import Config

# Global reference for signal handlers
_app: DashboardApp | None = None
_logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", log_dir: Path = Path("logs"), console: bool = False) -> None:
    """Configure logging with rotation support.

    The terminal belongs to the UI while the app runs, so records go to a
    rotating file. Console output is used only when requested or when the
    log directory is not writable.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the rotating log file
        console: Also log to stderr
    """
    handlers: list[logging.Handler] = []

    try:
        log_dir.mkdir(exist_ok=True)
        # Rotate at 10MB, keep 5 backup files
        handlers.append(
            RotatingFileHandler(
                log_dir / "invoice_dashboard.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
        )
    except (PermissionError, OSError):
        console = True

    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def _signal_handler(signum: int, frame: object) -> None:
    """Handle shutdown signals gracefully.

    Args:
        signum: Signal number received
        frame: Current stack frame (unused)
    """
    signal_name = signal.Signals(signum).name
    _logger.info(f"Received {signal_name}, shutting down...")

    if _app is not None:
        _app.exit()


def _cleanup() -> None:
    """Cleanup handler called on exit."""
    _logger.info("Invoice Dashboard shutdown complete")


def setup_signal_handlers() -> None:
    """Set up signal handlers for graceful shutdown."""
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)
    atexit.register(_cleanup)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="invoice-dashboard",
        description="Invoice Dashboard - a terminal dashboard for revenue and invoices",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.json"),
        help="Path to configuration file (default: config.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--delay",
        type=float,
        metavar="SECONDS",
        help="Artificial delay before the page renders (0 disables it)",
    )
    parser.add_argument(
        "--no-streaming",
        action="store_true",
        help="Show the page only once every region has loaded",
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command line overrides to a loaded configuration."""
    page = config.page
    if args.delay is not None:
        page = page.model_copy(
            update={"delay_enabled": args.delay > 0, "delay_seconds": max(args.delay, 0.0)}
        )
    if args.no_streaming:
        page = page.model_copy(update={"streaming": False})
    return config.model_copy(update={"page": page})


def main() -> None:
    """Main entry point."""
    global _app

    args = build_parser().parse_args()

    if args.version:
        from . import __version__

        print(f"Invoice Dashboard v{__version__}")
        sys.exit(0)

    if not args.config.exists():
        print(f"Config file not found: {args.config}")
        print("\nStarting with default configuration (placeholder data)...")
        print("Create a config.json file to customize. See config.example.json for format.")

    try:
        config = apply_overrides(Config.load_or_default(args.config), args)
    except (ValidationError, ValueError) as e:
        print(f"Invalid configuration in {args.config}:\n{e}", file=sys.stderr)
        sys.exit(2)

    setup_logging("DEBUG" if args.verbose else config.settings.log_level)
    setup_signal_handlers()

    _logger.info("Starting Invoice Dashboard")

    _app = DashboardApp(config=config)
    _app.run()


if __name__ == "__main__":
    main()
