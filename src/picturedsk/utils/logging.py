"""
Logging configuration for PictureDSK.

Console output goes through rich's RichHandler; an optional log file gets
the full timestamped record of every run.
"""

import logging
import platform
import sys
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Handlers added by setup_logging
_installed_handlers: List[logging.Handler] = []


def setup_logging(log_file: Optional[Union[str, Path]] = None,
                  level: int = logging.INFO,
                  console: Optional[Console] = None) -> None:
    """
    Configure logging for the application.

    The console handler shows `level` and above. When `log_file` is given,
    everything from DEBUG up is also written there.

    Args:
        log_file: Path to log file (default: no file logging)
        level: Console logging level (default: logging.INFO)
        console: Rich console to log to (default: stderr)

    Example:
        >>> setup_logging("picturedsk.log", logging.DEBUG)
        >>> logging.info("Application started")
    """
    root = logging.getLogger()
    # Replace handlers from an earlier call, leave any others alone
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG if log_file else level)

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root.addHandler(file_handler)
        _installed_handlers.append(file_handler)

        log_system_info()


def log_system_info() -> None:
    """Log interpreter and platform details for troubleshooting."""
    from picturedsk import __version__

    logging.debug("=" * 60)
    logging.debug("PictureDSK %s - System Information", __version__)
    logging.debug("=" * 60)
    logging.debug("Platform: %s %s", platform.system(), platform.release())
    logging.debug("Machine: %s", platform.machine())
    logging.debug("Python version: %s", sys.version)
    logging.debug("=" * 60)


def log_operation(operation: str, details: str, level: int = logging.INFO) -> None:
    """
    Log an operation with details.

    Args:
        operation: Name of the operation (e.g., "encode_track", "save")
        details: Additional details about the operation
        level: Logging level (default: logging.INFO)

    Example:
        >>> log_operation("encode_track", "track 0: 50632 bits", logging.DEBUG)
    """
    logging.log(level, "%s: %s", operation, details)


def log_performance(operation: str, duration: float, **metrics) -> None:
    """
    Log performance metrics for an operation.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        **metrics: Additional metrics (e.g., tracks=46, bytes=312588)

    Example:
        >>> log_performance("build_disk", 0.42, tracks=46)
    """
    metrics_str = ", ".join(f"{k}={v}" for k, v in metrics.items())
    logging.info("Performance - %s: %.2fs, %s", operation, duration, metrics_str)
