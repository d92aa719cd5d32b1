"""Unified logging for wbtl with console and file output."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

PACKAGE_LOGGER = "wbtl"

# Log file configuration
LOG_DIR = Path.home() / ".local" / "state" / "wbtl"
LOG_FILE = LOG_DIR / "wbtl.log"
FALLBACK_LOG_FILE = Path("/tmp/wbtl.log")

# Track if file logging has been set up
_file_logging_configured = False


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Set up file logging for provisioning runs.

    Args:
        log_file: Path to log file (defaults to ~/.local/state/wbtl/wbtl.log)
        verbose: Enable debug-level logging

    Returns:
        Path of the log file in use

    Note:
        Falls back to /tmp if the log directory cannot be created.
    """
    global _file_logging_configured

    target_log_file = Path(log_file) if log_file else LOG_FILE

    if _file_logging_configured:
        return target_log_file

    try:
        target_log_file.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target_log_file = FALLBACK_LOG_FILE
        target_log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    file_formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    _file_logging_configured = True

    root_logger.info(f"wbtl logging initialized: {target_log_file}")
    return target_log_file


def _package_logger() -> logging.Logger:
    """Return the ``wbtl`` logger, which holds the level for every module logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with console output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger with Rich console handler

    Note:
        File logging must be enabled separately via setup_file_logging().
        Module loggers stay at NOTSET and inherit the level of the ``wbtl``
        logger, so --verbose reaches them too.
    """
    _package_logger()
    logger = logging.getLogger(name)

    # Only add console handler if not already present
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
