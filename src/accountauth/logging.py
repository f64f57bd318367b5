"""
Centralized logging configuration for accountauth.

Provides:
- Console logging with colored, prefixed output by component area
- Optional file logging with timestamps for post-mortem analysis
- Logger factory for the handshake, client and lifecycle layers

Nothing logged through these loggers may contain a mnemonic, seed,
private key, bearer token or signature.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_CYAN = "\033[96m"


AREA_CONFIG = {
    "main": {"color": Colors.BRIGHT_CYAN, "prefix": "AUTH.main"},
    "client": {"color": Colors.BLUE, "prefix": "AUTH.client"},
    "protocol": {"color": Colors.MAGENTA, "prefix": "AUTH.protocol"},
    "lifecycle": {"color": Colors.BRIGHT_GREEN, "prefix": "AUTH.lifecycle"},
    "store": {"color": Colors.CYAN, "prefix": "AUTH.store"},
    "cli": {"color": Colors.GREEN, "prefix": "AUTH.cli"},
}

DEFAULT_AREA_CONFIG = {"color": Colors.WHITE, "prefix": "AUTH"}


class ColoredConsoleFormatter(logging.Formatter):
    """Adds colors and area prefixes to console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DIM,
        logging.INFO: Colors.RESET,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BRIGHT_RED + Colors.BOLD,
    }

    def __init__(self, area: str = "main"):
        super().__init__()
        config = AREA_CONFIG.get(area, DEFAULT_AREA_CONFIG)
        self.area_color = config["color"]
        self.area_prefix = config["prefix"]

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.LEVEL_COLORS.get(record.levelno, Colors.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        # Format: [AUTH.area] HH:MM:SS LEVEL: message
        prefix = f"{self.area_color}[{self.area_prefix}]{Colors.RESET}"
        time_str = f"{Colors.DIM}{timestamp}{Colors.RESET}"
        level_str = f"{level_color}{record.levelname:<8}{Colors.RESET}"

        return f"{prefix} {time_str} {level_str} {record.getMessage()}"


class FileFormatter(logging.Formatter):
    """Formatter for file output with full timestamps."""

    def __init__(self, area: str = "main"):
        super().__init__()
        config = AREA_CONFIG.get(area, DEFAULT_AREA_CONFIG)
        self.area_prefix = config["prefix"]

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        extra = ""
        if hasattr(record, "operation"):
            extra += f" operation={record.operation}"

        return f"{timestamp} [{self.area_prefix}] {record.levelname}: {record.getMessage()}{extra}"


_log_dir: Optional[Path] = None
_log_path: Optional[Path] = None
_file_level: int = logging.DEBUG


def setup_logging(
    log_dir: Optional[str] = None,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Initialize file logging.

    Args:
        log_dir: Directory for log files. Defaults to ./logs
        file_level: Minimum level for file output

    Returns:
        Path to the log directory
    """
    global _log_dir, _log_path, _file_level

    _log_dir = Path(log_dir) if log_dir else Path.cwd() / "logs"
    _log_dir.mkdir(parents=True, exist_ok=True)

    log_filename = datetime.now().strftime("accountauth_%Y%m%d_%H%M%S.log")
    _log_path = _log_dir / log_filename
    _file_level = file_level

    # Loggers created before this call get the file handler attached late
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith("accountauth.") and isinstance(existing, logging.Logger):
            _attach_file_handler(existing, name.split(".", 1)[1])

    return _log_dir


def _attach_file_handler(logger: logging.Logger, area: str) -> None:
    if _log_path is None:
        return
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            if handler.baseFilename == os.path.abspath(_log_path):
                return
            logger.removeHandler(handler)
            handler.close()
    area_file_handler = logging.FileHandler(_log_path, encoding="utf-8", delay=True)
    area_file_handler.setLevel(_file_level)
    area_file_handler.setFormatter(FileFormatter(area))
    logger.addHandler(area_file_handler)


def get_logger(area: str = "main", console_level: int = logging.WARNING) -> logging.Logger:
    """
    Get a logger for a specific component area.

    Args:
        area: The component area (e.g., "client", "protocol", "lifecycle")
        console_level: Minimum level echoed to the console

    Returns:
        Configured logger instance

    Example:
        logger = get_logger("lifecycle")
        logger.info("Session established")
        # Output: [AUTH.lifecycle] 14:32:15 INFO     Session established
    """
    logger = logging.getLogger(f"accountauth.{area}")

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(ColoredConsoleFormatter(area))
        logger.addHandler(console_handler)

        _attach_file_handler(logger, area)

    return logger


def get_log_dir() -> Optional[Path]:
    """Get the current log directory path."""
    return _log_dir
