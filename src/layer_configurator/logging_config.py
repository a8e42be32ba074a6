"""Logging configuration for Layer Configurator.

Provides centralized logging setup with file and console handlers.
Log files are stored in the configuration directory.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure package-wide logging.

    Sets up logging to file and, in debug mode, to the console.

    Args:
        debug: If True, also log to console at DEBUG level
        log_dir: Directory for the log file, defaults to the configuration directory

    Returns:
        The root logger for the package
    """
    if log_dir is None:
        from .config.paths import ConfigPaths

        log_dir = ConfigPaths().ensure_config_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "layer_configurator.log"

    logger = logging.getLogger("layer_configurator")
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # File handler - always logs DEBUG and above
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    # Console handler - only in debug mode
    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            "%(levelname)s - %(name)s - %(message)s"
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: Module name (e.g., 'configuration', 'file_format')

    Returns:
        A logger instance for the module
    """
    return logging.getLogger(f"layer_configurator.{name}")
