#!/usr/bin/env python3
"""
Centralized Logging Configuration for asroute

Provides standardized logging setup with:
- Console output on stderr (stdout carries the annotated trace)
- Optional rotating file output
- Configurable log levels
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict

from asroute.utils.config import get_config


class ASRouteFormatter(logging.Formatter):
    """Formatter for asroute diagnostics"""

    # Color codes for console output
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, include_module: bool = True):
        """
        Initialize formatter

        Args:
            use_colors: Use ANSI color codes for console output
            include_module: Include module name in log output
        """
        self.use_colors = use_colors and sys.stderr.isatty()
        self.include_module = include_module

        if include_module:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        super().__init__(fmt=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record):
        """Format log record with optional colors"""
        formatted = super().format(record)

        if hasattr(record, "duration"):
            formatted += f" [took {record.duration:.3f}s]"

        if self.use_colors and record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]
            formatted = f"{color}{formatted}{self.RESET}"

        return formatted


class ASRouteLogger:
    """Logger wrapper for asroute operations"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.name = name

    def log_lookup(self, as_number: int, success: bool, duration: float = None):
        """Log an AS name lookup result"""
        level = logging.DEBUG
        status = "resolved" if success else "failed"

        record = self.logger.makeRecord(
            name=self.logger.name,
            level=level,
            fn="",
            lno=0,
            msg=f"Lookup {status} for AS{as_number}",
            args=(),
            exc_info=None,
        )
        if duration is not None:
            record.duration = duration

        if self.logger.isEnabledFor(level):
            self.logger.handle(record)

    # Standard logging method delegation
    def debug(self, msg, *args, **kwargs):
        return self.logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        return self.logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        return self.logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        return self.logger.error(msg, *args, **kwargs)

    def critical(self, msg, *args, **kwargs):
        return self.logger.critical(msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        return self.logger.exception(msg, *args, **kwargs)


def setup_logging(
    config_manager=None,
    level: str = None,
    log_to_file: bool = None,
    log_file: str = None,
    console_colors: bool = True,
    include_modules: bool = True,
) -> Dict[str, logging.Handler]:
    """
    Setup centralized logging for asroute

    Args:
        config_manager: Configuration manager instance
        level: Log level override
        log_to_file: Enable file logging override
        log_file: Log file path override
        console_colors: Use colors in console output
        include_modules: Include module names in log format

    Returns:
        Dictionary of configured handlers
    """
    if config_manager is None:
        logging_config = get_config().logging
    else:
        logging_config = config_manager.get_config().logging

    if level is None:
        level = logging_config.level
    if log_to_file is None:
        log_to_file = logging_config.log_to_file
    if log_file is None:
        log_file = logging_config.log_file

    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = {}

    # Console handler - never stdout, downstream tools read that
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        ASRouteFormatter(use_colors=console_colors, include_module=include_modules)
    )
    root_logger.addHandler(console_handler)
    handlers["console"] = console_handler

    if log_to_file and log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(ASRouteFormatter(use_colors=False, include_module=True))
        root_logger.addHandler(file_handler)
        handlers["file"] = file_handler

    logger = logging.getLogger("asroute.logging")
    logger.debug(f"Logging configured: level={level}, handlers={list(handlers.keys())}")

    return handlers


def get_logger(name: str) -> ASRouteLogger:
    """
    Get asroute logger

    Args:
        name: Logger name (typically __name__)

    Returns:
        ASRouteLogger instance
    """
    return ASRouteLogger(name)
