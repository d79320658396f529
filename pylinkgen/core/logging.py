# -*- coding: utf-8 -*-
"""
pylinkgen/core/logging.py - Logging setup

Unified logger configuration for the pylinkgen package. Console output goes
to stderr so that commands printing data on stdout stay pipe-friendly.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


# Log formats
DETAILED_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s (%(filename)s:%(lineno)d): %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

ROOT_LOGGER_NAME = "pylinkgen"


class ColoredFormatter(logging.Formatter):
    """
    Colored log formatter (terminal only)
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, use_colors=True, stream=None) -> None:
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record) -> str:
        if self.use_colors:
            # Copy so that other handlers still see the plain level name
            record = logging.makeLogRecord(record.__dict__)
            color = self.COLORS.get(record.levelname, '')
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class PyLinkGenLogger:
    """
    pylinkgen logger manager

    Provides a single place to configure handlers for the package root logger.
    """

    _configured = False
    _root_logger = None

    @classmethod
    def setup(
        cls,
        level: str = "INFO",
        log_file: Optional[Path] = None,
        detailed: bool = False,
        use_colors: bool = True
    ):
        """
        Configure the logging system

        Args:
            level: Log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
            log_file: Optional log file path
            detailed: Use the detailed format
            use_colors: Use colored console output
        """
        if cls._configured:
            cls.set_level(level)
            return

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(getattr(logging, level.upper(), logging.INFO))

        fmt = DETAILED_FORMAT if detailed else SIMPLE_FORMAT

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter(fmt, use_colors=use_colors))
        root.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
            root.addHandler(file_handler)

        cls._root_logger = root
        cls._configured = True

    @classmethod
    def set_level(cls, level: str) -> None:
        """Change the log level at runtime"""
        if cls._root_logger:
            cls._root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    @classmethod
    def reset(cls) -> None:
        """Detach and close installed handlers so the next setup() starts fresh"""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        cls._root_logger = None
        cls._configured = False


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    detailed: bool = False
):
    """Shortcut for PyLinkGenLogger.setup"""
    PyLinkGenLogger.setup(
        level=level,
        log_file=Path(log_file) if log_file else None,
        detailed=detailed
    )


def setup_logging_from_config(config) -> None:
    """
    Configure logging from a PyLinkGenConfig object

    Args:
        config: PyLinkGenConfig instance
    """
    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        detailed=(config.log_level.upper() == "DEBUG")
    )
