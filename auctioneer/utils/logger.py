"""
Centralized logging configuration for Auctioneer.

Colored console output plus an optional log file, with one child logger
per subsystem (storage, scheduler, repository, config, cli).
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import colorlog


class AuctioneerLogger:
    """Centralized logger for Auctioneer components"""

    ROOT = "auctioneer"

    _initialized = False
    _log_dir: Optional[Path] = None
    _file_handler: Optional[logging.Handler] = None

    @classmethod
    def setup(
        cls,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
    ):
        """
        Setup logging configuration.

        Loggers are created at import time, which runs a default setup; a
        later call (e.g. from the CLI) adjusts the level and can still add
        the file handler.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for log files. If None, uses ./logs
            log_to_file: Whether to write logs to file
        """
        root_logger = logging.getLogger(cls.ROOT)
        root_logger.setLevel(level)

        if not cls._initialized:
            root_logger.handlers.clear()

            # Console handler with colors
            console_handler = colorlog.StreamHandler(sys.stdout)
            console_formatter = colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )
            console_handler.setFormatter(console_formatter)
            root_logger.addHandler(console_handler)
            cls._initialized = True

        if log_to_file and cls._file_handler is None:
            cls._log_dir = Path(log_dir) if log_dir else Path("logs")
            cls._log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(cls._log_dir / "auctioneer.log")
            file_formatter = logging.Formatter(
                "%(asctime)s [%(name)s] %(levelname)-8s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)
            cls._file_handler = file_handler

        for handler in root_logger.handlers:
            handler.setLevel(level)

    @classmethod
    def reset(cls):
        """Remove all handlers and close the log file."""
        root_logger = logging.getLogger(cls.ROOT)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        cls._initialized = False
        cls._log_dir = None
        cls._file_handler = None


    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger for a specific subsystem.

        Args:
            name: Subsystem name (e.g., 'storage.sqlite', 'scheduler')

        Returns:
            Logger instance
        """
        if not cls._initialized:
            cls.setup()

        return logging.getLogger(f"{cls.ROOT}.{name}")


# Convenience functions
def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific subsystem"""
    return AuctioneerLogger.get_logger(name)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    """Setup logging configuration"""
    AuctioneerLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file)
