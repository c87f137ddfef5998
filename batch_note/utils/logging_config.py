"""
Centralized logging configuration for BatchNote

One file log in the user data folder (always at DEBUG) plus console
output whose level the command-line host picks.
"""
import logging
import sys
from pathlib import Path
from typing import List

from ..config import Config


class LoggingConfig:
    """Central logging configuration"""

    _initialized = False
    _handlers: List[logging.Handler] = []

    @classmethod
    def setup_logging(cls, log_dir: Path, console_level: int = logging.INFO):
        """
        Attach file and console handlers to the root logger (once per process)

        Args:
            log_dir: Folder for the log file, created if missing
            console_level: Minimum level echoed to stdout
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)

        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        cls._handlers = [
            cls._build_file_handler(log_dir / Config.LOG_FILE_NAME),
            cls._build_console_handler(console_level),
        ]
        for handler in cls._handlers:
            root.addHandler(handler)

        cls._initialized = True
        root.debug(f"Logging to {log_dir / Config.LOG_FILE_NAME}")

    @classmethod
    def shutdown(cls):
        """Detach and close the handlers added by setup_logging()."""
        root = logging.getLogger()
        for handler in cls._handlers:
            root.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._initialized = False

    @staticmethod
    def _build_file_handler(log_path: Path) -> logging.Handler:
        handler = logging.FileHandler(log_path, encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(Config.LOG_FILE_FORMAT, datefmt=Config.LOG_DATE_FORMAT))
        return handler

    @staticmethod
    def _build_console_handler(level: int) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(Config.LOG_CONSOLE_FORMAT))
        return handler


__all__ = ['LoggingConfig']
