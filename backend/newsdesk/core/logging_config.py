"""
Logging configuration.

Configures the root logger once at startup and keeps the log levels of
individual modules in one place.
"""

import copy
import logging

from newsdesk.core.config import settings


class ColorFormatter(logging.Formatter):
    """Adds ANSI colours to console log records"""

    COLORS = {
        'DEBUG': '\033[36m',  # cyan
        'INFO': '\033[32m',   # green
        'WARNING': '\033[33m',  # yellow
        'ERROR': '\033[31m',   # red
        'CRITICAL': '\033[41m\033[37m',  # white on red
        'RESET': '\033[0m'
    }

    def __init__(self, fmt):
        super().__init__(fmt)

    def format(self, record):
        # other handlers share the record, so colour a copy
        record = copy.copy(record)
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
            record.msg = f"{self.COLORS[levelname]}{record.msg}{self.COLORS['RESET']}"
        return super().format(record)


def configure_logging():
    """Configure application logging"""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColorFormatter(log_format))
    root_logger.addHandler(console_handler)

    module_levels = {
        # Database
        "sqlalchemy": logging.WARNING,

        # Web server; access logs only from WARNING up
        "uvicorn": logging.INFO,
        "uvicorn.access": logging.WARNING,

        # Other libraries
        "passlib": logging.WARNING,
        "httpx": logging.WARNING,

        # Application
        "newsdesk.api": logging.INFO,
        "newsdesk": logging.INFO,
        "main": logging.INFO,
    }

    for module, level in module_levels.items():
        logging.getLogger(module).setLevel(level)

    if settings.DEBUG:
        logging.getLogger("newsdesk").setLevel(logging.DEBUG)
        # SQL statements
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    logging.getLogger(__name__).info(f"Logging configured, level: {settings.LOG_LEVEL}")
