import logging
import logging.handlers as logging_handlers
import os
from typing import Dict, Optional

from tokenswap.logs.formatters import full_formatter


class FilterPerName(logging.Filter):
    """
    Filter which only preserves log records whose level lies above a given threshold (defined per logger name prefix)
    """

    def __init__(self, level_per_name: Dict[str, int]):
        self.level_per_name = level_per_name
        super().__init__()

    def filter(self, log_record: logging.LogRecord) -> bool:
        for name, level in self.level_per_name.items():
            if log_record.name.startswith(name) and log_record.levelno >= level:
                return True
        return False


def log_to_handler_by_level(handler: logging.Handler, level_per_name: Dict[str, int], logger_name: str = ''):
    """
    Pass log records reaching logger "logger_name" to handler if they satisfy "level_per_name"
    """
    handler.addFilter(FilterPerName(level_per_name))
    logging.getLogger(logger_name).addHandler(handler)


def get_rotating_file_handler(
        log_directory: str,
        file_name: str,
        log_level: Optional[str | int] = None,
        formatter: Optional[logging.Formatter] = full_formatter,
        max_bytes=10_000_000,
        backup_count=30,
        encoding='utf-8'
) -> logging_handlers.RotatingFileHandler:
    """

    Args:
        log_directory: the directory to place all logs into (created if missing)
        file_name: the basename of the files
        log_level: ignore records below this level
        formatter: formatter applied to all records
        max_bytes: rollover after bytes (default: 10MB)
        backup_count: only keep the backup_count most recent files
        encoding: open file with this encoding

    Returns: a handler which defers opening the file until the first record is emitted

    """
    os.makedirs(log_directory, exist_ok=True)
    path = os.path.join(log_directory, file_name)

    file_handler = logging_handlers.RotatingFileHandler(
        path,
        mode='a',
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding=encoding,
        delay=True
    )

    if log_level is not None:
        file_handler.setLevel(log_level)
    if formatter is not None:
        file_handler.setFormatter(formatter)

    return file_handler
