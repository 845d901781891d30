import logging
import sys

from tokenswap.config import get_log_sub_directory, get_log_level_label, get_logging_enabled, \
    get_log_root_directory, get_audit_log_enabled
from tokenswap.logs.formatters import standard_formatter, audit_formatter
from tokenswap.logs.handlers import log_to_handler_by_level, get_rotating_file_handler
from tokenswap.logs.log_directory import get_log_directory, now_string

AUDIT_LOGGER_SUFFIX = '.audit'


def enable_default_logging_to_stdout(tool_name: str) -> logging.Handler:
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(standard_formatter)
    level_per_name = {
        '': logging.WARNING,
        '__main__': logging.INFO,
        'eval': logging.INFO,
        'tests': logging.INFO,
        tool_name: logging.INFO,
    }
    log_to_handler_by_level(stdout_handler, level_per_name)
    return stdout_handler


def get_default_log_directory(tool_name: str) -> str:
    root_log_directory = get_log_root_directory(tool_name)
    log_sub_directory = get_log_sub_directory(tool_name)
    return get_log_directory(root_log_directory, log_sub_directory, True)


def enable_default_logging_to_file(tool_name: str) -> logging.Handler:
    log_directory = get_default_log_directory(tool_name)
    log_level_label = get_log_level_label(tool_name)
    handler = get_rotating_file_handler(log_directory, log_level_label.lower() + '.log', log_level_label)

    log_level = logging.getLevelName(log_level_label)
    level_per_name = {
        '': logging.INFO,
        '__main__': log_level,
        'eval': log_level,
        'tests': log_level,
        tool_name: log_level,
    }
    log_to_handler_by_level(handler, level_per_name)
    return handler


def enable_audit_logging_to_file(tool_name: str) -> logging.Handler:
    """
    Settlement and refund records of "<tool_name>.audit" additionally go to their own file
    """
    audit_logger_name = tool_name + AUDIT_LOGGER_SUFFIX
    handler = get_rotating_file_handler(get_default_log_directory(tool_name), 'audit.log', logging.INFO,
                                        formatter=audit_formatter)
    log_to_handler_by_level(handler, {audit_logger_name: logging.INFO}, logger_name=audit_logger_name)
    logging.getLogger(audit_logger_name).setLevel(logging.INFO)
    return handler


def enable_default_logging_on_flag(tool_name: str):
    if get_logging_enabled(tool_name):
        # override default behavior which blocks lower levels
        logging.getLogger('').setLevel(logging.NOTSET)

        enable_default_logging_to_stdout(tool_name)
        file_handler = enable_default_logging_to_file(tool_name)

        logger = logging.getLogger(__name__)
        logger.info('Enabled default logging to %s at %s', file_handler.baseFilename, now_string)

    if get_audit_log_enabled(tool_name):
        audit_handler = enable_audit_logging_to_file(tool_name)
        logging.getLogger(__name__).info('Enabled audit logging to %s', audit_handler.baseFilename)
