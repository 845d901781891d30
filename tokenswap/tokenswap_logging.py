import logging

from tokenswap.logs.default_logging import enable_default_logging_on_flag, AUDIT_LOGGER_SUFFIX

# enable default logging
enable_default_logging_on_flag('tokenswap')

# allow importing necessary logging functionality from this package (this implicitly enabling default logging)
getLogger = logging.getLogger


def getAuditLogger() -> logging.Logger:
    """
    Logger receiving one record per settled or refunded offer
    """
    return logging.getLogger('tokenswap' + AUDIT_LOGGER_SUFFIX)
