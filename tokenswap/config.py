import os
from typing import Optional

from appdirs import user_log_dir

# environment variables (always prefixed by "TOKENSWAP_")
TOOL_NAME = 'tokenswap'
LOG_SUB_DIRECTORY = 'LOG_SUB_DIRECTORY'
LOG_DIRECTORY = 'LOG_DIRECTORY'
LOG_LEVEL = 'LOG_LEVEL'
LOGGING_ENABLED = 'LOGGING_ENABLED'
AUDIT_LOG = 'AUDIT_LOG'
DATA_LOG_FILE = 'DATA_LOG_FILE'
PROGRAM_ID = 'PROGRAM_ID'

# 32 bytes, sha256(b"tokenswap-program")
DEFAULT_PROGRAM_ID = '41a82b2df33d0a0870e7e121c43361c33a248e3394b780137a6e6baebca5800f'


def env_key(tool_name: str, key: str) -> str:
    return tool_name.upper() + '_' + key


def get_log_root_directory(tool_name: str = TOOL_NAME) -> str:
    default_logging_dir = user_log_dir(tool_name)
    return os.getenv(env_key(tool_name, LOG_DIRECTORY), default_logging_dir)


def get_log_sub_directory(tool_name: str = TOOL_NAME) -> str:
    return os.getenv(env_key(tool_name, LOG_SUB_DIRECTORY), 'default')


def get_log_level_label(tool_name: str = TOOL_NAME) -> str:
    return os.getenv(env_key(tool_name, LOG_LEVEL), 'INFO').upper()


def get_logging_enabled(tool_name: str = TOOL_NAME) -> bool:
    return get_environment_variable_bool(env_key(tool_name, LOGGING_ENABLED), False)


def get_audit_log_enabled(tool_name: str = TOOL_NAME) -> bool:
    return get_environment_variable_bool(env_key(tool_name, AUDIT_LOG), False)


def get_data_log_file(tool_name: str = TOOL_NAME) -> Optional[str]:
    return os.getenv(env_key(tool_name, DATA_LOG_FILE))


def get_program_id(tool_name: str = TOOL_NAME) -> bytes:
    """
    Returns: the 32 bytes identifying the swap program, used as the final seed of every derived address
    """
    raw = os.getenv(env_key(tool_name, PROGRAM_ID), DEFAULT_PROGRAM_ID)
    try:
        program_id = bytes.fromhex(raw)
    except ValueError:
        raise ValueError(f'Cannot interpret "{raw}" as a hex-encoded program id')
    if len(program_id) != 32:
        raise ValueError(f'Program id must be 32 bytes, got {len(program_id)}')
    return program_id


###########
# HELPERS #
###########


def string_to_bool(s: Optional[str], default: bool) -> bool:
    if s is None:
        return default
    s = s.strip().lower()
    if s in ['true', '1', 't', 'y', 'yes', 'on']:
        return True
    elif s in ['false', '0', 'f', 'n', 'no', 'off', '']:
        return False
    else:
        raise ValueError(f'Cannot interpret "{s}" as a boolean')


def get_environment_variable_bool(key: str, default: bool) -> bool:
    return string_to_bool(os.environ.get(key), default=default)
