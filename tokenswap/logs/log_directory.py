import os
from datetime import datetime
from typing import Optional

now = datetime.now()
now_string = now.strftime("%Y-%m-%d__%H-%M-%S__%f")

LOG_DIRECTORY_PREFIX = 'log__'


def get_log_directory(log_root_directory: str, log_sub_directory: Optional[str] = None, use_time_sub_directory=False) -> str:
    """
    Directory for the logs of this process, optionally isolated in a "log__<time>__<pid>" sub-directory
    """
    parts = [log_root_directory]
    if log_sub_directory is not None:
        parts.append(log_sub_directory)
    if use_time_sub_directory:
        parts.append(LOG_DIRECTORY_PREFIX + now_string + '__' + str(os.getpid()))
    return os.path.join(*parts)
