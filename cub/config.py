import logging
import os

REPO_DIR_NAME = ".cub"
OBJECTS_DIR_NAME = "objects"
HEAD_FILE_NAME = "HEAD"
INDEX_FILE_NAME = "index"

DEFAULT_AUTHOR = "anonymous"
AUTHOR_ENV_VARS = ("CUB_AUTHOR", "USERNAME")

LOG_LEVEL_ENV_VAR = "CUB_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

def get_author() -> str:
    for var in AUTHOR_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value
    return DEFAULT_AUTHOR

def get_log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING
