import logging
import os
import sys

from dotenv import find_dotenv, load_dotenv

# .env must be loaded before LOGGING_LEVEL is read
load_dotenv(find_dotenv(usecwd=True))

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

default_level = os.getenv("LOGGING_LEVEL", "INFO").upper()
if default_level not in VALID_LEVELS:
    default_level = "INFO"

# stdout is reserved for the classification result
logging.basicConfig(
    level=getattr(logging, default_level),
    format="%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger("textcheck")
logger.setLevel(getattr(logging, default_level))

# Shortcut aliases
debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception


def get_logger():
    return logger


def set_logging_level(level: str) -> bool:
    normalized_level = level.upper()
    if normalized_level not in VALID_LEVELS:
        logging.getLogger().warning(
            f"Invalid logging level: {level}. Level not changed."
        )
        return False
    new_level = getattr(logging, normalized_level)
    logging.getLogger().setLevel(new_level)
    logger.setLevel(new_level)
    logger.debug(f"Logging level changed to: {normalized_level}")
    return True
