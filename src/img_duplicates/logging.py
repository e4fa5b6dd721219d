import logging
import os

ENV_LOG_LEVEL = "IMG_DUPLICATES_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(name: str) -> int:
    """
    Pick the level for logger ``name``.

    Library modules default to WARNING so hashing and grouping stay quiet,
    the CLI defaults to INFO. A level name in IMG_DUPLICATES_LOG_LEVEL
    overrides both; anything ``logging`` does not know falls back to the
    default.
    """
    default_level = logging.INFO if name.endswith(".cli") else logging.WARNING

    value = os.getenv(ENV_LOG_LEVEL)
    if not value:
        return default_level

    # getLevelName maps registered names to their number, anything else to a string
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    return default_level


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(name))
    return logger
