"""
Logger module - Centralized logging configuration for pyclue.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "pyclue"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    return level


def _is_child(name: str) -> bool:
    return name.startswith(ROOT_LOGGER_NAME + ".")


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get a configured logger instance.
    
    Loggers under the pyclue namespace inherit their level from the
    "pyclue" logger unless one is given; others default to INFO.
    
    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional logging level, numeric or by name
    
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # Children of "pyclue" get their own handler; don't print twice.
        logger.propagate = False
    
    if level is not None:
        logger.setLevel(_resolve_level(level))
    elif logger.level == logging.NOTSET and not _is_child(name):
        logger.setLevel(logging.INFO)
    
    return logger


def set_level(level: Union[int, str]) -> None:
    """
    Set the level for the whole pyclue namespace.
    
    The level is set on the "pyclue" logger; existing children are reset
    so that they, and any created later, inherit it.
    
    Args:
        level: Logging level, numeric or by name
    """
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(_resolve_level(level))
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if _is_child(name) and isinstance(logger, logging.Logger):
            logger.setLevel(logging.NOTSET)


# Module-level logger for pyclue
pyclue_logger = get_logger(ROOT_LOGGER_NAME)
