"""
Logging setup shared by the corpus builder, the chat server and the CLI.

Every module logs through get_logger(__name__), so one call to setup_logging
routes all of them to the console and, when LOG_FILE is set, to a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "gita_guide"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[int, str]) -> int:
    # LOG_LEVEL arrives as a name; unknown names fall back to INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    (Re)configure the gita_guide logger.

    Safe to call more than once: earlier handlers are closed and replaced.

    Args:
        level: Level number or name such as "DEBUG"
        log_file: Optional file that also receives every record; its folder
            is created when missing
        format_string: Overrides LOG_FORMAT

    Returns:
        The gita_guide logger
    """
    level = _resolve_level(level)
    formatter = logging.Formatter(format_string or LOG_FORMAT, datefmt=DATE_FORMAT)

    app_logger = logging.getLogger(ROOT_LOGGER)
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Child of the gita_guide logger, e.g. gita_guide.vector_store.store."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
