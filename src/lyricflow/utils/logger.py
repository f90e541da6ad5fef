import logging
import sys
from typing import Union

ROOT_LOGGER = "lyricflow"


def _root() -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    # stderr only: stdout carries rendered subtitles
    handler = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter("[%(levelname)s] %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    root = _root()
    if name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    # children propagate to the root handler
    return logging.getLogger(name)


def set_level(level: Union[int, str]) -> None:
    _root().setLevel(level)
