from __future__ import annotations

import logging
from typing import Optional, Union

from .settings import get_settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> int:
    """Configure root logging for applications embedding the library.

    When ``level`` is omitted the ``log_level`` setting is used. Returns the
    numeric level that was applied.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level}")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("observable_collections").setLevel(level)
    return level
