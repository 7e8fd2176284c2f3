"""Logging helpers for arenaodds."""

from __future__ import annotations

import logging
from typing import Iterable


def configure_logging(
    level: int | str = logging.INFO,
    handlers: Iterable[logging.Handler] | None = None,
) -> None:
    """Configure root logging for interactive sessions.

    Library modules only emit DEBUG and WARNING records through
    ``logging.getLogger(__name__)``; applications embedding the package call
    this helper to establish a consistent format.  Unknown level names raise
    ``ValueError``.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=list(handlers) if handlers else None,
    )
