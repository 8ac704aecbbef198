"""Mini README: Application-wide logging helpers for Campus Ledger.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - installs the root handler exactly once.
    * level_for_environment - default level for an environment label.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)``. The root handler is
    installed on first use only, so reloading modules during development
    does not stack duplicate handlers. Launchers call
    ``configure_root_logger`` with an explicit level to adjust verbosity.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[int] = None) -> None:
    """Configure the root logger with a timestamped, module-aware formatter."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(logging.INFO if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def level_for_environment(environment: str) -> int:
    """Development environments log at DEBUG, everything else at INFO."""

    return logging.DEBUG if environment.strip().lower() in {"development", "dev", "local"} else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
