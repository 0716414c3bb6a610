"""Root logger setup for CLI invocations."""

from __future__ import annotations

import logging

from rccforge.config import RccforgeConfig


def configure_logging(verbose: bool = False, settings: RccforgeConfig | None = None) -> None:
    """Configure the root logger from ``RccforgeConfig.log_level``.

    ``--verbose`` lowers the level to INFO so reasons and commands show up.
    A no-op when the root logger already has handlers.
    """
    settings = settings or RccforgeConfig()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbose:
        level = min(level, logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
