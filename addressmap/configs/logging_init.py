"""
Centralized logging initialization.

Every module logs through the ``logger`` exported here so that the CLI and
the Dash server share one verbosity setting.
"""

import logging
from typing import Optional

from addressmap.configs.custom_logging import format_pydantic, setup_logging
from addressmap.configs.settings_models import Settings

__all__ = ["logger", "initialize_loggers", "format_pydantic"]

settings = Settings()

logger = setup_logging(__name__, level=settings.logging.verbosity_level)


def initialize_loggers(
    verbose: Optional[bool] = True,
    verbose_level: Optional[str] = None,
) -> logging.Logger:
    """
    Reconfigure the shared logger.

    Args:
        verbose: When False only critical records are emitted
        verbose_level: Level name (DEBUG, INFO, ...). If None, uses settings.

    Returns:
        The configured logger instance
    """
    if verbose_level is None:
        verbose_level = settings.logging.verbosity_level

    level = verbose_level if verbose else "CRITICAL"
    return setup_logging(__name__, level=level)
