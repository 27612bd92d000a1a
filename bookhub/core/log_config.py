"""
Logging Setup
=============

Single place where the root logger is configured for the service.
Modules only ever call ``logging.getLogger(__name__)``.
"""
import logging
from typing import Optional

from bookhub.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install one stream handler on the root logger.
    
    Calling it twice does not duplicate handlers.
    
    Args:
        level: Log level name; defaults to LOG_LEVEL from settings
    """
    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    if not any(getattr(h, "_bookhub", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._bookhub = True
        root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
