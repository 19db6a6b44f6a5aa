"""Logging helpers shared by all orderfeed modules."""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root orderfeed logger once.

    Args:
        level: Log level name. Defaults to ORDERFEED_LOG_LEVEL or INFO.
    """
    global _configured
    if _configured:
        return
    level_name = (level or os.getenv("ORDERFEED_LOG_LEVEL", "INFO")).upper()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("orderfeed")
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the orderfeed namespace."""
    if not name.startswith("orderfeed"):
        name = f"orderfeed.{name}"
    return logging.getLogger(name)
