import logging
import os
import sys
from typing import Optional, Union

FORMATTER = logging.Formatter(
    "[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
)
LOGGER = logging.getLogger("serum_ethanol")


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Attach a stdout handler to the project logger.

    The level defaults to ``SERUM_ETHANOL_LOG_LEVEL`` (``INFO`` when unset).
    Safe to call more than once.
    """
    if level is None:
        level = os.environ.get("SERUM_ETHANOL_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.strip().upper()

    if not any(getattr(h, "_serum_ethanol", False) for h in LOGGER.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(FORMATTER)
        handler._serum_ethanol = True  # type: ignore[attr-defined]
        LOGGER.addHandler(handler)
    LOGGER.setLevel(level)
    return LOGGER
