"""Process-wide logging setup.

Modules only ever call ``logging.getLogger(__name__)``; this module installs
the single stream handler on the ``budget_ledger`` logger at startup.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "budget_ledger"
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stderr handler to the package logger and set its level.

    Safe to call more than once: the handler is only installed the first time,
    later calls just update the level.

    Args:
        level: Level name (``"DEBUG"``, ``"INFO"`` …) or numeric level.

    Returns:
        The configured ``budget_ledger`` logger.
    """
    root = logging.getLogger(_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if not any(getattr(h, "_budget_ledger", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._budget_ledger = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    return root
