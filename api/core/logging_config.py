"""Logging setup shared by the API process and the maintenance scripts."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_configured = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the root logger (only once per process)."""
    global _configured
    root = logging.getLogger()
    if _configured:
        return root

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    # uvicorn ja loga cada request no nivel INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True
    root.debug("Logging configured: level=%s", level)
    return root
