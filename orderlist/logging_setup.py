"""Central logging configuration for the ordered list service.

One stdout handler on the root logger; uvicorn's loggers are routed through
it so server and application lines share a format. The root level comes from
``AppConfig.logging.level``. httpx is held at WARNING because the client logs
its own request outcomes.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig
from typing import Any, Dict, Optional

_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Return the dictConfig mapping for ``level``."""
    loggers: Dict[str, Any] = {
        name: {"level": level, "handlers": ["console"], "propagate": False} for name in _UVICORN_LOGGERS
    }
    loggers["httpx"] = {"level": "WARNING"}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": _FORMAT}},
        "handlers": {
            # The handler passes everything; loggers decide what is emitted.
            "console": {
                "class": "logging.StreamHandler",
                "level": "NOTSET",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": loggers,
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure application-wide logging once; later calls only adjust the level.

    If the root logger already has handlers (reloaders, pytest capture), they
    are left in place so output is not duplicated.
    """
    root = logging.getLogger()
    if root.handlers:
        if level:
            root.setLevel(level)
            for name in _UVICORN_LOGGERS:
                logging.getLogger(name).setLevel(level)
        return
    dictConfig(build_logging_config(level or "INFO"))


__all__ = ["build_logging_config", "configure_logging"]
