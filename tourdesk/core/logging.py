"""Process-wide logging setup."""

from __future__ import annotations

import logging

from tourdesk.security.logging_filters import SensitiveFilter

_SCRUBBED_LOGGERS = ("", "uvicorn", "uvicorn.access", "uvicorn.error", "tourdesk")


def configure_logging(level: str) -> None:
    """Apply ``level`` to the package loggers and scrub guest contact details."""
    logging.getLogger("tourdesk").setLevel(level.upper())
    for name in _SCRUBBED_LOGGERS:
        target = logging.getLogger(name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())
