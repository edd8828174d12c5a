"""Log output setup for applications embedding the codec.

With ``OLAP_HINTS_STRUCTURED_LOGGING=true`` the ``olap_hints`` logger emits
one JSON object per line::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "WARNING",
        "logger": "olap_hints.codec.validator",
        "message": "Metadata violation ...",
        "exc_info": "Traceback ..."  // present only on exceptions
    }

Otherwise a plain text handler is installed.  The same call sizes the
profile history from ``OLAP_HINTS_PROFILE_MAX_RESULTS``; this is the only
place settings reach the codec.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from olap_hints.config import Settings, get_settings
from olap_hints.telemetry.profiling import ProfileCollector

PACKAGE_LOGGER = "olap_hints"

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a single handler to the package logger and return it.

    Calling this again replaces the previously installed handler and the
    recorded profile history.
    """
    if settings is None:
        settings = get_settings()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()

    handler = logging.StreamHandler()
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    package_logger.addHandler(handler)

    level = logging.DEBUG if settings.debug else settings.log_level
    package_logger.setLevel(level)
    package_logger.propagate = False

    ProfileCollector.configure(settings.profile_max_results)
    return package_logger
