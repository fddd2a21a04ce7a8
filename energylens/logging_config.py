"""
Structured JSON logging for the API service.

Every record becomes one JSON object per line with ``timestamp``,
``level``, ``logger`` and ``message``. Context passed through ``extra``
under the keys in :data:`CONTEXT_FIELDS` (e.g. ``meter_number``) is
copied into the object, and ``exception`` carries the formatted traceback
when one is attached.

CHANGELOG:
- 2026-10-16: Context fields, exception text, uvicorn loggers (STORY-009)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import json
import logging
from datetime import UTC, datetime

# ``extra`` keys promoted to top-level JSON fields.
CONTEXT_FIELDS = ("meter_number", "reading_id", "profile")

# Third-party loggers that install their own handlers.
_PROPAGATED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render a ``LogRecord`` as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
                timespec="milliseconds",
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send all logging through one JSON handler on the root logger.

    Existing root handlers are replaced, and uvicorn's loggers drop their
    own handlers and propagate to the root so server and application
    output share one format.

    Args:
        level: Root level as a number or a name such as ``"DEBUG"``.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _PROPAGATED_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
