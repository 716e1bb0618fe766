"""JSON log output for vidprobe."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus those added by Formatter.format()
# and ProbeContextFilter. Anything else on a record came in via extra=.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "probe_id", "probe_source", "probe_tag"}


class JSONFormatter(logging.Formatter):
    """Render each record as a single-line JSON object.

    Keys, in order: timestamp (ISO-8601 UTC), level, logger (omitted for
    the root logger), message, probe ({"id", "source"} inside a probe
    context), context (extra= attributes that are not None) and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the record as JSON."""
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
        }
        if record.name != "root":
            entry["logger"] = record.name
        entry["message"] = record.getMessage()

        probe_id = getattr(record, "probe_id", None)
        if probe_id is not None:
            entry["probe"] = {
                "id": probe_id,
                "source": getattr(record, "probe_source", None),
            }

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and not key.startswith("_")
            and value is not None
        }
        if extras:
            entry["context"] = extras

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
