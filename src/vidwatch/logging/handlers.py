"""JSON lines formatter for vidwatch logs.

One object per record. Besides the message, a record can carry:

- ``worker``: the pool worker and file it ran under (from WorkerContextFilter)
- ``job``: outcome fields a worker attaches via ``extra=`` (JOB_FIELDS)
- ``context``: any other ``extra=`` keys, e.g. the command run_command logs
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

JOB_FIELDS: tuple[str, ...] = (
    "job_state",
    "input_path",
    "output_path",
    "audio",
    "job_seconds",
)

_WORKER_FIELDS: dict[str, str] = {
    "worker_id": "id",
    "file_id": "file_id",
    "file_path": "file",
}

# Attributes every LogRecord has, plus what the formatter itself sets
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.makeLogRecord({}).__dict__
) | {"message", "asctime", "taskName", "worker_tag"}


def _pick(record: logging.LogRecord, names) -> dict[str, Any]:
    values = {}
    for name in names:
        value = getattr(record, name, None)
        if value is not None and value != "":
            values[name] = value
    return values


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        worker = {
            _WORKER_FIELDS[name]: value
            for name, value in _pick(record, _WORKER_FIELDS).items()
        }
        if worker:
            entry["worker"] = worker

        job = _pick(record, JOB_FIELDS)
        if job:
            entry["job"] = job

        grouped = _RECORD_ATTRS.union(_WORKER_FIELDS, JOB_FIELDS)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in grouped and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
