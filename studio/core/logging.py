# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging.

Every module logs through a child of the ``studio`` logger; the parent owns
the only stdout handler, so records from all layers share one format.
Identifiers passed with ``extra=`` (request, project, contact, crew member)
are lifted into top-level JSON keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from studio.core.config import settings

ROOT_LOGGER = "studio"
CONTEXT_FIELDS = ("request_id", "project_id", "contact_id", "crew_member_id", "template_id")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            entry["error"] = str(exc)
            entry["error_type"] = type(exc).__name__
        return json.dumps(entry, default=str, ensure_ascii=False)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger under the ``studio`` hierarchy; module names outside it are nested."""
    root = _configure_root()
    if not name or name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
