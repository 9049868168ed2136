# tutordesk/core/logging.py
"""Structured logging: JSON formatter plus a one-shot setup called from main."""
import json
import logging
from datetime import datetime, timezone

from tutordesk.core.config import settings

# campos extras aceitos via logger.info(..., extra={...})
_EXTRA_FIELDS = ("category", "prefix", "identifier", "attempt", "kind", "error_code", "student_id")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    level = level or settings.LOG_LEVEL
    fmt = fmt or settings.LOG_FORMAT

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))

    root = logging.getLogger()
    # evita handlers duplicados quando o app é recarregado
    for h in list(root.handlers):
        if getattr(h, "_tutordesk", False):
            root.removeHandler(h)
    handler._tutordesk = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
