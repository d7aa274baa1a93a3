"""
JSONL logging bootstrap for host applications.
Installs a single JSONL file sink on the root logger. Nothing in the
library calls this; host applications call init_json_logging() once,
early in startup, to capture the library's logs.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("RESOURCE_DISCOVERY_LOG_PATH", "./resource_discovery.log.jsonl")
DEFAULT_LEVEL = os.environ.get("RESOURCE_DISCOVERY_LOG_LEVEL", "INFO").upper()

# Standard LogRecord attributes that are not copied into the payload
_RECORD_FIELDS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime", "taskName"}
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "resource_discovery.log", "ver": "1.0.0"},
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info:
                base["exc"] = logging.Formatter().formatException(record.exc_info)
            # Extras passed via logger.debug(..., extra={...})
            for k, v in record.__dict__.items():
                if k not in _RECORD_FIELDS:
                    base.setdefault(k, v)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler:
    """Install the JSONL handler on the root logger, replacing any earlier one."""
    path = path or DEFAULT_PATH
    level = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
