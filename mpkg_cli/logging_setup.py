"""
App-layer logging bootstrap.
Console output goes through Rich on stderr; an optional JSONL sink records
every record for later inspection.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LEVEL = "WARNING"

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def build_payload(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "mpkg.log", "ver": "1.0.0"},
            "logger": record.name,
            "message": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS:
                continue
            base.setdefault(k, v)
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.build_payload(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_logging(level: str | None = None, path: str | Path | None = None) -> None:
    """Configure the root logger for the CLI.

    Args:
        level: Level name (default: MPKG_LOG_LEVEL or WARNING)
        path: JSONL log file (default: MPKG_LOG_PATH, none if unset)
    """
    level = (level or os.environ.get("MPKG_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    path = path or os.environ.get("MPKG_LOG_PATH")

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.WARNING))

    # Remove handlers installed by an earlier call to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, (JsonlHandler, RichHandler)):
            root.removeHandler(h)

    root.addHandler(RichHandler(console=Console(stderr=True), show_path=False, markup=False))
    if path:
        root.addHandler(JsonlHandler(path))
