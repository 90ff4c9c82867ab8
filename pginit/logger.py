"""
pginit.logger
~~~~~~~~~~~~~
Colored status lines on the console *and* optional JSON lines with daily
rotation.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from .errors import ConfigError, DirectoryCreationFailure

_ISO = "%Y-%m-%dT%H:%M:%SZ"

# event -> (label, ANSI color)
_STYLES = {
    "info": ("[INFO]", "1;36"),
    "ok": ("[OK]  ", "1;32"),
    "warn": ("[WARN]", "1;33"),
    "err": ("[ERR] ", "1;31"),
}


def _now() -> str:  # RFC-3339 without microseconds
    return datetime.now(tz=timezone.utc).strftime(_ISO)


def _wants_color(stream: TextIO) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class _StatusFormatter(logging.Formatter):
    """ e.g. [OK]   Directories ready """

    def __init__(self, color: bool):
        super().__init__()
        self.color = color

    def format(self, record):  # type: ignore[override]
        d: Dict[str, Any] = record.msg if isinstance(record.msg, dict) else {}
        if not d:
            return super().format(record)
        label, ansi = _STYLES.get(d.get("event", "info"), _STYLES["info"])
        if self.color:
            label = f"\033[{ansi}m{label.rstrip()}\033[0m" + " " * (len(label) - len(label.rstrip()))
        return f"{label} {d.get('msg', '')}"


class _JSONFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        return json.dumps(record.msg, separators=(",", ":"), default=str)


class _BelowError(logging.Filter):
    def filter(self, record):  # type: ignore[override]
        return record.levelno < logging.ERROR


class ProvisionLogger:
    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        root = logging.getLogger("pginit")
        root.setLevel(logging.INFO)
        root.propagate = False
        for old in list(root.handlers):
            root.removeHandler(old)
            old.close()

        stdout = stdout or sys.stdout
        stderr = stderr or sys.stderr

        out = logging.StreamHandler(stdout)
        out.addFilter(_BelowError())
        out.setFormatter(_StatusFormatter(_wants_color(stdout)))
        root.addHandler(out)

        err = logging.StreamHandler(stderr)
        err.setLevel(logging.ERROR)
        err.setFormatter(_StatusFormatter(_wants_color(stderr)))
        root.addHandler(err)

        self.log = root

    def open_file(self, log_path: str | Path) -> Path:
        """Start mirroring records as JSON lines next to *log_path*.

        Creates the parent directory.  Called only once the pre-flight check
        has passed, so a failed check leaves nothing on disk.
        """
        jsonl_file = Path(log_path).with_suffix(".jsonl")
        try:
            jsonl_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationFailure(jsonl_file.parent, exc) from exc
        try:
            h = logging.handlers.TimedRotatingFileHandler(
                jsonl_file, when="midnight", backupCount=7, encoding="utf-8"
            )
        except OSError as exc:
            raise ConfigError(f"Cannot open log file {jsonl_file}: {exc.strerror or exc}") from exc
        h.setFormatter(_JSONFormatter())
        self.close()
        self.log.addHandler(h)
        return jsonl_file

    def _emit(self, level: int, event: str, msg: str, extra: Dict[str, Any]) -> None:
        self.log.log(level, {"event": event, "ts": _now(), "msg": msg, **extra})

    def info(self, msg: str, **extra: Any):
        self._emit(logging.INFO, "info", msg, extra)

    def ok(self, msg: str, **extra: Any):
        self._emit(logging.INFO, "ok", msg, extra)

    def warn(self, msg: str, **extra: Any):
        self._emit(logging.WARNING, "warn", msg, extra)

    def err(self, msg: str, **extra: Any):
        self._emit(logging.ERROR, "err", msg, extra)

    def close(self) -> None:
        for h in list(self.log.handlers):
            h.flush()
            if isinstance(h, logging.FileHandler):
                self.log.removeHandler(h)
                h.close()
