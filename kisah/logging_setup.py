"""Logging configuration for MyKisah."""

from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path

log = logging.getLogger("kisah")

_configured = False

_SESSION_RE = re.compile(r"^\[(?P<session>[^\]]+)\]\s*(?P<body>.*)$")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "")
    if not raw:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level if level is not None else os.getenv("LOG_LEVEL", "")).strip().upper() or "INFO"
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {name!r}")
    return resolved


def setup_logging(level: str | int | None = None) -> bool:
    """Configure process-wide logging once. Returns False if already configured.

    Level comes from ``level`` or LOG_LEVEL (default INFO). An unknown level
    still configures logging at INFO, then raises ValueError.
    """
    global _configured
    if _configured:
        return False

    try:
        resolved = _resolve_level(level)
        error = None
    except ValueError as e:
        resolved, error = logging.INFO, e

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Reduce noisy transport logs by default (can be re-enabled with KISAH_VERBOSE_HTTP=1).
    if not _env_flag("KISAH_VERBOSE_HTTP"):
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    configure_optional_json_logging()
    _configured = True
    if error is not None:
        raise error
    return True


def _infer_channel(session_id: str | None) -> str:
    if not session_id:
        return "system"
    if session_id == "console":
        return "console"
    return "whatsapp"


def _infer_operation(text: str) -> str:
    lower = (text or "").lower()
    if lower.startswith("user:"):
        return "user_message"
    if lower.startswith("bot:"):
        return "assistant_message"
    if lower.startswith("shell:"):
        return "shell_command"
    if "openrouter" in lower:
        return "completion"
    if "qr code" in lower or "connected" in lower:
        return "pairing"
    return "general"


class _JsonLogFormatter(logging.Formatter):
    """One JSON object per line; ``[<session>] body`` messages are split."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        matched = _SESSION_RE.match(message)
        session_id = matched.group("session") if matched else None
        body = matched.group("body") if matched else message

        return json.dumps(
            {
                "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": body,
                "session": session_id,
                "channel": _infer_channel(session_id),
                "operation": _infer_operation(body),
            },
            ensure_ascii=False,
        )


def configure_optional_json_logging(runtime_root: str | Path | None = None) -> Path | None:
    """Enable optional JSONL file logging while keeping human logs on stderr.

    Controlled by env:
    - JSON_LOG_ENABLED=1|true|yes|on
    - JSON_LOG_PATH=<optional path, defaults to <runtime_root>/logs/kisah.jsonl>
    """
    if not _env_flag("JSON_LOG_ENABLED", default=False):
        return None

    runtime_base = Path(runtime_root).expanduser().resolve() if runtime_root else Path.cwd().resolve()
    raw_path = os.getenv("JSON_LOG_PATH", "").strip()
    if raw_path:
        path = Path(raw_path).expanduser()
        if not path.is_absolute():
            path = (runtime_base / path).resolve()
    else:
        path = (runtime_base / "logs" / "kisah.jsonl").resolve()

    for handler in log.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename).resolve() == path:
            return path

    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(_JsonLogFormatter())
    log.addHandler(file_handler)
    log.info(f"Structured JSON logging enabled: {path.as_posix()}")
    return path
