"""Runtime path resolution and persona context loading."""

from __future__ import annotations

import os
from pathlib import Path

from .constants import CONTEXT_FILES, PROJECT_ROOT
from .logging_setup import log
from .types import ChatMessage, Role


def resolve_runtime_path(path_value: str) -> Path:
    """Resolve configured paths relative to KISAH_HOME or project root."""
    runtime_home = os.getenv("KISAH_HOME", "").strip()
    base_dir = Path(runtime_home).expanduser().resolve() if runtime_home else PROJECT_ROOT
    path = Path(path_value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def load_context(kisah_path: str | Path | None) -> tuple[ChatMessage, ...]:
    """Load persona fragments from ``kisah_path`` as system turns.

    Files are read in CONTEXT_FILES order. Missing or unreadable files are
    skipped with a warning, so this never raises. Without a directory the
    bundle is empty.
    """
    if not kisah_path:
        return ()

    kisah_dir = Path(kisah_path)
    messages: list[ChatMessage] = []

    for filename in CONTEXT_FILES:
        filepath = kisah_dir / filename
        if not filepath.exists():
            log.warning(f"Kisah file not found: {filepath}")
            continue
        try:
            content = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"Failed to read kisah file {filepath}: {e}")
            continue
        messages.append(ChatMessage(role=Role.SYSTEM, content=content))

    return tuple(messages)


def loaded_context_files(kisah_path: str | Path | None) -> list[str]:
    """Names of the persona fragments present in ``kisah_path``."""
    if not kisah_path:
        return []
    kisah_dir = Path(kisah_path)
    return [name for name in CONTEXT_FILES if (kisah_dir / name).is_file()]
