"""Core bot base state and shared utility methods."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from config import Config
from providers import OpenRouterClient

from ..logging_setup import log


class Messenger(Protocol):
    """Outbound side of the messaging client."""

    async def send_text(self, chat: Any, text: str) -> None: ...


class BotBaseMixin:
    def __init__(self, config: Config, llm: OpenRouterClient, messenger: Messenger | None = None):
        self.config = config
        self.llm = llm
        self.messenger = messenger

    def is_allowed(self, sender: str) -> bool:
        """Check if this sender is in the allowlist (empty = allow all)."""
        if not self.config.allowed_users:
            return True
        return sender in self.config.allowed_users

    def is_shell_allowed(self, sender: str) -> bool:
        if not self.config.shell_enabled:
            return False
        if not self.config.shell_allowed_users:
            return True
        return sender in self.config.shell_allowed_users

    @property
    def shell_workdir(self) -> Path:
        """Working directory for shell escapes: the kisah directory, else cwd."""
        if self.config.kisah_path:
            return Path(self.config.kisah_path)
        return Path.cwd()

    @staticmethod
    def _trim_for_log(text: str, max_chars: int = 8000) -> str:
        if len(text) <= max_chars:
            return text
        return text[:max_chars] + "\n...[truncated]"

    def _log_user_message(self, session_id: str, text: str):
        log.info(f"[{session_id}] User: {self._trim_for_log(text)}")

    def _log_bot_message(self, session_id: str, text: str):
        log.info(f"[{session_id}] Bot: {self._trim_for_log(text)}")
