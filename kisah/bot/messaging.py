"""Outbound message sending."""

from __future__ import annotations

from ..logging_setup import log
from ..types import InboundMessage


class BotMessagingMixin:
    async def _send_reply(self, message: InboundMessage, text: str, what: str = "reply") -> bool:
        """Send one text message back to the chat ``message`` came from.

        Returns True on success. Failures are logged and swallowed; nothing
        is retried.
        """
        session_id = message.chat_id
        if self.messenger is None:
            log.error(f"[{session_id}] No messaging client attached; dropping {what}")
            return False

        self._log_bot_message(session_id, text)
        try:
            await self.messenger.send_text(message.reply_target, text)
            return True
        except Exception as e:
            log.error(f"[{session_id}] Failed to send {what}: {e}")
            return False
