"""Inbound message routing: shell escape, ping, and AI conversation."""

from __future__ import annotations

import asyncio

from providers import CompletionError

from ..constants import PING_TOKEN, PONG_REPLY
from ..logging_setup import log
from ..shell import run_shell_command
from ..types import ChatMessage, InboundMessage, Role


class BotHandlersMixin:
    # ── Message Handler (the core loop) ───────────────────────

    async def handle_message(self, message: InboundMessage):
        """Route one inbound message and send at most one reply.

        Priority: shell escape, then ping, then an AI completion. Never
        raises for remote, shell, or send failures.
        """
        session_id = message.chat_id
        text = message.text
        if not text:
            log.debug(f"[{session_id}] Ignoring message without text from {message.sender}")
            return
        if not self.is_allowed(message.sender):
            log.debug(f"[{session_id}] Ignoring message from non-allowed sender {message.sender}")
            return

        self._log_user_message(session_id, text)

        prefix = self.config.shell_prefix
        if prefix and text.startswith(prefix):
            await self._handle_shell_command(message, text[len(prefix):])
            return

        if text.strip().lower() == PING_TOKEN:
            await self._send_reply(message, PONG_REPLY, what="pong")
            return

        await self._handle_conversation(message, text)

    async def _handle_shell_command(self, message: InboundMessage, command: str):
        session_id = message.chat_id
        if not self.is_shell_allowed(message.sender):
            log.warning(f"[{session_id}] Shell command refused for sender {message.sender}")
            return

        log.info(f"[{session_id}] Shell: {command}")
        result = await asyncio.to_thread(
            run_shell_command,
            command,
            self.shell_workdir,
            self.config.shell_timeout_sec,
        )

        if result.error:
            response_text = f"Failed to execute command: {result.error}"
        elif result.ok:
            response_text = result.stdout
        else:
            response_text = f"Error: {result.stderr}"

        await self._send_reply(message, response_text, what="shell command response")

    async def _handle_conversation(self, message: InboundMessage, text: str):
        chat_messages = [ChatMessage(role=Role.USER, content=text)]

        try:
            response = await self.llm.get_chat_completion(chat_messages)
        except CompletionError as e:
            log.error(f"Failed to get OpenRouter completion for message from {message.sender}: {e}")
            return

        ai_response = response.first_content()
        if ai_response is None:
            log.warning(f"OpenRouter returned no choices for message from {message.sender}.")
            return

        await self._send_reply(message, ai_response, what="AI response")
