"""WhatsApp client adapter built on neonize.

Translates neonize events into the bot's event types and exposes the
outbound ``send_text`` operation. Protocol, encryption and the SQLite
session store are owned entirely by neonize.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from neonize.aioze.client import NewAClient
from neonize.aioze.events import ConnectedEv, MessageEv, PairStatusEv
from neonize.utils.jid import Jid2String

from .logging_setup import log
from .types import BotEvent, Connected, InboundMessage, OtherEvent, PairingCode, first_text

EventHandler = Callable[[BotEvent], Awaitable[None]]


def message_event_to_inbound(message: Any) -> InboundMessage:
    """Convert a neonize ``MessageEv`` into an InboundMessage."""
    source = message.Info.MessageSource
    body = message.Message
    text = first_text(body.conversation, body.extendedTextMessage.text)
    return InboundMessage(
        sender=source.Sender.User,
        chat_id=Jid2String(source.Chat),
        text=text,
        chat=source.Chat,
    )


class WhatsAppClient:
    """neonize-backed messaging client delivering events to one handler."""

    def __init__(self, db_path: str, on_event: EventHandler):
        self.db_path = db_path
        self.on_event = on_event
        self.client = NewAClient(db_path)
        self._stopped = asyncio.Event()
        self._register_handlers()

    def _register_handlers(self):
        self.client.qr(self._on_qr)
        self.client.event(ConnectedEv)(self._on_connected)
        self.client.event(PairStatusEv)(self._on_pair_status)
        self.client.event(MessageEv)(self._on_message)

    async def _on_qr(self, _: NewAClient, data_qr: bytes):
        code = data_qr.decode("utf-8", errors="replace") if isinstance(data_qr, bytes) else str(data_qr)
        await self.on_event(PairingCode(code=code))

    async def _on_connected(self, _: NewAClient, __: ConnectedEv):
        await self.on_event(Connected())

    async def _on_pair_status(self, _: NewAClient, __: PairStatusEv):
        await self.on_event(OtherEvent(name="pair_status"))

    async def _on_message(self, _: NewAClient, message: MessageEv):
        log.debug(f"Message event received: {message.Info.ID}")
        await self.on_event(message_event_to_inbound(message))

    async def send_text(self, chat: Any, text: str) -> None:
        await self.client.send_message(chat, text)

    async def run(self):
        """Connect and serve events until ``stop()`` is called."""
        log.info("Connecting to WhatsApp...")
        await self.client.connect()
        await self._stopped.wait()

    def stop(self):
        self._stopped.set()
