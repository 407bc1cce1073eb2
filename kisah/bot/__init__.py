"""Composed MyKisah bot class built from focused mixins."""

from __future__ import annotations

from .base import BotBaseMixin, Messenger
from .bridge import BotBridgeMixin, render_qr
from .handlers import BotHandlersMixin
from .messaging import BotMessagingMixin


class KisahBot(
    BotBridgeMixin,
    BotHandlersMixin,
    BotMessagingMixin,
    BotBaseMixin,
):
    """The main bot class wiring WhatsApp events and OpenRouter together."""

    pass


__all__ = ["KisahBot", "Messenger", "render_qr"]
