"""Messaging-client event dispatch and QR pairing display."""

from __future__ import annotations

import io

import qrcode

from ..constants import PAIRING_BANNER, PAIRING_INSTRUCTIONS
from ..logging_setup import log
from ..types import BotEvent, Connected, InboundMessage, OtherEvent, PairingCode


def render_qr(code: str) -> str:
    """Render ``code`` as a terminal QR code (dark modules drawn light)."""
    qr = qrcode.QRCode(border=1)
    qr.add_data(code)
    qr.make(fit=True)
    out = io.StringIO()
    qr.print_ascii(out=out, invert=True)
    return out.getvalue()


class BotBridgeMixin:
    async def on_event(self, event: BotEvent):
        """Dispatch one event from the messaging client."""
        match event:
            case PairingCode(code=code):
                self.handle_pairing_code(code)
            case Connected():
                log.info("✓ Successfully connected to WhatsApp!")
            case InboundMessage():
                await self.handle_message(event)
            case OtherEvent():
                pass

    @staticmethod
    def handle_pairing_code(code: str):
        try:
            qr_string = render_qr(code)
        except Exception as e:
            log.error(f"Failed to generate QR code: {e}")
            log.error(f"Raw code: {code}")
            return

        print(PAIRING_BANNER)
        print(qr_string)
        print(f"\n{PAIRING_INSTRUCTIONS}\n")
