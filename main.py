#!/usr/bin/env python3
"""
MyKisah — WhatsApp AI bot
=========================
Bridges WhatsApp messages to an OpenRouter chat model, with persona context
loaded from SOUL.md / IDENTITY.md / BOOTSTRAP.md / AGENTS.md / USER.md.

Architecture: WhatsApp events → Session Bridge → Message Router → OpenRouter → Reply

Usage:
  python main.py                      # WhatsApp bot (scan the QR code on first run)
  python main.py --kisah-path ./kisah # with persona fragments
  python main.py --tui                # interactive terminal chat
"""

from kisah.app import main

if __name__ == "__main__":
    raise SystemExit(main())
