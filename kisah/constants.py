"""Shared constants used by the MyKisah bot."""

from __future__ import annotations

from pathlib import Path

# Project root for resolving runtime-relative paths reliably.
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Persona fragments, prepended to every completion request in this order.
CONTEXT_FILES = (
    "SOUL.md",
    "IDENTITY.md",
    "BOOTSTRAP.md",
    "AGENTS.md",
    "USER.md",
)

PING_TOKEN = "ping"
PONG_REPLY = "pong"

PAIRING_BANNER = """
╔═══════════════════════════════════════════╗
║     Scan this QR code with WhatsApp       ║
╚═══════════════════════════════════════════╝
"""

PAIRING_INSTRUCTIONS = "Open WhatsApp → Settings → Linked Devices → Link a Device"

CONSOLE_BANNER = (
    "Welcome to the AI Chat TUI!\n"
    "Type your message and press Enter. Type 'exit' to quit. "
    "Prefix with '{prefix}' for shell commands.\n"
)
