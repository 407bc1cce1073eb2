"""
MyKisah — Configuration
Flat .env-based configuration system.
"""

import os
import re
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


DEFAULT_OPENROUTER_MODEL = "nvidia/nemotron-nano-12b-v2-vl:free"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _strip_inline_comment(value: str) -> str:
    """Strip shell-style inline comments for unquoted env values."""
    if not value:
        return ""
    cleaned = value.strip()
    if not cleaned:
        return ""
    if cleaned.startswith("#"):
        return ""
    return re.sub(r"\s+#.*$", "", cleaned).strip()


def _parse_allowed_users(raw: str) -> list[str]:
    """Parse a comma-separated list of WhatsApp user numbers.

    Accepts bare numbers, ``+``-prefixed numbers and full JIDs
    (``628123456789@s.whatsapp.net``); only the user part is kept.
    """
    cleaned = _strip_inline_comment(raw)
    if not cleaned:
        return []

    users: list[str] = []
    for chunk in cleaned.split(","):
        token = chunk.strip()
        if not token:
            continue
        if token.startswith("#"):
            break
        token = token.split("#", 1)[0].strip()
        token = token.split("@", 1)[0].lstrip("+").strip()
        if token.isdigit():
            users.append(token)
    return users


def _parse_bool(raw: str, default: bool) -> bool:
    cleaned = _strip_inline_comment(raw).lower()
    if cleaned in _TRUE_VALUES:
        return True
    if cleaned in _FALSE_VALUES:
        return False
    return default


def _parse_number(name: str, kind: type, default=None):
    """Read a numeric env var; raises ValueError naming the variable on bad input."""
    cleaned = _strip_inline_comment(os.getenv(name, ""))
    if not cleaned:
        return default
    try:
        return kind(cleaned)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {cleaned!r}") from None


@dataclass
class Config:
    # OpenRouter
    openrouter_api_key: str = ""
    openrouter_model: str = DEFAULT_OPENROUTER_MODEL
    temperature: float | None = None
    max_tokens: int | None = None
    request_timeout_sec: float = 120.0

    # Persona fragments (SOUL.md, IDENTITY.md, ...)
    kisah_path: str = ""

    # WhatsApp
    whatsapp_db_path: str = "whatsapp.db"
    allowed_users: list[str] = field(default_factory=list)

    # Shell escape
    shell_enabled: bool = True
    shell_prefix: str = "!"
    shell_allowed_users: list[str] = field(default_factory=list)
    shell_timeout_sec: float = 300.0


def load_config() -> Config:
    """Load config from environment variables."""
    cfg = Config(
        openrouter_api_key=_strip_inline_comment(os.getenv("OPENROUTER_API_KEY", "")),
        openrouter_model=_strip_inline_comment(os.getenv("OPENROUTER_MODEL", "")),
        temperature=_parse_number("OPENROUTER_TEMPERATURE", float),
        max_tokens=_parse_number("OPENROUTER_MAX_TOKENS", int),
        request_timeout_sec=_parse_number("REQUEST_TIMEOUT_SEC", float, 120.0),
        kisah_path=_strip_inline_comment(os.getenv("KISAH_PATH", "")),
        whatsapp_db_path=_strip_inline_comment(os.getenv("WHATSAPP_DB_PATH", "")) or "whatsapp.db",
        allowed_users=_parse_allowed_users(os.getenv("WHATSAPP_ALLOWED_USERS", "")),
        shell_enabled=_parse_bool(os.getenv("SHELL_ENABLED", ""), default=True),
        shell_prefix=os.getenv("SHELL_PREFIX", "").strip() or "!",
        shell_allowed_users=_parse_allowed_users(os.getenv("SHELL_ALLOWED_USERS", "")),
        shell_timeout_sec=_parse_number("SHELL_TIMEOUT_SEC", float, 300.0),
    )

    if not cfg.openrouter_model:
        cfg.openrouter_model = DEFAULT_OPENROUTER_MODEL
    # 0 disables the timeout.
    cfg.request_timeout_sec = max(0.0, cfg.request_timeout_sec)
    cfg.shell_timeout_sec = max(0.0, cfg.shell_timeout_sec)

    return cfg


def validate_config(cfg: Config) -> None:
    """Raise ValueError for settings the process cannot start without."""
    if not cfg.openrouter_api_key:
        raise ValueError("OPENROUTER_API_KEY environment variable not set")
