"""MyKisah core package."""

from .constants import CONTEXT_FILES, PROJECT_ROOT
from .logging_setup import log, setup_logging
from .personality import load_context, resolve_runtime_path
from .shell import run_shell_command
from .types import (
    ChatMessage,
    Choice,
    CompletionRequest,
    CompletionResponse,
    Connected,
    HistoryEntry,
    InboundMessage,
    OtherEvent,
    PairingCode,
    Role,
    ShellResult,
)

__all__ = [
    "ChatMessage",
    "Choice",
    "CompletionRequest",
    "CompletionResponse",
    "Connected",
    "CONTEXT_FILES",
    "HistoryEntry",
    "InboundMessage",
    "load_context",
    "log",
    "OtherEvent",
    "PairingCode",
    "PROJECT_ROOT",
    "resolve_runtime_path",
    "Role",
    "run_shell_command",
    "setup_logging",
    "ShellResult",
]
