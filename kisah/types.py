"""Shared datatypes for MyKisah."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        return cls(role=Role(data["role"]), content=data.get("content") or "")


@dataclass(frozen=True)
class CompletionRequest:
    model: str
    messages: tuple[ChatMessage, ...]
    temperature: float | None = None
    max_tokens: int | None = None

    def to_dict(self) -> dict:
        """JSON body for the chat-completions endpoint; unset options are omitted."""
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
        }
        if self.temperature is not None:
            body["temperature"] = self.temperature
        if self.max_tokens is not None:
            body["max_tokens"] = self.max_tokens
        return body


@dataclass(frozen=True)
class Choice:
    index: int
    message: ChatMessage
    finish_reason: str = ""


@dataclass(frozen=True)
class CompletionResponse:
    id: str
    model: str
    created: int
    choices: tuple[Choice, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "CompletionResponse":
        """Build a response from decoded JSON. Raises KeyError/TypeError/ValueError on bad shape."""
        choices = tuple(
            Choice(
                index=int(raw["index"]),
                message=ChatMessage.from_dict(raw["message"]),
                finish_reason=raw.get("finish_reason") or "",
            )
            for raw in data.get("choices") or []
        )
        return cls(
            id=str(data["id"]),
            model=str(data["model"]),
            created=int(data["created"]),
            choices=choices,
        )

    def first_content(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content


@dataclass
class ShellResult:
    ok: bool
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    error: str = ""


@dataclass(frozen=True)
class HistoryEntry:
    speaker: str
    text: str


# ── Messaging events ─────────────────────────────────────────


@dataclass(frozen=True)
class PairingCode:
    code: str


@dataclass(frozen=True)
class Connected:
    pass


@dataclass(frozen=True)
class InboundMessage:
    sender: str
    chat_id: str
    text: str | None
    # Client-native chat handle (e.g. a neonize JID); chat_id is used when absent.
    chat: Any = field(default=None, compare=False, repr=False)

    @property
    def reply_target(self) -> Any:
        return self.chat if self.chat is not None else self.chat_id


@dataclass(frozen=True)
class OtherEvent:
    name: str = ""


BotEvent = PairingCode | Connected | InboundMessage | OtherEvent


def first_text(*candidates: str | None) -> str | None:
    """Return the first non-empty candidate (conversation text, then extended text)."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None
