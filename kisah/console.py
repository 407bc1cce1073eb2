"""Interactive terminal chat console."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.markup import escape as markup_escape

from providers import CompletionError, OpenRouterClient

from .constants import CONSOLE_BANNER
from .logging_setup import log
from .shell import run_shell_command
from .types import ChatMessage, HistoryEntry, Role

SPEAKER_STYLES = {
    "You": "cyan",
    "SHELL": "yellow",
    "SHELL_ERROR": "red",
}
DEFAULT_SPEAKER_STYLE = "green"


class InteractiveConsole:
    """Read-render-evaluate loop against the completion client.

    The whole screen is redrawn from the in-memory history every cycle;
    history lives only as long as the session.
    """

    def __init__(
        self,
        llm: OpenRouterClient,
        shell_workdir: str | Path,
        *,
        shell_prefix: str = "!",
        shell_timeout_sec: float = 0,
        shell_enabled: bool = True,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
    ):
        self.llm = llm
        self.shell_workdir = Path(shell_workdir)
        self.shell_prefix = shell_prefix
        self.shell_timeout_sec = shell_timeout_sec
        self.shell_enabled = shell_enabled
        self.console = console or Console()
        self._read_line = read_line or (lambda prompt: self.console.input(prompt))
        self.history: list[HistoryEntry] = []

    def render(self):
        self.console.clear()
        self.console.print(CONSOLE_BANNER.format(prefix=self.shell_prefix), markup=False)
        for entry in self.history:
            style = SPEAKER_STYLES.get(entry.speaker, DEFAULT_SPEAKER_STYLE)
            self.console.print(f"[{style}]{entry.speaker}[/{style}]: {markup_escape(entry.text)}")

    async def run(self):
        while True:
            self.render()
            try:
                line = await asyncio.to_thread(self._read_line, "\n[cyan]You[/cyan]: ")
            except EOFError:
                return
            if not await self.handle_input(line.strip()):
                return

    async def handle_input(self, text: str) -> bool:
        """Evaluate one input line. Returns False when the loop should stop."""
        if self.shell_prefix and text.startswith(self.shell_prefix):
            await self._run_shell(text[len(self.shell_prefix):])
            return True

        if text.lower() == "exit":
            return False

        self.history.append(HistoryEntry("You", text))
        self.history.append(HistoryEntry("AI", await self._complete(text)))
        return True

    async def _run_shell(self, command: str):
        if not self.shell_enabled:
            self.history.append(HistoryEntry("SHELL_ERROR", "Shell commands are disabled (SHELL_ENABLED=false)."))
            return

        log.debug(f"[console] Shell: {command}")
        result = await asyncio.to_thread(
            run_shell_command, command, self.shell_workdir, self.shell_timeout_sec
        )
        if result.error:
            self.history.append(HistoryEntry("SHELL_ERROR", f"Failed to execute command: {result.error}"))
        elif result.ok:
            self.history.append(HistoryEntry("SHELL", result.stdout))
        else:
            self.history.append(HistoryEntry("SHELL_ERROR", result.stderr))

    async def _complete(self, text: str) -> str:
        try:
            response = await self.llm.get_chat_completion([ChatMessage(role=Role.USER, content=text)])
        except CompletionError as e:
            return f"Error getting OpenRouter completion: {e}"

        content = response.first_content()
        if content is None:
            return "OpenRouter returned no choices."
        return content
