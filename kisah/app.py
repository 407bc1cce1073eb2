"""Application entrypoint: WhatsApp bot or interactive console."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from config import Config, load_config, validate_config
from providers import OpenRouterClient

from .logging_setup import log, setup_logging
from .personality import loaded_context_files, resolve_runtime_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mykisah",
        description="WhatsApp bot and terminal chat backed by OpenRouter.",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Run the interactive terminal chat instead of the WhatsApp bot.",
    )
    parser.add_argument(
        "--kisah-path",
        default=None,
        help="Directory holding SOUL.md, IDENTITY.md, BOOTSTRAP.md, AGENTS.md and USER.md.",
    )
    return parser


async def run_bot(config: Config, llm: OpenRouterClient):
    """Run the WhatsApp bot until the client stops."""
    from .bot import KisahBot
    from .whatsapp import WhatsAppClient

    bot = KisahBot(config, llm)
    client = WhatsAppClient(config.whatsapp_db_path, on_event=bot.on_event)
    bot.messenger = client
    try:
        await client.run()
    finally:
        await llm.aclose()


async def run_console(config: Config, llm: OpenRouterClient):
    """Run the interactive terminal chat until the user exits."""
    from .console import InteractiveConsole

    shell_workdir = config.kisah_path or "."
    console = InteractiveConsole(
        llm,
        shell_workdir,
        shell_prefix=config.shell_prefix,
        shell_timeout_sec=config.shell_timeout_sec,
        shell_enabled=config.shell_enabled,
    )
    try:
        await console.run()
    finally:
        await llm.aclose()


def main(argv: list[str] | None = None) -> int:
    """Start MyKisah. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        setup_logging()
        config = load_config()
        if args.kisah_path:
            # Command-line paths are relative to the caller's working directory.
            config.kisah_path = str(Path(args.kisah_path).expanduser().resolve())
        elif config.kisah_path:
            config.kisah_path = str(resolve_runtime_path(config.kisah_path))
        validate_config(config)
    except ValueError as e:
        log.error(str(e))
        return 1

    mode = "console" if args.tui else "whatsapp"
    log.info("📖 MyKisah starting...")
    log.info(f"   Mode: {mode}")
    log.info(f"   Model: {config.openrouter_model}")
    if config.kisah_path:
        loaded = loaded_context_files(config.kisah_path)
        log.info(f"   Kisah path: {config.kisah_path} ({', '.join(loaded) or 'no fragments'})")
    else:
        log.info("   Kisah path: none (no persona context)")
    if not args.tui:
        log.info(f"   Session store: {config.whatsapp_db_path}")
        if config.allowed_users:
            log.info(f"   Allowed users: {', '.join(config.allowed_users)}")
        else:
            log.info("   Allowed users: everyone")
        if not config.shell_enabled:
            log.info("   Shell escape: disabled")
        elif config.shell_allowed_users:
            log.info(f"   Shell escape: {', '.join(config.shell_allowed_users)}")
        else:
            log.warning(f"   Shell escape: enabled for everyone (prefix {config.shell_prefix!r})")

    llm = OpenRouterClient.from_config(config)

    try:
        if args.tui:
            asyncio.run(run_console(config, llm))
        else:
            asyncio.run(run_bot(config, llm))
    except KeyboardInterrupt:
        log.info("Stopped.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
