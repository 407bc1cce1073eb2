#!/usr/bin/env python3
"""
Smoke-test the configured OpenRouter key and model with a minimal prompt.

Usage:
  python scripts/openrouter_smoke_test.py
  python scripts/openrouter_smoke_test.py --models openai/gpt-4o-mini,nvidia/nemotron-nano-12b-v2-vl:free
  python scripts/openrouter_smoke_test.py --kisah-path ./kisah
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import Config, load_config
from kisah.personality import load_context
from kisah.types import ChatMessage, Role
from providers import CompletionError, OpenRouterClient


async def _check_model(
    root_cfg: Config,
    model: str,
    prompt: str,
    kisah_path: str,
    timeout_seconds: int,
) -> Tuple[str, str]:
    client = OpenRouterClient(
        api_key=root_cfg.openrouter_api_key,
        model=model,
        context=load_context(kisah_path or None),
        timeout_sec=timeout_seconds,
    )
    try:
        response = await client.get_chat_completion([ChatMessage(role=Role.USER, content=prompt)])
    except CompletionError as exc:
        return "FAIL", str(exc)[:160]
    finally:
        await client.aclose()

    text = (response.first_content() or "").strip().replace("\n", " ")
    if not response.choices:
        return "FAIL", "no choices"
    if not text:
        return "FAIL", "empty response"
    return "OK", text[:120]


async def _run(args: argparse.Namespace) -> int:
    root_cfg = load_config()
    if not root_cfg.openrouter_api_key:
        print("OPENROUTER_API_KEY is not set.")
        return 2

    models = [m.strip() for m in (args.models or root_cfg.openrouter_model).split(",") if m.strip()]

    failures = 0
    for model in models:
        status, detail = await _check_model(
            root_cfg=root_cfg,
            model=model,
            prompt=args.prompt,
            kisah_path=args.kisah_path,
            timeout_seconds=args.timeout,
        )
        print(f"[{status}] {model} -> {detail}")
        if status == "FAIL":
            failures += 1

    if failures:
        print(f"\nDone with {failures} failure(s).")
        return 1

    print("\nDone with no hard failures.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke-test OpenRouter models.")
    parser.add_argument(
        "--models",
        default="",
        help="Comma-separated model IDs (defaults to OPENROUTER_MODEL).",
    )
    parser.add_argument(
        "--prompt",
        default="Reply with exactly: OK",
        help="Test prompt sent to each model.",
    )
    parser.add_argument(
        "--kisah-path",
        default="",
        help="Optional persona directory to prepend as context.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=45,
        help="Timeout in seconds per request.",
    )
    args = parser.parse_args()
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
