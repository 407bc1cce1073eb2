"""Local shell-escape execution."""

from __future__ import annotations

import subprocess
from pathlib import Path

from .types import ShellResult


def run_shell_command(command: str, cwd: str | Path, timeout_sec: float = 0) -> ShellResult:
    """Run ``command`` through ``sh -c`` in ``cwd`` and capture its output.

    Not sandboxed. A timeout of 0 waits for the command to finish. Spawn
    failures and timeouts are reported through ``ShellResult.error``.
    """
    try:
        completed = subprocess.run(
            ["sh", "-c", command],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_sec if timeout_sec and timeout_sec > 0 else None,
        )
    except subprocess.TimeoutExpired:
        return ShellResult(
            ok=False,
            exit_code=124,
            error=f"timed out after {timeout_sec:g}s",
        )
    except OSError as e:
        return ShellResult(ok=False, exit_code=127, error=str(e))

    return ShellResult(
        ok=completed.returncode == 0,
        exit_code=int(completed.returncode),
        stdout=str(completed.stdout or ""),
        stderr=str(completed.stderr or ""),
    )
