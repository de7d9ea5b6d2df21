from __future__ import annotations

import signal
import subprocess
import sys
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from types import FrameType
from typing import Iterator

from .context import GuardContext
from .errors import GuardError
from .exit_codes import ERR_CONTEXT, signal_exit_code
from .logging import log_event

_FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@dataclass(frozen=True)
class CommandResult:
    code: int
    duration_ms: int


def run_inherited(cmd: list[str], cwd: Path) -> CommandResult:
    """Run `cmd` with the guard's own stdio and wait for it.

    SIGINT and SIGTERM received while waiting are forwarded to the child so an
    interrupted guard never leaves the generator running.
    """
    sys.stdout.flush()
    sys.stderr.flush()
    started = time.monotonic()
    proc = subprocess.Popen(cmd, cwd=cwd)

    def _forward(signum: int, _frame: FrameType | None) -> None:
        if proc.poll() is None:
            proc.send_signal(signum)

    previous: dict[int, object] = {}
    if threading.current_thread() is threading.main_thread():
        for sig in _FORWARDED_SIGNALS:
            previous[sig] = signal.signal(sig, _forward)
    try:
        code = proc.wait()
    except BaseException:
        proc.kill()
        proc.wait()
        raise
    finally:
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)  # type: ignore[arg-type]
    return CommandResult(code=code, duration_ms=int((time.monotonic() - started) * 1000))


@contextmanager
def terminate_on_sigterm() -> Iterator[None]:
    """Turn SIGTERM into a `GuardError` so cleanup scopes still run."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _terminate(signum: int, _frame: FrameType | None) -> None:
        raise GuardError(f"terminated by signal {signum}", signal_exit_code(-signum), kind="terminated")

    previous = signal.signal(signal.SIGTERM, _terminate)
    try:
        yield
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)


def run_generator(ctx: GuardContext) -> None:
    if not ctx.generator.is_file():
        raise GuardError(
            f"openapi generator not found: {ctx.relative(ctx.generator)}",
            ERR_CONTEXT,
            kind="environment_malformed",
        )
    cmd = ["bash", str(ctx.generator)]
    log_event(ctx, "info", "generator", "run", command=ctx.relative(ctx.generator), cwd=str(ctx.project_root))
    result = run_inherited(cmd, ctx.project_root)
    log_event(ctx, "info", "generator", "exit", code=result.code, duration_ms=result.duration_ms)
    if result.code != 0:
        code = signal_exit_code(result.code)
        raise GuardError(
            f"openapi generator failed with exit code {code}: {ctx.relative(ctx.generator)}",
            code,
            kind="generator_failed",
        )
