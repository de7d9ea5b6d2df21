from __future__ import annotations

import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .context import GuardContext
from .errors import GuardError
from .exit_codes import ERR_CONTEXT
from .logging import log_event, log_warning


def take_snapshot(ctx: GuardContext) -> Path:
    if not ctx.document.is_file():
        raise GuardError(
            f"openapi document not found: {ctx.relative(ctx.document)}",
            ERR_CONTEXT,
            kind="environment_malformed",
        )
    log_event(ctx, "info", "snapshot", "copy", src=ctx.relative(ctx.document), dst=ctx.relative(ctx.snapshot))
    # A leftover snapshot from an interrupted run is overwritten.
    shutil.copyfile(ctx.document, ctx.snapshot)
    return ctx.snapshot


def remove_snapshot(ctx: GuardContext) -> bool:
    log_event(ctx, "info", "snapshot", "remove", path=ctx.relative(ctx.snapshot))
    try:
        ctx.snapshot.unlink(missing_ok=True)
    except OSError as exc:
        log_warning("snapshot", "remove-failed", path=ctx.relative(ctx.snapshot), error=exc)
        return False
    return True


@contextmanager
def snapshot_scope(ctx: GuardContext) -> Iterator[Path]:
    """Hold a copy of the committed document for the duration of the block.

    The copy is unlinked on every exit path, including errors raised by the
    generator or the comparison. Failing to unlink only produces a warning.
    """
    path = take_snapshot(ctx)
    try:
        yield path
    finally:
        remove_snapshot(ctx)
