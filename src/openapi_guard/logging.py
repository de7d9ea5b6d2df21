from __future__ import annotations

import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .context import GuardContext


def _format(level: str, component: str, action: str, fields: dict[str, object]) -> str:
    ts = datetime.now(timezone.utc).isoformat()
    core = f"ts={ts} level={level} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    return core if not extras else f"{core} {extras}"


def log_event(ctx: GuardContext, level: str, component: str, action: str, **fields: object) -> None:
    if not ctx.trace:
        return
    sys.stderr.write(_format(level, component, action, fields) + "\n")
    sys.stderr.flush()


def log_warning(component: str, action: str, **fields: object) -> None:
    sys.stderr.write(_format("warning", component, action, fields) + "\n")
    sys.stderr.flush()


@contextmanager
def suspend_trace(ctx: GuardContext) -> Iterator[None]:
    previous = ctx.trace
    ctx.trace = False
    try:
        yield
    finally:
        ctx.trace = previous
