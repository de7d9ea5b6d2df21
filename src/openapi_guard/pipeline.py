from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .compare import compare_documents
from .constants import REST_DOCS_URL
from .context import GuardContext
from .count import check_api_count, render_count_mismatch
from .errors import GuardError
from .exit_codes import ERR_API_COUNT, ERR_DRIFT, OK
from .logging import log_event, suspend_trace
from .process import run_generator, terminate_on_sigterm
from .snapshot import snapshot_scope


def _emit(lines: list[str]) -> None:
    for line in lines:
        print(line, flush=True)


@contextmanager
def _working_directory(path: Path) -> Iterator[None]:
    old_cwd = os.getcwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(old_cwd)


def drift_report(diff: list[str]) -> list[str]:
    return [
        *diff,
        "ERROR: Generated OpenAPI files are not consistent with files in this repository, see diff above.",
        f"ERROR: See: {REST_DOCS_URL}",
    ]


def check_consistency(ctx: GuardContext) -> None:
    with snapshot_scope(ctx):
        run_generator(ctx)
        result = compare_documents(ctx)
        with suspend_trace(ctx):
            if not result.equal:
                _emit(drift_report(result.diff))
                raise GuardError("generated openapi document drifted from the committed one", ERR_DRIFT, kind="drift_detected")
            _emit(["No diffs found."])


def check_count(ctx: GuardContext) -> None:
    result = check_api_count(ctx)
    if result.ok:
        return
    with suspend_trace(ctx):
        _emit(render_count_mismatch(result))
    raise GuardError(
        f"api count mismatch: expected {result.expected}, got {result.actual}",
        ERR_API_COUNT,
        kind="api_count_mismatch",
    )


def run_guard(ctx: GuardContext) -> int:
    with terminate_on_sigterm(), _working_directory(ctx.project_root):
        log_event(ctx, "info", "guard", "start", project_root=str(ctx.project_root))
        check_consistency(ctx)
        check_count(ctx)
        log_event(ctx, "info", "guard", "done", apis=ctx.expected_api_count)
    return OK
