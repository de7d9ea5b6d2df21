from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .context import GuardContext
from .errors import GuardError
from .exit_codes import ERR_INTERNAL
from .paths import locate_project_root
from .pipeline import run_guard

DESCRIPTION = (
    "Regenerate the OpenAPI document, fail on drift from the committed copy, "
    "and fail when the number of API paths changes."
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="openapi-consistency-check", description=DESCRIPTION)
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None, script: Path | None = None) -> int:
    build_parser().parse_args(argv)
    try:
        ctx = GuardContext.from_root(locate_project_root(script))
        return run_guard(ctx)
    except GuardError as exc:
        print(str(exc), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(f"internal error: {exc}", file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
