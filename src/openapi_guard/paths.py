"""Project root detection and snapshot path derivation.

`Path.cwd()` is only consulted in this module.
"""

from __future__ import annotations

import sys
from pathlib import Path

from .constants import DOCUMENT_RELPATH, GENERATOR_RELPATH, SNAPSHOT_MARKER
from .errors import GuardError
from .exit_codes import ERR_CONTEXT


def snapshot_path_for(document: Path) -> Path:
    return document.with_name(f"{SNAPSHOT_MARKER}{document.name}")


def is_project_root(candidate: Path) -> bool:
    return (candidate / GENERATOR_RELPATH).is_file() and (candidate / DOCUMENT_RELPATH).parent.is_dir()


def script_project_root(script: Path) -> Path:
    # The guard lives one directory below the project root (e.g. tests/).
    return script.resolve().parent.parent


def find_project_root(start: Path | None = None) -> Path:
    cur = (start or Path.cwd()).resolve()
    if cur.is_file():
        cur = cur.parent
    while True:
        if is_project_root(cur):
            return cur
        if cur.parent == cur:
            raise GuardError("unable to resolve project root", ERR_CONTEXT, kind="environment_malformed")
        cur = cur.parent


def locate_project_root(script: Path | None = None) -> Path:
    entry = script if script is not None else Path(sys.argv[0])
    if str(entry):
        candidate = script_project_root(entry)
        if is_project_root(candidate):
            return candidate
    return find_project_root()
