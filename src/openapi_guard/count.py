from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

from .constants import READ_ONLY_IDENTIFIERS
from .context import GuardContext
from .errors import GuardError
from .exit_codes import ERR_DOCUMENT
from .logging import log_event

# Only `paths` is interpreted; everything else in the document is opaque.
DOCUMENT_CONTRACT: dict[str, Any] = {
    "type": "object",
    "required": ["paths"],
    "properties": {"paths": {"type": "object"}},
}


@dataclass(frozen=True)
class CountResult:
    expected: int
    actual: int

    @property
    def ok(self) -> bool:
        return self.expected == self.actual


def load_document(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GuardError(
            f"malformed openapi document {path}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}",
            ERR_DOCUMENT,
            kind="malformed_document",
        ) from exc
    except UnicodeDecodeError as exc:
        raise GuardError(
            f"malformed openapi document {path}: not valid UTF-8: {exc.reason}",
            ERR_DOCUMENT,
            kind="malformed_document",
        ) from exc
    try:
        jsonschema.validate(payload, DOCUMENT_CONTRACT)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise GuardError(
            f"malformed openapi document {path}: contract violation at {loc}: {exc.message}",
            ERR_DOCUMENT,
            kind="malformed_document",
        ) from exc
    return payload


def count_apis(document: dict[str, Any]) -> int:
    return len(document["paths"])


def check_api_count(ctx: GuardContext) -> CountResult:
    log_event(ctx, "info", "count", "load", document=ctx.relative(ctx.document))
    actual = count_apis(load_document(ctx.document))
    log_event(ctx, "info", "count", "compare", expected=ctx.expected_api_count, actual=actual)
    return CountResult(expected=ctx.expected_api_count, actual=actual)


def render_count_mismatch(result: CountResult) -> list[str]:
    patterns, rpc_paths = READ_ONLY_IDENTIFIERS
    return [
        "ERROR: It looks like the total number of APIs has changed.",
        f"ERROR: Expected: {result.expected}, got: {result.actual}",
        "ERROR: Please verify that all new APIs are correctly represented in read-only mode configuration",
        f"ERROR: See: '{patterns}' and '{rpc_paths}'",
        "ERROR: once consistency is restored, please update EXPECTED_NUMBER_OF_APIS in openapi_guard/constants.py",
    ]
