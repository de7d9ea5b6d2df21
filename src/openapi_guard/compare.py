"""Whitespace-tolerant textual comparison of two OpenAPI documents.

Two documents are equal when they match line by line after line endings are
normalized and all horizontal whitespace is removed, the same rule as
`diff -Zwa`. The rule is textual: whitespace inside JSON string literals is
ignored too.
"""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass, field
from pathlib import Path

from .context import GuardContext
from .logging import log_event

_HORIZONTAL_WS = re.compile(r"[ \t\f\v]+")


@dataclass(frozen=True)
class CompareResult:
    equal: bool
    diff: list[str] = field(default_factory=list)


def split_lines(text: str) -> list[str]:
    # Only newlines end a line; \f and \v stay in-line whitespace as for diff.
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: Path) -> list[str]:
    # Undecodable bytes are kept so binary noise still shows up as drift.
    return split_lines(path.read_text(encoding="utf-8", errors="surrogateescape"))


def normalize_line(line: str) -> str:
    return _HORIZONTAL_WS.sub("", line)


def normalize_lines(lines: list[str]) -> list[str]:
    return [normalize_line(line) for line in lines]


def normalize_text(text: str) -> str:
    return "\n".join(normalize_lines(split_lines(text)))


def _hunk_range(start: int, stop: int) -> str:
    length = stop - start
    first = start + 1 if length else start
    return f"{first}" if length == 1 else f"{first},{length}"


def unified_diff(
    old: list[str],
    new: list[str],
    fromfile: str,
    tofile: str,
    context: int = 3,
) -> list[str]:
    """Unified diff keyed on normalized lines but showing the original text."""
    matcher = difflib.SequenceMatcher(None, normalize_lines(old), normalize_lines(new), autojunk=False)
    out: list[str] = []
    for group in matcher.get_grouped_opcodes(context):
        if not out:
            out.extend([f"--- {fromfile}", f"+++ {tofile}"])
        first, last = group[0], group[-1]
        out.append(f"@@ -{_hunk_range(first[1], last[2])} +{_hunk_range(first[3], last[4])} @@")
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                out.extend(f" {line}" for line in new[j1:j2])
                continue
            if tag in {"replace", "delete"}:
                out.extend(f"-{line}" for line in old[i1:i2])
            if tag in {"replace", "insert"}:
                out.extend(f"+{line}" for line in new[j1:j2])
    return out


def _printable(line: str) -> str:
    return line.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def compare_files(old_path: Path, new_path: Path, fromfile: str | None = None, tofile: str | None = None) -> CompareResult:
    old = read_lines(old_path)
    new = read_lines(new_path)
    if normalize_lines(old) == normalize_lines(new):
        return CompareResult(equal=True)
    diff = unified_diff(old, new, fromfile or str(old_path), tofile or str(new_path))
    return CompareResult(equal=False, diff=[_printable(line) for line in diff])


def compare_documents(ctx: GuardContext) -> CompareResult:
    log_event(
        ctx,
        "info",
        "compare",
        "diff",
        committed=ctx.relative(ctx.snapshot),
        generated=ctx.relative(ctx.document),
    )
    return compare_files(
        ctx.snapshot,
        ctx.document,
        fromfile=ctx.relative(ctx.document) + " (committed)",
        tofile=ctx.relative(ctx.document) + " (generated)",
    )
