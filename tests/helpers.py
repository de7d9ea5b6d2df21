from __future__ import annotations

import json
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DOCUMENT = "docs/redoc/master/openapi.json"
SNAPSHOT = "docs/redoc/master/.diff.openapi.json"
SNAPSHOT_GLOB = ".diff.*"
GENERATOR = "tools/generate_openapi_models.sh"
CANONICAL = "tools/canonical-openapi.json"

COPY_GENERATOR = f"""#!/usr/bin/env bash
set -euo pipefail
echo "generating openapi models" >&2
cp {CANONICAL} {DOCUMENT}
"""


@dataclass(frozen=True)
class GuardRepo:
    root: Path

    @property
    def document(self) -> Path:
        return self.root / DOCUMENT

    @property
    def snapshot(self) -> Path:
        return self.root / SNAPSHOT

    @property
    def generator(self) -> Path:
        return self.root / GENERATOR

    @property
    def canonical(self) -> Path:
        return self.root / CANONICAL

    @property
    def script(self) -> Path:
        return self.root / "tests" / "openapi_consistency_check.py"

    def tree(self) -> dict[str, bytes]:
        return {
            path.relative_to(self.root).as_posix(): path.read_bytes()
            for path in sorted(self.root.rglob("*"))
            if path.is_file()
        }


def render_document(n_paths: int) -> str:
    paths = {
        f"/collections/{{collection_name}}/resource_{i:03d}": {
            "get": {"operationId": f"get_resource_{i:03d}", "tags": ["collections"]},
        }
        for i in range(n_paths)
    }
    payload = {
        "openapi": "3.0.1",
        "info": {"title": "Fixture API", "version": "master", "description": "API description"},
        "paths": paths,
        "components": {"schemas": {"ErrorResponse": {"type": "object"}}},
    }
    return json.dumps(payload, indent=2) + "\n"


def make_repo(root: Path, committed: str, generated: str, generator: str = COPY_GENERATOR) -> GuardRepo:
    repo = GuardRepo(root)
    repo.document.parent.mkdir(parents=True, exist_ok=True)
    repo.generator.parent.mkdir(parents=True, exist_ok=True)
    repo.script.parent.mkdir(parents=True, exist_ok=True)
    repo.document.write_text(committed, encoding="utf-8")
    repo.canonical.write_text(generated, encoding="utf-8")
    repo.generator.write_text(generator, encoding="utf-8")
    repo.generator.chmod(0o755)
    repo.script.write_text(
        "from openapi_guard.cli import main\n\nraise SystemExit(main())\n",
        encoding="utf-8",
    )
    return repo


def guard_env() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT / "src"), env.get("PYTHONPATH", "")]))
    return env


def run_guard_module(cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "openapi_guard"],
        cwd=cwd,
        env=guard_env(),
        text=True,
        capture_output=True,
        check=False,
    )


def run_guard_script(repo: GuardRepo, cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(repo.script)],
        cwd=cwd,
        env=guard_env(),
        text=True,
        capture_output=True,
        check=False,
    )
