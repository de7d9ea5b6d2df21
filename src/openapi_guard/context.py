from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .constants import DOCUMENT_RELPATH, EXPECTED_NUMBER_OF_APIS, GENERATOR_RELPATH
from .paths import snapshot_path_for


@dataclass
class GuardContext:
    project_root: Path
    document: Path
    snapshot: Path
    generator: Path
    expected_api_count: int = EXPECTED_NUMBER_OF_APIS
    trace: bool = True

    @classmethod
    def from_root(cls, project_root: Path, expected_api_count: int = EXPECTED_NUMBER_OF_APIS) -> "GuardContext":
        root = project_root.resolve()
        document = root / DOCUMENT_RELPATH
        return cls(
            project_root=root,
            document=document,
            snapshot=snapshot_path_for(document),
            generator=root / GENERATOR_RELPATH,
            expected_api_count=expected_api_count,
        )

    def relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return str(path)
