from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from hypothesis import settings
from hypothesis.database import DirectoryBasedExampleDatabase

from helpers import SNAPSHOT_GLOB, GuardRepo, make_repo, render_document

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

_ROOT = Path(__file__).resolve().parents[1]
_HYPOTHESIS_DB = _ROOT / "artifacts/openapi_guard/.hypothesis/examples"
_HYPOTHESIS_DB.parent.mkdir(parents=True, exist_ok=True)
settings.register_profile("guard", database=DirectoryBasedExampleDatabase(_HYPOTHESIS_DB), deadline=None)
settings.load_profile("guard")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_snapshot_left_behind(request: pytest.FixtureRequest) -> Iterator[None]:
    if "tmp_path" not in request.fixturenames or request.node.get_closest_marker("keeps_snapshot"):
        yield
        return
    tmp_path: Path = request.getfixturevalue("tmp_path")
    yield
    leftovers = sorted(p.relative_to(tmp_path).as_posix() for p in tmp_path.rglob(SNAPSHOT_GLOB))
    assert not leftovers, f"snapshot files left behind: {leftovers}"


@pytest.fixture
def clean_repo(tmp_path: Path) -> GuardRepo:
    document = render_document(51)
    return make_repo(tmp_path / "repo", committed=document, generated=document)
