from __future__ import annotations

from pathlib import Path

import pytest

from ngfilesort.models import SourceFile
from tests._fixtures.source_builder import SourceBuilder

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceBuilder:
    """Provide a reusable source tree builder rooted at the pytest tmp_path."""
    return SourceBuilder(tmp_path)


@pytest.fixture
def fixture_file():
    """Return a loader for files under tests/fixtures."""

    def _load(name: str, *, read: bool = True) -> SourceFile:
        path = FIXTURES / name
        contents = path.read_bytes() if read else None
        return SourceFile(path=str(path), base=str(FIXTURES.parent), contents=contents)

    return _load
