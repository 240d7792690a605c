# pylint: disable=redefined-outer-name
# pylint: disable=unused-argument

from pathlib import Path
from typing import Callable, Iterator

import pytest
from tagster import TagManager


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    def _make(relative: str, content: str = "some content") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _make


@pytest.fixture
def report_file(make_file: Callable[..., Path]) -> Path:
    return make_file("report.txt")


@pytest.fixture
def manager(tmp_path: Path, report_file: Path) -> Iterator[TagManager]:
    manager_ = TagManager.initialise_new(str(tmp_path))
    yield manager_
    manager_.close()


@pytest.fixture
def plain_manager(tmp_path: Path, report_file: Path) -> Iterator[TagManager]:
    """Manager that leaves file names alone."""
    manager_ = TagManager.initialise_new(str(tmp_path), encode_tags=False)
    yield manager_
    manager_.close()
