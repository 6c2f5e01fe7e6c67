"""Test setup for mdtasks."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mdtasks.markdown_parser import parse_markdown  # noqa: E402
from mdtasks.schemas import Document  # noqa: E402


@pytest.fixture
def make_document() -> Callable[[str], Document]:
    """Parse Markdown text into a document."""
    return parse_markdown


@pytest.fixture
def task_file(tmp_path: Path) -> Path:
    """A task file with two sections and two tasks."""
    path = tmp_path / "tasks.md"
    path.write_text("## Todo\n\n* a: one\n* b: two\n\n## Done\n", encoding="utf-8")
    return path
