"""Tests for task file storage."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdtasks.exceptions import TaskFileError, TaskFileNotFoundError
from mdtasks.storage import load_task_list, read_task_file, save_task_list, write_task_file


class TestReadTaskFile:
    """Tests for read_task_file."""

    def test_reads_document(self, task_file: Path) -> None:
        """The whole file is parsed into a document."""
        document = read_task_file(task_file)

        assert [node.type for node in document.children] == ["heading", "list", "heading"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise TaskFileNotFoundError."""
        with pytest.raises(TaskFileNotFoundError, match="not found"):
            read_task_file(tmp_path / "missing.md")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        """Directories are reported as missing task files."""
        with pytest.raises(TaskFileNotFoundError):
            read_task_file(tmp_path)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Bytes that do not match the encoding raise TaskFileError."""
        path = tmp_path / "tasks.md"
        path.write_bytes(b"## \xff\xfe\n")

        with pytest.raises(TaskFileError, match="Cannot read"):
            read_task_file(path, encoding="utf-8")

    def test_not_found_is_a_file_error(self) -> None:
        """Missing files can be handled as generic file errors."""
        assert issubclass(TaskFileNotFoundError, TaskFileError)


class TestWriteTaskFile:
    """Tests for write_task_file."""

    def test_writes_markdown(self, tmp_path: Path, make_document) -> None:
        """The document is serialized over the whole file."""
        path = tmp_path / "tasks.md"
        path.write_text("old content that is much longer than the new one\n", encoding="utf-8")

        write_task_file(path, make_document("## first\n* a: one\n"))

        assert path.read_text(encoding="utf-8") == "## first\n\n* a: one\n"

    def test_missing_directory(self, tmp_path: Path, make_document) -> None:
        """Unwritable paths raise TaskFileError."""
        with pytest.raises(TaskFileError, match="Cannot write"):
            write_task_file(tmp_path / "missing" / "tasks.md", make_document("## first\n"))


class TestTaskListFiles:
    """Tests for load_task_list and save_task_list."""

    def test_load_modify_save(self, task_file: Path) -> None:
        """Changes made to a loaded task list are written back."""
        task_list = load_task_list(task_file)
        task_list.remove_item("a")
        task_list.add_item("c", "three", 1)

        save_task_list(task_file, task_list)

        assert task_file.read_text(encoding="utf-8") == "## Todo\n\n* b: two\n\n## Done\n\n* c: three\n"

    def test_unchanged_file_is_stable(self, task_file: Path) -> None:
        """Saving without changes keeps normalized files byte for byte."""
        before = task_file.read_text(encoding="utf-8")

        save_task_list(task_file, load_task_list(task_file))

        assert task_file.read_text(encoding="utf-8") == before

    def test_bullet_for_new_lists(self, tmp_path: Path) -> None:
        """The bullet option applies to lists created by additions."""
        path = tmp_path / "tasks.md"
        path.write_text("## Todo\n", encoding="utf-8")

        task_list = load_task_list(path, bullet="+")
        task_list.add_item("a", "one")
        save_task_list(path, task_list)

        assert path.read_text(encoding="utf-8") == "## Todo\n\n+ a: one\n"

    def test_reference_definitions_survive_save(self, tmp_path: Path) -> None:
        """Link reference definitions and reference links are written back unchanged."""
        path = tmp_path / "tasks.md"
        path.write_text(
            "## Todo\n\n* a: see [docs][d]\n\n[d]: https://example.com\n", encoding="utf-8"
        )

        task_list = load_task_list(path)
        task_list.add_item("b", "two")
        save_task_list(path, task_list)

        assert path.read_text(encoding="utf-8") == (
            "## Todo\n\n* a: see [docs][d]\n* b: two\n\n[d]: https://example.com\n"
        )
