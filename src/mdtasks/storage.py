"""Read and write task files."""

from __future__ import annotations

import logging
from pathlib import Path

from mdtasks.config import MDTASKS_BULLET, MDTASKS_ENCODING
from mdtasks.exceptions import TaskFileError, TaskFileNotFoundError
from mdtasks.markdown import serialize_document
from mdtasks.markdown_parser import parse_markdown
from mdtasks.schemas import Document
from mdtasks.task_list import TaskList

logger = logging.getLogger(__name__)


def read_task_file(path: Path, encoding: str = MDTASKS_ENCODING) -> Document:
    """Read and parse a whole task file.

    Raises:
        TaskFileNotFoundError: If ``path`` is not a file.
        TaskFileError: If the file cannot be read or decoded.
    """
    if not path.is_file():
        raise TaskFileNotFoundError(f"Task file not found: {path}")
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise TaskFileError(f"Cannot read task file {path}: {exc}") from exc
    logger.debug("Read %d characters from %s", len(text), path)
    return parse_markdown(text)


def write_task_file(path: Path, document: Document, encoding: str = MDTASKS_ENCODING) -> None:
    """Serialize a document and replace the whole task file with it.

    Raises:
        TaskFileError: If the file cannot be written.
    """
    content = serialize_document(document)
    try:
        path.write_text(content, encoding=encoding)
    except OSError as exc:
        raise TaskFileError(f"Cannot write task file {path}: {exc}") from exc
    logger.debug("Wrote %d characters to %s", len(content), path)


def load_task_list(
    path: Path, encoding: str = MDTASKS_ENCODING, *, bullet: str = MDTASKS_BULLET
) -> TaskList:
    return TaskList(read_task_file(path, encoding), bullet=bullet)


def save_task_list(path: Path, task_list: TaskList, encoding: str = MDTASKS_ENCODING) -> None:
    write_task_file(path, task_list.to_ast(), encoding)
