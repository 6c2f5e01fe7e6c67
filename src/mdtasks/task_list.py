"""Add, move and remove tasks in a Markdown task document."""

from __future__ import annotations

import logging
import re

from mdtasks.config import MDTASKS_BULLET
from mdtasks.exceptions import DuplicateTaskError, TaskNotFoundError
from mdtasks.markdown import serialize_document
from mdtasks.markdown_parser import parse_markdown
from mdtasks.schemas import (
    Document,
    ListItemNode,
    ListNode,
    RemovedTask,
    SectionTasks,
    Task,
)
from mdtasks.sections import (
    Section,
    find_section_by_title,
    section_at,
    section_containing,
    section_lists,
    sections_in_order,
)
from mdtasks.tasks import (
    TASK_SEPARATOR,
    TaskLocation,
    build_task_item,
    find_task_by_id,
    iter_tasks,
    task_at,
)

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"[\r\n]")


class TaskList:
    """Task operations over a private copy of a document.

    Sections are addressed by ordinal (0 is the first level-2 heading).
    Every operation resolves positions afresh, then applies a single
    structural edit. A failed operation leaves the document as it was at the
    point of failure; there is no rollback.
    """

    def __init__(self, document: Document, *, bullet: str = MDTASKS_BULLET) -> None:
        self._document = document.model_copy(deep=True)
        self._bullet = bullet

    @classmethod
    def from_markdown(cls, text: str, *, bullet: str = MDTASKS_BULLET) -> "TaskList":
        return cls(parse_markdown(text), bullet=bullet)

    def to_ast(self) -> Document:
        """Return a copy of the current document."""
        return self._document.model_copy(deep=True)

    def to_markdown(self) -> str:
        return serialize_document(self._document)

    def find_section(self, title: str) -> int:
        """Return the ordinal of the first section titled ``title``.

        Titles match ignoring case and repeated whitespace.

        Raises:
            SectionNotFoundError: If no section has that title.
        """
        return find_section_by_title(self._document, title).ordinal

    def tasks(self) -> list[SectionTasks]:
        """Return every task grouped by section, sections in order."""
        grouped = [
            SectionTasks(title=section.title, ordinal=section.ordinal)
            for section in sections_in_order(self._document)
        ]
        for location in iter_tasks(self._document):
            grouped[location.section.ordinal].tasks.append(_to_task(location))
        return grouped

    def get_item(self, task_id: str) -> Task:
        """Return the task carrying ``task_id``.

        Raises:
            TaskNotFoundError: If no task matches.
        """
        return _to_task(find_task_by_id(self._document, task_id))

    def item_at(self, section: int, index: int) -> Task:
        """Return the ``index``-th item of a section.

        Raises:
            TaskNotFoundError: If there is no such item.
            MalformedTaskError: If the item is not an ``"ID: text"`` task.
        """
        return _to_task(task_at(self._document, section, index))

    def add_item(self, task_id: str, text: str, section: int = 0) -> str:
        """Add a task to a section and return its ID.

        The task goes to the end of the section's last list, or into a new
        list right after the section heading when the section has none.

        Raises:
            NoSectionError: If the document has no level-2 heading.
            SectionNotFoundError: If ``section`` is out of range.
            DuplicateTaskError: If ``task_id`` is already used.
            ValueError: If ``task_id`` is empty or contains a colon or a
                line break, or if ``text`` contains a blank line.
        """
        task_id = _validate_task_id(task_id)
        text = _normalize_task_text(text)
        target = section_at(self._document, section)
        if self._has_task(task_id):
            raise DuplicateTaskError(f"Task ID already exists: {task_id}")

        self._append_to_section(target, build_task_item(task_id, text))
        logger.debug("Added task %s to section %d (%s)", task_id, target.ordinal, target.title)
        return task_id

    def remove_item(self, task_id: str) -> RemovedTask:
        """Delete a task and return its ID and text.

        The owning list is kept even when it becomes empty.

        Raises:
            TaskNotFoundError: If no task matches.
        """
        location = find_task_by_id(self._document, task_id)
        owner = location.list_node(self._document)
        del owner.children[location.item_index]
        logger.debug("Removed task %s from section %d", location.id, location.section.ordinal)
        return RemovedTask(id=location.id, text=location.text)

    def shift_item(self, task_id: str, section: int) -> Task:
        """Move a task to the end of another section.

        The task is first appended to the destination, then the original
        item is removed from its source list by identity, so a move within
        one section moves the task to the end of that section.

        Raises:
            TaskNotFoundError: If no task matches.
            SectionNotFoundError: If ``section`` is out of range.
        """
        location = find_task_by_id(self._document, task_id)
        destination = section_at(self._document, section)

        source_list = location.list_node(self._document)
        item = source_list.children[location.item_index]
        self._append_to_section(destination, item.model_copy(deep=True))
        _remove_by_identity(source_list, item)

        logger.debug(
            "Shifted task %s from section %d to section %d",
            location.id,
            location.section.ordinal,
            destination.ordinal,
        )
        return self.get_item(location.id)

    def get_section_id_by_task_id(self, task_id: str) -> int:
        """Return the ordinal of the section holding a task.

        Raises:
            TaskNotFoundError: If no task matches.
        """
        location = find_task_by_id(self._document, task_id)
        return section_containing(self._document, location.list_position).ordinal

    def _has_task(self, task_id: str) -> bool:
        try:
            find_task_by_id(self._document, task_id)
        except TaskNotFoundError:
            return False
        return True

    def _append_to_section(self, section: Section, item: ListItemNode) -> None:
        lists = section_lists(self._document, section)
        if lists:
            _, destination = lists[-1]
            item.spread = destination.spread
            destination.children.append(item)
            return

        item.spread = False
        new_list = ListNode(marker=self._bullet, children=[item])
        self._document.children.insert(section.anchor + 1, new_list)


def _validate_task_id(task_id: str) -> str:
    task_id = task_id.strip()
    if not task_id:
        raise ValueError("Task ID must not be empty")
    if TASK_SEPARATOR in task_id or _LINE_BREAK_RE.search(task_id):
        raise ValueError(f"Task ID must not contain a colon or a line break: {task_id!r}")
    return task_id


def _normalize_task_text(text: str) -> str:
    # per-line indent and trailing spaces do not survive a reparse
    lines = [line.strip() for line in text.strip().splitlines()]
    if not all(lines):
        raise ValueError("Task text must not contain a blank line")
    return "\n".join(lines)


def _remove_by_identity(owner: ListNode, item: ListItemNode) -> None:
    for index, candidate in enumerate(owner.children):
        if candidate is item:
            del owner.children[index]
            return
    raise TaskNotFoundError("Moved item is no longer in its source list")


def _to_task(location: TaskLocation) -> Task:
    return Task(
        id=location.id,
        text=location.text,
        section=location.section.ordinal,
        section_title=location.section.title,
    )
