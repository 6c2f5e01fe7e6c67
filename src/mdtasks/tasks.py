"""Locate tasks inside the sections of a document.

A task is a list item whose first child is a paragraph starting with plain
text of the form ``"<id>: <text>"``. Any other list item (nested list first,
image first, no colon...) is not a task and is skipped by lookups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from mdtasks.exceptions import MalformedTaskError, TaskNotFoundError
from mdtasks.schemas import (
    Document,
    ListItemNode,
    ListNode,
    ParagraphNode,
    TextNode,
)
from mdtasks.sections import Section, section_at, section_lists, sections_in_order

logger = logging.getLogger(__name__)

TASK_SEPARATOR = ":"


@dataclass(frozen=True)
class TaskLocation:
    """Where a task lives right now.

    ``list_position`` and ``item_index`` are only valid until the next
    structural edit of the document.
    """

    id: str
    text: str
    section: Section
    list_position: int
    item_index: int

    def list_node(self, document: Document) -> ListNode:
        node = document.children[self.list_position]
        if not isinstance(node, ListNode):
            raise TaskNotFoundError(f"Stale location for task {self.id}")
        return node

    def item(self, document: Document) -> ListItemNode:
        return self.list_node(document).children[self.item_index]


def parse_task_text(value: str) -> tuple[str, str] | None:
    """Split ``"<id>: <text>"`` at the first colon.

    Returns None when there is no colon or the identifier is empty.
    """
    task_id, separator, text = value.partition(TASK_SEPARATOR)
    task_id = task_id.strip()
    if not separator or not task_id:
        return None
    return task_id, text.strip()


def format_task_text(task_id: str, text: str) -> str:
    return f"{task_id}{TASK_SEPARATOR} {text.strip()}"


def task_from_item(item: ListItemNode) -> tuple[str, str] | None:
    """Return ``(id, text)`` for a task item, None for any other shape."""
    if not item.children:
        return None
    paragraph = item.children[0]
    if not isinstance(paragraph, ParagraphNode) or not paragraph.children:
        return None
    text = paragraph.children[0]
    if not isinstance(text, TextNode):
        return None
    return parse_task_text(text.value)


def build_task_item(task_id: str, text: str, *, spread: bool = False) -> ListItemNode:
    """Create the list item for a new task."""
    paragraph = ParagraphNode(children=[TextNode(value=format_task_text(task_id, text))])
    return ListItemNode(spread=spread, children=[paragraph])


def iter_tasks(document: Document) -> Iterator[TaskLocation]:
    """Yield every task in section order.

    Lists before the first level-2 heading do not belong to any section and
    are not scanned.
    """
    for section in sections_in_order(document):
        for position, node in section_lists(document, section):
            for index, item in enumerate(node.children):
                parsed = task_from_item(item)
                if parsed is None:
                    logger.debug(
                        "Skipping non-task item %d of list at %d in section %r",
                        index,
                        position,
                        section.title,
                    )
                    continue
                task_id, text = parsed
                yield TaskLocation(
                    id=task_id,
                    text=text,
                    section=section,
                    list_position=position,
                    item_index=index,
                )


def find_task_by_id(document: Document, task_id: str) -> TaskLocation:
    """Return the first task carrying ``task_id``.

    Raises:
        TaskNotFoundError: If no task matches.
    """
    wanted = task_id.strip()
    for location in iter_tasks(document):
        if location.id == wanted:
            return location
    raise TaskNotFoundError(f"Can't find task. ID: {task_id}")


def task_at(document: Document, ordinal: int, index: int) -> TaskLocation:
    """Return the ``index``-th list item of a section as a task.

    Items are counted across all lists of the section, tasks or not.

    Raises:
        TaskNotFoundError: If the section has no item at ``index``.
        MalformedTaskError: If the item is not shaped like a task.
    """
    section = section_at(document, ordinal)
    items: list[tuple[int, int, ListItemNode]] = []
    for position, node in section_lists(document, section):
        for item_index, item in enumerate(node.children):
            items.append((position, item_index, item))

    if index < 0 or index >= len(items):
        raise TaskNotFoundError(f"Section {ordinal} has no item at index {index}")

    position, item_index, item = items[index]
    parsed = task_from_item(item)
    if parsed is None:
        raise MalformedTaskError(
            f"Item {index} of section {section.title!r} is not an \"ID: text\" task"
        )
    task_id, text = parsed
    return TaskLocation(
        id=task_id,
        text=text,
        section=section,
        list_position=position,
        item_index=item_index,
    )
