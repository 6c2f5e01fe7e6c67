"""Shared schemas for mdtasks."""

from mdtasks.schemas.nodes import (
    BlockNode,
    Document,
    HeadingNode,
    InlineNode,
    ListItemNode,
    ListNode,
    OtherNode,
    ParagraphNode,
    TextNode,
)
from mdtasks.schemas.tasks import RemovedTask, SectionTasks, Task

__all__ = [
    "BlockNode",
    "Document",
    "HeadingNode",
    "InlineNode",
    "ListItemNode",
    "ListNode",
    "OtherNode",
    "ParagraphNode",
    "RemovedTask",
    "SectionTasks",
    "Task",
    "TextNode",
]
