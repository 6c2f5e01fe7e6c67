"""Task result models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Task(BaseModel):
    """A task as reported to callers.

    Attributes:
        id: Task identifier (text before the first colon).
        text: Task text (remainder after the first colon, trimmed).
        section: Ordinal of the owning section.
        section_title: Title of the owning section.
    """

    id: str
    text: str
    section: int = Field(..., ge=0)
    section_title: str


class RemovedTask(BaseModel):
    """Identifier and text of a deleted task."""

    id: str
    text: str


class SectionTasks(BaseModel):
    """Tasks of one section, in document order."""

    title: str
    ordinal: int = Field(..., ge=0)
    tasks: list[Task] = Field(default_factory=list)
