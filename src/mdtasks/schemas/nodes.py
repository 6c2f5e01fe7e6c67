"""Document node models.

A task file is a flat sequence of block nodes. Sections and tasks are
derived views over that sequence (see ``mdtasks.sections`` and
``mdtasks.tasks``); they are never stored in the tree itself.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TextNode(BaseModel):
    """Plain inline text (markup characters already unescaped)."""

    type: Literal["text"] = "text"
    value: str


class InlineNode(BaseModel):
    """Any other inline content, kept as its Markdown source."""

    type: Literal["inline"] = "inline"
    value: str


InlineContent = Annotated[Union[TextNode, InlineNode], Field(discriminator="type")]


class HeadingNode(BaseModel):
    """An ATX or setext heading."""

    type: Literal["heading"] = "heading"
    depth: int = Field(..., ge=1, le=6)
    children: list[InlineContent] = Field(default_factory=list)


class ParagraphNode(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    children: list[InlineContent] = Field(default_factory=list)


class OtherNode(BaseModel):
    """Opaque block (code, quote, rule, HTML...) preserved verbatim."""

    type: Literal["other"] = "other"
    value: str


class ListItemNode(BaseModel):
    type: Literal["listItem"] = "listItem"
    spread: bool = False
    children: list[BlockNode] = Field(default_factory=list)


class ListNode(BaseModel):
    """A bullet or ordered list.

    Attributes:
        ordered: True for ``1.`` style lists.
        start: First number of an ordered list, None for bullet lists.
        spread: True when items are separated by blank lines.
        marker: Bullet character (``*``, ``-``, ``+``) or, for ordered
            lists, the delimiter after the number (``.`` or ``)``).
        children: The list items.
    """

    type: Literal["list"] = "list"
    ordered: bool = False
    start: int | None = None
    spread: bool = False
    marker: str = "*"
    children: list[ListItemNode] = Field(default_factory=list)


BlockNode = Annotated[
    Union[HeadingNode, ListNode, ParagraphNode, OtherNode],
    Field(discriminator="type"),
]


class Document(BaseModel):
    """The whole task file as an ordered sequence of block nodes."""

    type: Literal["root"] = "root"
    children: list[BlockNode] = Field(default_factory=list)


ListItemNode.model_rebuild()
ListNode.model_rebuild()
Document.model_rebuild()
