"""Section resolution over the flat block sequence.

A section starts at a level-2 heading and owns every following node up to
the next level-2 heading (or the end of the document). Other heading levels
are ordinary member content.

Sections are addressed two ways:

* the **ordinal**: 0-based rank among level-2 headings, used by every public
  operation;
* the **physical position**: index into ``Document.children``, used only
  internally to splice the sequence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mdtasks.exceptions import NoSectionError, SectionNotFoundError
from mdtasks.markdown import render_inline
from mdtasks.schemas import Document, HeadingNode, ListNode, TextNode

SECTION_DEPTH = 2


@dataclass(frozen=True)
class Section:
    """A level-2 section.

    Attributes:
        title: Heading text, trimmed.
        ordinal: Rank among level-2 headings.
        anchor: Physical position of the heading.
        end: Physical position of the next level-2 heading, or the document
            length for the last section.
    """

    title: str
    ordinal: int
    anchor: int
    end: int

    @property
    def members(self) -> range:
        """Physical positions of the nodes owned by this section."""
        return range(self.anchor + 1, self.end)

    def __contains__(self, position: object) -> bool:
        return isinstance(position, int) and self.anchor < position < self.end


def heading_title(heading: HeadingNode) -> str:
    """Return the first inline text of a heading, trimmed.

    Headings made only of markup (``## **Bold**``) fall back to their
    rendered Markdown.
    """
    for child in heading.children:
        if isinstance(child, TextNode):
            return child.value.strip()
    return render_inline(heading.children).strip()


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison."""
    return re.sub(r"\s+", " ", title.strip().casefold())


def sections_in_order(document: Document) -> list[Section]:
    """Return every section of the document in document order."""
    headings: list[tuple[int, HeadingNode]] = [
        (position, node)
        for position, node in enumerate(document.children)
        if isinstance(node, HeadingNode) and node.depth == SECTION_DEPTH
    ]
    sections: list[Section] = []
    for ordinal, (anchor, heading) in enumerate(headings):
        if ordinal + 1 < len(headings):
            end = headings[ordinal + 1][0]
        else:
            end = len(document.children)
        sections.append(
            Section(title=heading_title(heading), ordinal=ordinal, anchor=anchor, end=end)
        )
    return sections


def section_at(document: Document, ordinal: int) -> Section:
    """Resolve a section ordinal.

    Raises:
        NoSectionError: If the document has no level-2 heading.
        SectionNotFoundError: If the ordinal is negative or past the last section.
    """
    sections = sections_in_order(document)
    if not sections:
        raise NoSectionError("There is no section")
    if ordinal < 0 or ordinal >= len(sections):
        raise SectionNotFoundError(
            f"Section {ordinal} is out of range (document has {len(sections)} sections)"
        )
    return sections[ordinal]


def section_containing(document: Document, position: int) -> Section:
    """Return the section whose member range contains a physical position.

    Raises:
        NoSectionError: If the position precedes the first level-2 heading
            or is not a member position of any section.
    """
    for section in sections_in_order(document):
        if position in section:
            return section
    raise NoSectionError(f"No section contains position {position}")


def find_section_by_title(document: Document, title: str) -> Section:
    """Return the first section whose normalized title matches ``title``."""
    wanted = normalize_section_title(title)
    for section in sections_in_order(document):
        if normalize_section_title(section.title) == wanted:
            return section
    raise SectionNotFoundError(f"Cannot find section: {title!r}")


def section_lists(document: Document, section: Section) -> list[tuple[int, ListNode]]:
    """Return ``(position, list)`` for every list owned by a section."""
    lists: list[tuple[int, ListNode]] = []
    for position in section.members:
        node = document.children[position]
        if isinstance(node, ListNode):
            lists.append((position, node))
    return lists
