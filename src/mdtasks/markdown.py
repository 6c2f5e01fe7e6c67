"""Convert task documents back to Markdown with a custom serializer."""

from __future__ import annotations

import re
from typing import Iterable

from mdtasks.schemas import (
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


_BACKSLASH_RE = re.compile(r"\\(?=[!-/:-@\[-`{-~]|$)", re.MULTILINE)
_SPECIAL_RE = re.compile(r"([`*\[\]])")
_ANGLE_RE = re.compile(r"<(?=[A-Za-z/!?])")
_UNDERSCORE_RE = re.compile(r"(?<!\w)_|_(?!\w)")
_ENTITY_RE = re.compile(r"&(?=#?[0-9A-Za-z]+;)")
_ORDERED_START_RE = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")
_BLOCK_START_RE = re.compile(r"^(?:#{1,6}(?=\s|$)|>|[-+](?=\s|$)|[-=]+\s*$)")
_CLOSING_HASHES_RE = re.compile(r"(^|[ \t])(#+)$")


def serialize_document(document: Document) -> str:
    """Serialize a :class:`Document` to Markdown text.

    Blocks are separated by a blank line, empty lists are dropped and the
    result ends with a single newline (or is empty for an empty document).
    """
    blocks = _serialize_blocks(document.children)
    content = "\n\n".join(block for block in blocks if block).strip("\n")
    return content + "\n" if content else ""


def escape_text(value: str) -> str:
    """Escape characters that would otherwise be read as inline markup."""
    value = _BACKSLASH_RE.sub(r"\\\\", value)
    value = _SPECIAL_RE.sub(r"\\\1", value)
    value = _UNDERSCORE_RE.sub(r"\\_", value)
    value = _ANGLE_RE.sub(r"\\<", value)
    return _ENTITY_RE.sub(r"\\&", value)


def render_inline(children: Iterable[TextNode | InlineNode]) -> str:
    """Render inline content; text at the start of a line is block-escaped."""
    parts: list[str] = []
    at_line_start = True
    for child in children:
        if isinstance(child, TextNode):
            rendered = _escape_lines(escape_text(child.value), at_line_start)
        else:
            rendered = child.value
        if rendered:
            parts.append(rendered)
            at_line_start = rendered.endswith("\n")
    return "".join(parts)


def _escape_lines(text: str, at_line_start: bool) -> str:
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if index == 0 and not at_line_start:
            continue
        lines[index] = _escape_block_start(line)
    return "\n".join(lines)


def _escape_block_start(line: str) -> str:
    match = _ORDERED_START_RE.match(line)
    if match:
        return f"{match.group(1)}\\{line[match.end(1):]}"
    if _BLOCK_START_RE.match(line):
        return "\\" + line
    return line


def _serialize_blocks(nodes: Iterable[BlockNode]) -> list[str]:
    return [block for block in (_serialize_block(node) for node in nodes) if block]


def _serialize_block(node: BlockNode) -> str:
    if isinstance(node, HeadingNode):
        heading = render_inline(node.children).replace("\n", " ").strip()
        # a trailing run of # would be read as the closing sequence
        heading = _CLOSING_HASHES_RE.sub(r"\1\\\2", heading)
        prefix = "#" * node.depth
        return f"{prefix} {heading}" if heading else prefix

    if isinstance(node, ParagraphNode):
        return render_inline(node.children).strip()

    if isinstance(node, ListNode):
        return _serialize_list(node)

    if isinstance(node, OtherNode):
        return node.value

    return ""


def _serialize_list(node: ListNode) -> str:
    items: list[str] = []
    for offset, item in enumerate(node.children):
        if node.ordered:
            marker = f"{(node.start if node.start is not None else 1) + offset}{node.marker}"
        else:
            marker = node.marker
        items.append(_serialize_item(item, marker))
    return ("\n\n" if node.spread else "\n").join(items)


def _serialize_item(item: ListItemNode, marker: str) -> str:
    separator = "\n\n" if item.spread else "\n"
    body = separator.join(_serialize_blocks(item.children))
    if not body:
        return marker

    padding = " " * (len(marker) + 1)
    lines = body.split("\n")
    rendered = [f"{marker} {lines[0]}" if lines[0] else marker]
    rendered.extend(padding + line if line else "" for line in lines[1:])
    return "\n".join(rendered)
