"""Parse Markdown task files into a flat document of block nodes."""

from __future__ import annotations

import re
from typing import Sequence

from mdtasks.exceptions import MdTasksError
from mdtasks.markdown import escape_text
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

try:
    from markdown_it import MarkdownIt
    from markdown_it.common.utils import normalizeReference
    from markdown_it.token import Token
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise MdTasksError(
        "markdown-it-py is required for Markdown parsing (pip install markdown-it-py)."
    ) from exc


_LIST_OPEN = {"bullet_list_open", "ordered_list_open"}
_ITEM_PREFIX_RE = re.compile(r"^[ \t]*(?:[*+-]|\d{1,9}[.)])(?:[ \t]+|$)")
# [text][label], [text][] and [text] (not followed by an inline destination)
_REFERENCE_LINK_RE = re.compile(
    r"(?<!\\)(?P<bang>!?)\[(?P<text>(?:[^\[\]\\]|\\.)*)\]"
    r"(?:\[(?P<label>(?:[^\[\]\\]|\\.)*)\]|(?![(\[:]))"
)

References = dict[str, dict[str, str]]


def parse_markdown(text: str) -> Document:
    """Parse Markdown text into a :class:`Document`.

    Headings, lists, list items and paragraphs are modelled; every other
    block (code, block quotes, thematic breaks, HTML) becomes an ``other``
    node holding its source lines. Link reference definitions produce no
    token, so source lines no block covers are kept as ``other`` nodes too.
    """
    md = MarkdownIt("commonmark")
    env: dict = {}
    tokens = md.parse(text, env)
    # same line breaks as markdown-it, so token maps index into this list
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    references: References = env.get("references", {})
    children = _parse_blocks(
        tokens, 0, len(tokens), lines, (0, len(lines)), _ItemContext(), references
    )
    return Document(children=children)


class _ItemContext:
    """Source position of the innermost list item, used to re-indent opaque blocks."""

    def __init__(self, first_line: int | None = None, indent: int = 0) -> None:
        self.first_line = first_line
        self.indent = indent


def _parse_blocks(
    tokens: Sequence[Token],
    start: int,
    end: int,
    lines: list[str],
    line_range: tuple[int, int],
    context: _ItemContext,
    references: References,
) -> list[BlockNode]:
    blocks: list[BlockNode] = []
    cursor, last_line = line_range
    index = start
    while index < end:
        token = tokens[index]
        close = _find_close(tokens, index)
        if token.map:
            blocks.extend(_uncovered_blocks(lines, cursor, token.map[0], context))
            cursor = max(cursor, token.map[1])

        if token.type == "heading_open":
            blocks.append(
                HeadingNode(
                    depth=int(token.tag[1]),
                    children=_inline_children(tokens[index + 1], references),
                )
            )
        elif token.type == "paragraph_open":
            blocks.append(ParagraphNode(children=_inline_children(tokens[index + 1], references)))
        elif token.type in _LIST_OPEN:
            blocks.append(_parse_list(tokens, index, close, lines, references))
        else:
            source = _block_source(token, lines, context)
            if source:
                blocks.append(OtherNode(value=source))

        index = close + 1

    blocks.extend(_uncovered_blocks(lines, cursor, last_line, context))
    return blocks


def _parse_list(
    tokens: Sequence[Token],
    start: int,
    end: int,
    lines: list[str],
    references: References,
) -> ListNode:
    list_token = tokens[start]
    ordered = list_token.type == "ordered_list_open"
    spread = False
    items: list[ListItemNode] = []

    index = start + 1
    while index < end:
        item_token = tokens[index]
        close = _find_close(tokens, index)
        context = _item_context(item_token, lines)
        for token in tokens[index + 1 : close]:
            if token.type == "paragraph_open" and token.level == item_token.level + 1:
                spread = spread or not token.hidden
        line_range = (item_token.map[0], item_token.map[1]) if item_token.map else (0, 0)
        children = _parse_blocks(tokens, index + 1, close, lines, line_range, context, references)
        items.append(ListItemNode(children=children))
        index = close + 1

    for item in items:
        item.spread = spread

    start_number = None
    if ordered:
        start_number = int(list_token.attrGet("start") or 1)
    return ListNode(
        ordered=ordered,
        start=start_number,
        spread=spread,
        marker=list_token.markup or ("." if ordered else "*"),
        children=items,
    )


def _find_close(tokens: Sequence[Token], index: int) -> int:
    """Return the index of the token closing ``tokens[index]``."""
    if tokens[index].nesting != 1:
        return index
    depth = 0
    for position in range(index, len(tokens)):
        depth += tokens[position].nesting
        if depth == 0:
            return position
    return len(tokens) - 1


def _item_context(item_token: Token, lines: list[str]) -> _ItemContext:
    if not item_token.map:
        return _ItemContext()
    first_line = item_token.map[0]
    match = _ITEM_PREFIX_RE.match(lines[first_line]) if first_line < len(lines) else None
    indent = len(match.group(0)) if match else 0
    return _ItemContext(first_line=first_line, indent=indent)


def _block_source(token: Token, lines: list[str], context: _ItemContext) -> str:
    if not token.map:
        return ""
    first, last = token.map
    return _source_lines(lines, first, last, context)


def _uncovered_blocks(
    lines: list[str], first: int, last: int, context: _ItemContext
) -> list[OtherNode]:
    """Keep non-blank source lines between blocks, one node per run."""
    blocks: list[OtherNode] = []
    run_start = None
    for number in range(first, min(last, len(lines)) + 1):
        blank = number >= min(last, len(lines)) or not lines[number].strip()
        if blank and run_start is not None:
            source = _source_lines(lines, run_start, number, context)
            if source.strip():
                blocks.append(OtherNode(value=source))
            run_start = None
        elif not blank and run_start is None:
            run_start = number
    return blocks


def _source_lines(lines: list[str], first: int, last: int, context: _ItemContext) -> str:
    source_lines: list[str] = []
    for number in range(first, min(last, len(lines))):
        line = lines[number]
        if number == context.first_line:
            line = _ITEM_PREFIX_RE.sub("", line, count=1)
        elif context.indent:
            leading = len(line) - len(line.lstrip(" "))
            line = line[min(leading, context.indent) :]
        source_lines.append(line)
    while source_lines and not source_lines[-1].strip():
        source_lines.pop()
    return "\n".join(source_lines)


def _inline_children(inline: Token, references: References) -> list[TextNode | InlineNode]:
    """Split inline tokens into plain text runs and raw Markdown spans."""
    nodes: list[TextNode | InlineNode] = []
    children = inline.children or []
    cursor = 0

    def add_text(value: str) -> None:
        if nodes and isinstance(nodes[-1], TextNode):
            nodes[-1].value += value
        else:
            nodes.append(TextNode(value=value))

    def add_span(span: Sequence[Token]) -> None:
        nonlocal cursor
        found = _reference_source(inline.content, cursor, span, references)
        if found is None:
            nodes.append(InlineNode(value=render_inline_tokens(span)))
            return
        value, cursor = found
        nodes.append(InlineNode(value=value))

    index = 0
    while index < len(children):
        token = children[index]
        if token.type == "text":
            add_text(token.content)
        elif token.type == "softbreak":
            add_text("\n")
        elif token.nesting == 1:
            close = _find_close(children, index)
            add_span(children[index : close + 1])
            index = close
        else:
            add_span([token])
        index += 1
    return nodes


def _reference_source(
    content: str, cursor: int, span: Sequence[Token], references: References
) -> tuple[str, int] | None:
    """Return the reference-style source of a link or image and the offset after it.

    Returns None for inline links, for anything that is not a link or image,
    and when no reference form with the same text and destination follows
    ``cursor``.
    """
    token = span[0]
    if not references or token.type not in {"link_open", "image"}:
        return None
    if token.type == "image":
        text = token.content
    else:
        text = render_inline_tokens(span[1:-1])
    attr = "src" if token.type == "image" else "href"
    href = token.attrGet(attr)
    title = token.attrGet("title") or None
    for match in _REFERENCE_LINK_RE.finditer(content, cursor):
        if bool(match.group("bang")) != (token.type == "image") or match.group("text") != text:
            continue
        label = match.group("label") or match.group("text")
        reference = references.get(normalizeReference(label))
        if reference is None:
            continue
        if reference.get("href") == href and (reference.get("title") or None) == title:
            return match.group(0), match.end()
    return None


def render_inline_tokens(tokens: Sequence[Token]) -> str:
    """Render markdown-it inline tokens back to Markdown source."""
    parts: list[str] = []
    links: list[Token] = []
    for token in tokens:
        if token.type == "text":
            if links and links[-1].markup == "autolink":
                parts.append(token.content)
            else:
                parts.append(escape_text(token.content))
        elif token.type == "text_special":
            parts.append(token.markup or token.content)
        elif token.type == "softbreak":
            parts.append("\n")
        elif token.type == "hardbreak":
            parts.append("\\\n")
        elif token.type == "code_inline":
            parts.append(_render_code_span(token))
        elif token.type == "link_open":
            links.append(token)
            parts.append("<" if token.markup == "autolink" else "[")
        elif token.type == "link_close":
            opener = links.pop() if links else None
            if opener is not None and opener.markup == "autolink":
                parts.append(">")
            else:
                href = str(opener.attrGet("href") or "") if opener else ""
                title = opener.attrGet("title") if opener else None
                parts.append(f"]({_render_destination(href, title)})")
        elif token.type == "image":
            alt = render_inline_tokens(token.children or []) if token.children else token.content
            src = str(token.attrGet("src") or "")
            parts.append(f"![{alt}]({_render_destination(src, token.attrGet('title'))})")
        elif token.type in {"em_open", "em_close", "strong_open", "strong_close", "s_open", "s_close"}:
            parts.append(token.markup)
        else:
            parts.append(token.content)
    return "".join(parts)


def _render_code_span(token: Token) -> str:
    content = token.content
    fence = token.markup or "`"
    if content.startswith("`") or content.endswith("`") or (
        content.startswith(" ") and content.endswith(" ") and content.strip()
    ):
        content = f" {content} "
    return f"{fence}{content}{fence}"


def _render_destination(href: str, title: object | None) -> str:
    if " " in href or not href:
        href = f"<{href}>"
    if title:
        escaped = str(title).replace('"', '\\"')
        return f'{href} "{escaped}"'
    return href
