#!/usr/bin/env python3
"""
md.py
-------------------
Markdown utilities for Marginalia.

Provides functions for:
- Front-matter extraction and splitting
- Locating front-matter keys by line
- Token-level extraction of fenced code, images and links (markdown-it-py)
- Prose views of a body with code masked out, for regex-based checks

Line numbers returned by the extraction helpers are 0-indexed positions in
the body passed in; callers add the document's body offset.
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple
from urllib.parse import unquote

# --- Third party imports ---
from markdown_it import MarkdownIt
from markdown_it.token import Token


_MD = MarkdownIt("commonmark").enable(["table", "strikethrough"])

_INLINE_CODE = re.compile(r"(`+)(?!`).+?(?<!`)\1(?!`)")
_FOOTNOTE_DEFINITION_LINE = re.compile(r"^ {0,3}\[\^[^\]\s]+\]:")
_HTML_IMG = re.compile(r"<img\b[^>]*?\bsrc\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)
_FENCE_CHARS = set("`~")


# ----- Front-matter -----
def split_frontmatter(content: str) -> Tuple[str, List[str], int]:
    """
    Split Markdown content into front-matter text and body.

    Expected format:
        ---
        title: Inventing the Y-Combinator
        ---

        Body content here...

    Args:
        content: Full file content

    Returns:
        Tuple of (frontmatter_text, body_lines, body_start)
        - frontmatter_text: YAML between the delimiters ("" if none)
        - body_lines: Body lines, leading blank lines removed
        - body_start: 1-indexed file line of ``body_lines[0]``

    Examples:
        >>> split_frontmatter("---\\ntitle: A\\n---\\n\\nBody")
        ('title: A', ['Body'], 5)
        >>> split_frontmatter("No front-matter")
        ('', ['No front-matter'], 1)
    """
    lines = content.splitlines()

    if not opens_frontmatter(content):
        return "", lines, 1

    frontmatter_end = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            frontmatter_end = i
            break

    # Unclosed block: everything is body
    if frontmatter_end is None:
        return "", lines, 1

    frontmatter_lines = lines[1:frontmatter_end]
    body_lines = lines[frontmatter_end + 1 :]
    body_start = frontmatter_end + 2

    while body_lines and body_lines[0].strip() == "":
        body_lines.pop(0)
        body_start += 1

    return "\n".join(frontmatter_lines), body_lines, body_start


def opens_frontmatter(content: str) -> bool:
    """Check whether the first line is a front-matter delimiter."""
    first_line = content.split("\n", 1)[0]
    return first_line.strip().lstrip("\ufeff") == "---"


def find_field_line_number(frontmatter_text: str, field_name: str) -> int:
    """
    Find the file line where a top-level front-matter key is defined.

    Args:
        frontmatter_text: The YAML front-matter text
        field_name: Key to look for

    Returns:
        1-indexed file line, counting the opening ``---``; 1 if not found
    """
    pattern = re.compile(rf"^{re.escape(field_name)}\s*:")
    for i, line in enumerate(frontmatter_text.split("\n"), start=1):
        if pattern.match(line):
            return i + 1
    return 1


# ----- Token extraction -----
@dataclass
class CodeBlock:
    """A fenced code block found in a document body."""

    line: int  # 0-indexed body line of the opening fence
    info: str
    language: Optional[str]
    closed: bool
    content: str


def language_from_info(info: str) -> Optional[str]:
    """
    Extract the language tag from a fence info string.

    Examples:
        >>> language_from_info("python")
        'python'
        >>> language_from_info("jsx {1,3-4}")
        'jsx'
        >>> language_from_info("js{2}")
        'js'
        >>> language_from_info("{.haskell}")
        'haskell'
        >>> language_from_info("") is None
        True
    """
    info = info.strip()
    if not info:
        return None
    word = info.split()[0]
    if word.startswith("{"):
        word = word.strip("{}").lstrip(".")
    word = re.split(r"[{:,]", word, maxsplit=1)[0]
    return word.lower() or None


def _is_closing_fence(line: str, markup: str) -> bool:
    stripped = line.strip()
    while stripped.startswith(">"):
        stripped = stripped[1:].strip()
    return (
        len(stripped) >= len(markup)
        and set(stripped) <= _FENCE_CHARS
        and stripped[0] == markup[0]
    )


def extract_code_blocks(body: str) -> List[CodeBlock]:
    """
    Find every fenced code block in a body.

    A fence that runs to the end of its container without a closing
    delimiter is reported with ``closed=False``.

    Examples:
        >>> blocks = extract_code_blocks("```python\\nprint(1)\\n```")
        >>> blocks[0].language, blocks[0].closed
        ('python', True)
    """
    lines = body.split("\n")
    blocks: List[CodeBlock] = []
    for token in _MD.parse(body):
        if token.type != "fence" or token.map is None:
            continue
        start, end = token.map
        last = end - 1
        closed = last > start and last < len(lines) and _is_closing_fence(lines[last], token.markup)
        blocks.append(
            CodeBlock(
                line=start,
                info=token.info.strip(),
                language=language_from_info(token.info),
                closed=closed,
                content=token.content,
            )
        )
    return blocks


def code_line_indexes(body: str) -> Set[int]:
    """Return the 0-indexed body lines that belong to fenced or indented code."""
    indexes: Set[int] = set()
    for token in _MD.parse(body):
        if token.type in ("fence", "code_block") and token.map is not None:
            indexes.update(range(*token.map))
    return indexes


def prose_lines(body: str) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(line_index, text)`` for body lines outside code.

    Inline code spans are removed from the yielded text.
    """
    skip = code_line_indexes(body)
    for idx, line in enumerate(body.split("\n")):
        if idx in skip:
            continue
        yield idx, _INLINE_CODE.sub("", line)


def _mask_footnote_definitions(body: str) -> str:
    # "[^1]: Ibid." is otherwise a valid CommonMark link reference definition.
    # Only the label goes; the note text stays for inline parsing.
    return "\n".join(
        _FOOTNOTE_DEFINITION_LINE.sub("", line, count=1)
        for line in body.split("\n")
    )


def _walk_inline(tokens: List[Token]) -> Iterator[Tuple[int, Token]]:
    # Inline tokens carry the map of their whole paragraph; line breaks
    # between children give the line each child sits on.
    for token in tokens:
        if token.type != "inline" or token.map is None or not token.children:
            continue
        line = token.map[0]
        stack = list(token.children)
        while stack:
            child = stack.pop(0)
            yield line, child
            if child.type in ("softbreak", "hardbreak"):
                line += 1
            if child.children:
                stack[0:0] = child.children


def extract_images(body: str) -> List[Tuple[int, str]]:
    """
    Find image references: Markdown ``![alt](src)`` and HTML ``<img src>``.

    Returns:
        List of (0-indexed body line, decoded src) in document order
    """
    images: List[Tuple[int, str]] = []
    for line, token in _walk_inline(_MD.parse(_mask_footnote_definitions(body))):
        if token.type == "image":
            src = token.attrGet("src")
            if src:
                images.append((line, unquote(str(src))))

    for idx, text in prose_lines(body):
        for match in _HTML_IMG.finditer(text):
            images.append((idx, match.group(1)))

    images.sort(key=lambda item: item[0])
    return images


def extract_links(body: str) -> List[Tuple[int, str]]:
    """
    Find Markdown links, including autolinks and footnote text.

    Returns:
        List of (0-indexed body line, decoded href) in document order
    """
    links: List[Tuple[int, str]] = []
    for line, token in _walk_inline(_MD.parse(_mask_footnote_definitions(body))):
        if token.type == "link_open":
            href = token.attrGet("href")
            if href:
                links.append((line, unquote(str(href))))
    return links
