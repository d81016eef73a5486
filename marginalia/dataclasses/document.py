#!/usr/bin/env python3
"""
document.py
-------------------
Dataclass representing one article of the corpus.

A document is a Markdown/MDX file with a YAML front-matter block followed
by a prose body:

    ---
    title: Inventing the Y-Combinator
    tags: [lambda-calculus, javascript]
    date: 2019-07-02
    updatedAt: 2020-01-15
    ---

    Body with prose, $$math$$, fenced code, footnotes[^1] and images.

Documents are self-contained: nothing in one file affects another. The model
is deliberately lenient: values that fail validation (an unparseable date,
a non-string title) are kept in ``metadata`` and surface as ``None`` on the
typed attributes (a date alias that does not parse gives way to the next
one that does), so the validators can load and report on broken files.
Only problems that prevent reading the front-matter at all raise
``DocumentParseError``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# --- Third party imports ---
import yaml

# --- Local imports ---
from marginalia.core.exceptions import DocumentParseError
from marginalia.utils import md, parsers
from marginalia.validators.configs import EDITED_KEYS, PUBLISHED_KEYS

logger = logging.getLogger(__name__)


def first_date_key(metadata: Dict[str, Any], keys: Sequence[str]) -> Optional[str]:
    """Return the first of ``keys`` whose value parses as a date, if any."""
    for key in keys:
        if parsers.parse_date(metadata.get(key)) is not None:
            return key
    return None


@dataclass
class Document:
    """
    One article: front-matter metadata plus body.

    Attributes:
        path: Location of the source file
        title: Article title (None if missing or not a string)
        tags: Unique tags in order of first appearance
        published: Publish date from ``date``/``publishedAt``
        edited: Last edit date from ``updatedAt``/``editedAt``
        body: Body text after the front-matter
        metadata: Raw parsed front-matter mapping
        frontmatter_text: Raw YAML text, for locating keys by line
        has_frontmatter: Whether the file opened with a front-matter block
        body_offset: 1-indexed file line of the first body line
    """

    path: Path
    title: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    published: Optional[date] = None
    edited: Optional[date] = None
    body: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    frontmatter_text: str = ""
    has_frontmatter: bool = False
    body_offset: int = 1

    # ---- Construction ----
    @classmethod
    def from_file(cls, path: Path) -> "Document":
        """
        Load a document from disk.

        Args:
            path: Markdown or MDX file

        Returns:
            Parsed Document

        Raises:
            DocumentParseError: If the file cannot be read as UTF-8 or its
                front-matter cannot be parsed
        """
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParseError(f"File is not valid UTF-8: {e}") from e
        except OSError as e:
            raise DocumentParseError(f"Cannot read file: {e}") from e
        return cls.from_text(text, path)

    @classmethod
    def from_text(cls, text: str, path: Path) -> "Document":
        """
        Build a document from file content.

        Args:
            text: Full file content
            path: Path the content belongs to

        Raises:
            DocumentParseError: On an unclosed front-matter block, invalid
                YAML, or front-matter that is not a mapping
        """
        frontmatter_text, body_lines, body_offset = md.split_frontmatter(text)
        opened = md.opens_frontmatter(text)

        if opened and body_offset == 1:
            raise DocumentParseError(
                "Front-matter block opened on line 1 is never closed",
                line_number=1,
            )

        metadata: Dict[str, Any] = {}
        if opened:
            try:
                loaded = yaml.safe_load(frontmatter_text)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                # +2: opening delimiter and 0-indexed mark
                line = mark.line + 2 if mark is not None else 1
                raise DocumentParseError(f"Invalid YAML syntax: {e}", line_number=line) from e

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise DocumentParseError(
                    f"Front-matter must be a key-value mapping, got {type(loaded).__name__}",
                    line_number=2,
                )
            metadata = {str(k): v for k, v in loaded.items()}

        title = metadata.get("title")
        published_key = first_date_key(metadata, PUBLISHED_KEYS)
        edited_key = first_date_key(metadata, EDITED_KEYS)

        document = cls(
            path=path,
            title=title.strip() if isinstance(title, str) and title.strip() else None,
            tags=parsers.normalize_tags(metadata.get("tags")),
            published=parsers.parse_date(metadata[published_key]) if published_key else None,
            edited=parsers.parse_date(metadata[edited_key]) if edited_key else None,
            body="\n".join(body_lines),
            metadata=metadata,
            frontmatter_text=frontmatter_text,
            has_frontmatter=opened,
            body_offset=body_offset,
        )
        logger.debug("Loaded %s (%s)", path, document.title)
        return document

    # ---- Derived values ----
    @property
    def slug(self) -> str:
        return self.path.stem

    @property
    def is_edited(self) -> bool:
        return self.edited is not None

    @property
    def body_lines(self) -> List[str]:
        return self.body.split("\n") if self.body else []

    def file_line(self, body_index: int) -> int:
        """Convert a 0-indexed body line to a 1-indexed file line."""
        return self.body_offset + body_index

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable summary of the document."""
        return {
            "path": str(self.path),
            "title": self.title,
            "tags": list(self.tags),
            "published": self.published.isoformat() if self.published else None,
            "edited": self.edited.isoformat() if self.edited else None,
        }

    def __str__(self) -> str:
        when = self.published.isoformat() if self.published else "undated"
        return f"{self.title or self.slug} ({when})"
