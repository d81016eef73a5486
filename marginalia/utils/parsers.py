#!/usr/bin/env python3
"""
parsers.py
-------------------
Value normalisation helpers for front-matter fields.

Functions:
    parse_date: Normalise a YAML value into a ``date``
    normalize_title: Canonical form of a title for duplicate detection
    normalize_tags: Turn a ``tags`` value into an ordered, de-duplicated list
    is_external_url: Whether a link/image target points off-repository
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date, datetime
from typing import Any, List, Optional

# Human-written date forms seen in hand-edited front-matter
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "data:", "//")

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def parse_date(value: Any) -> Optional[date]:
    """
    Normalise a front-matter date value.

    PyYAML already turns unquoted ISO dates into ``date``/``datetime``;
    quoted or hand-written ones arrive as strings.

    Examples:
        >>> parse_date("2021-03-04")
        datetime.date(2021, 3, 4)
        >>> parse_date("2021-03-04T10:00:00Z")
        datetime.date(2021, 3, 4)
        >>> parse_date("March 4, 2021")
        datetime.date(2021, 3, 4)
        >>> parse_date("someday") is None
        True
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_title(title: str) -> str:
    """
    Collapse whitespace and case so near-identical titles compare equal.

    Examples:
        >>> normalize_title("  Inventing the   Y-Combinator ")
        'inventing the y-combinator'
    """
    return " ".join(title.split()).casefold()


def normalize_tags(value: Any) -> List[str]:
    """
    Turn a ``tags`` value into a list of unique strings, first occurrence wins.

    A single string is treated as a comma-separated list.

    Examples:
        >>> normalize_tags(["react", "hooks", "react"])
        ['react', 'hooks']
        >>> normalize_tags("python, processes")
        ['python', 'processes']
        >>> normalize_tags(None)
        []
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: List[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        return []

    tags: List[str] = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def is_external_url(target: str) -> bool:
    """
    Check whether a link or image target lives outside the repository.

    Any URI scheme (``https:``, ``mailto:``, ``data:``, ``ftp:``) and
    protocol-relative ``//host`` targets count as external.

    Examples:
        >>> is_external_url("https://example.com/a.png")
        True
        >>> is_external_url("../img/diagram.svg")
        False
    """
    target = target.strip()
    if target.startswith(_EXTERNAL_PREFIXES):
        return True
    return bool(_SCHEME.match(target))
