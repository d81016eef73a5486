#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem helpers for discovering documents in a content tree.

Functions:
    find_markdown_files: Discover documents by glob patterns, skipping ignored dirs
    resolve_asset_path: Resolve an image/link target against the repository
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Iterable, List, Optional


def find_markdown_files(
    directory: Path,
    patterns: Iterable[str] = ("**/*.md", "**/*.mdx"),
    ignore_dirs: Iterable[str] = (),
) -> List[Path]:
    """
    Find all documents matching any of the patterns.

    Args:
        directory: Content root
        patterns: Glob patterns relative to the root
        ignore_dirs: Directory names skipped anywhere in the tree

    Returns:
        Sorted, de-duplicated list of file paths (empty if directory is missing)
    """
    if not directory.exists():
        return []

    ignored = set(ignore_dirs)
    found = set()
    for pattern in patterns:
        for path in directory.glob(pattern):
            if not path.is_file():
                continue
            relative_parts = path.relative_to(directory).parts[:-1]
            if ignored.intersection(relative_parts):
                continue
            found.add(path)
    return sorted(found)


def resolve_asset_path(
    target: str, document_path: Path, assets_dir: Optional[Path]
) -> Path:
    """
    Resolve a local link or image target to a filesystem path.

    Rooted targets (``/img/diagram.png``) resolve against ``assets_dir``;
    everything else against the document's own directory. Query strings
    and fragments are dropped.

    Examples:
        >>> resolve_asset_path("img/a.png#x", Path("/c/post.md"), None)
        PosixPath('/c/img/a.png')
        >>> resolve_asset_path("/img/a.png", Path("/c/post.md"), Path("/static"))
        PosixPath('/static/img/a.png')
    """
    clean = target.split("#", 1)[0].split("?", 1)[0].strip()
    if clean.startswith("/"):
        base = assets_dir if assets_dir is not None else document_path.parent
        return base / clean.lstrip("/")
    return document_path.parent / clean
