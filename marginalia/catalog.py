#!/usr/bin/env python3
"""
catalog.py
----------
Corpus loading and summary statistics.

Functions:
    load_corpus: Load every document under a content root
    summarize: Counts, tag frequencies, date range and code languages
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# --- Local imports ---
from marginalia.core.exceptions import DocumentParseError
from marginalia.core.logging_manager import MarginaliaLogger, safe_logger
from marginalia.dataclasses.document import Document
from marginalia.utils import fs, md
from marginalia.validators.configs import LintConfig


def load_corpus(
    content_dir: Path,
    config: Optional[LintConfig] = None,
    logger: Optional[MarginaliaLogger] = None,
) -> Tuple[List[Document], List[Tuple[Path, DocumentParseError]]]:
    """
    Load every document under the content root.

    Args:
        content_dir: Root directory of the corpus
        config: Lint settings for discovery (defaults if None)
        logger: Optional logger instance

    Returns:
        Tuple of (documents, failures), failures pairing each unparseable
        path with its error
    """
    config = config or LintConfig()
    log = safe_logger(logger)

    documents: List[Document] = []
    failures: List[Tuple[Path, DocumentParseError]] = []
    for path in fs.find_markdown_files(content_dir, config.patterns, config.ignore_dirs):
        try:
            documents.append(Document.from_file(path))
        except DocumentParseError as e:
            log.log_error(e, {"file": str(path)})
            failures.append((path, e))

    log.log_info(
        "Corpus loaded",
        {"content_dir": str(content_dir), "documents": len(documents), "failures": len(failures)},
    )
    return documents, failures


def summarize(documents: List[Document]) -> Dict[str, Any]:
    """
    Summarise a loaded corpus.

    Returns:
        Dictionary with ``documents``, ``edited``, ``tags`` (tag -> count,
        most common first), ``first_published``, ``last_published`` and
        ``languages`` (code block language -> count)
    """
    tags: Counter = Counter()
    languages: Counter = Counter()
    dates = []

    for document in documents:
        tags.update(document.tags)
        if document.published:
            dates.append(document.published)
        for block in md.extract_code_blocks(document.body):
            if block.language:
                languages[block.language] += 1

    return {
        "documents": len(documents),
        "edited": sum(1 for d in documents if d.is_edited),
        "tags": dict(tags.most_common()),
        "first_published": min(dates).isoformat() if dates else None,
        "last_published": max(dates).isoformat() if dates else None,
        "languages": dict(languages.most_common()),
    }
