"""
Marginalia
==========

A content-integrity linter for a corpus of long-form Markdown/MDX essays.

Each article is a self-contained document: a YAML front-matter block
(title, tags, publish and edit dates) followed by a prose body with fenced
code samples, math, footnotes and image embeds. Marginalia loads the corpus,
models every file as a Document and reports authoring mistakes before an
external renderer ever sees them. It never rewrites or renders anything.

Main Components:
    - core: Logging, exceptions, paths, CLI helpers
    - dataclasses: The Document model
    - utils: Front-matter splitting, Markdown token helpers, date parsing
    - validators: Per-document and corpus-level checks, plus the CLI
    - catalog: Corpus loading and summary statistics

Primary Interfaces:
    - marginalia.validators.cli: The ``marginalia`` command
    - marginalia.validators.document.DocumentValidator: Programmatic linting

Example Usage:
    >>> from pathlib import Path
    >>> from marginalia.validators.document import DocumentValidator
    >>> report = DocumentValidator(Path("content")).validate_all()
    >>> report.is_healthy
    True
"""

__version__ = "1.0.0"

from marginalia.dataclasses.document import Document
from marginalia.core.paths import CONTENT_DIR, LOG_DIR

__all__ = [
    "Document",
    "CONTENT_DIR",
    "LOG_DIR",
]
