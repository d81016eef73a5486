#!/usr/bin/env python3
"""
validators
----------
Content-integrity checks for an essay corpus.

- configs.py: LintConfig and the recognised fields/languages
- document.py: DocumentValidator, per-document and corpus-level checks
- cli/: The ``marginalia`` command

Usage:
    # Through CLI
    marginalia lint all
    marginalia lint duplicates

    # Direct import for programmatic use
    from marginalia.validators.document import DocumentValidator
"""

__all__ = [
    "configs",
    "document",
]
