#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for Marginalia.

Exception Hierarchy:
    Exception (built-in)
    └── MarginaliaError - Base for all Marginalia errors
        ├── DocumentParseError - A file cannot be read or its front-matter parsed
        ├── ValidationError - Invalid validator usage (e.g. an unknown check name)
        └── ConfigError - Invalid lint configuration

Per-document failures (DocumentParseError) are turned into report issues by
the validators so that one broken file never aborts a corpus run.
ConfigError is fatal for the command that hit it.

Usage:
    from marginalia.core.exceptions import DocumentParseError

    try:
        doc = Document.from_file(path)
    except DocumentParseError as e:
        logger.log_error(e, {"file": str(path)})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional


class MarginaliaError(Exception):
    """
    Base exception for Marginalia.

    Catch this to handle any error raised by the linter itself.
    """

    pass


class DocumentParseError(MarginaliaError):
    """
    Exception for document loading failures.

    Raised when a file cannot be turned into a Document:
    - File not readable or not UTF-8
    - Front-matter block opened but never closed
    - Invalid YAML syntax in the front-matter
    - Front-matter that is not a key-value mapping

    Attributes:
        line_number: 1-indexed file line the problem was found on, if known

    Examples:
        >>> raise DocumentParseError("Invalid YAML syntax", line_number=4)
        >>> raise DocumentParseError("Front-matter must be a mapping")
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class ValidationError(MarginaliaError):
    """
    Exception for invalid validator usage.

    Raised for requests the validator cannot honour, such as a check name
    it does not know. Problems in the documents themselves are issues in
    the report, never exceptions.

    Examples:
        >>> raise ValidationError("Unknown check(s): spelling")
    """

    pass


class ConfigError(MarginaliaError):
    """
    Exception for invalid lint configuration.

    Raised when ``marginalia.yaml`` is not valid YAML, is not a mapping,
    contains unknown keys, or has values of the wrong type.

    Examples:
        >>> raise ConfigError("Unknown config key: 'languages'")
    """

    pass
