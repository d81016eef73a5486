"""Data structures for Marginalia documents."""

from .document import Document

__all__ = ["Document"]
