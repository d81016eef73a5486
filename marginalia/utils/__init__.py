"""
Utilities package for Marginalia.

- md: Front-matter splitting and markdown-it-py token extraction
- fs: Document discovery and asset path resolution
- parsers: Date, title and tag normalisation

Import commonly-used utilities directly from this package:
    from marginalia.utils import split_frontmatter, parse_date
"""

from .md import (
    CodeBlock,
    split_frontmatter,
    opens_frontmatter,
    find_field_line_number,
    language_from_info,
    extract_code_blocks,
    extract_images,
    extract_links,
    code_line_indexes,
    prose_lines,
)

from .fs import (
    find_markdown_files,
    resolve_asset_path,
)

from .parsers import (
    parse_date,
    normalize_title,
    normalize_tags,
    is_external_url,
)

__all__ = [
    "CodeBlock",
    "split_frontmatter",
    "opens_frontmatter",
    "find_field_line_number",
    "language_from_info",
    "extract_code_blocks",
    "extract_images",
    "extract_links",
    "code_line_indexes",
    "prose_lines",
    "find_markdown_files",
    "resolve_asset_path",
    "parse_date",
    "normalize_title",
    "normalize_tags",
    "is_external_url",
]
