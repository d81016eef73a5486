#!/usr/bin/env python3
"""
document.py
-----------
Content-integrity validation for essay documents.

Validates:
- Front-matter presence, YAML syntax, required fields and field types
- Publish/edit dates: parseable, consistent, edited on or after published
- Fenced code blocks: terminated, tagged with a recognised language
- Image references resolving to files in the repository
- Relative links resolving to files in the repository
- Footnote references and definitions pairing up
- Balanced ``$$`` display-math delimiters
- Empty bodies and leftover placeholder markers
- Duplicate titles across the corpus (content anomaly)

Usage:
    marginalia lint all
    marginalia lint frontmatter content/y-combinator.md
    marginalia lint duplicates
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

# --- Local imports ---
from marginalia.core.exceptions import DocumentParseError, ValidationError
from marginalia.core.logging_manager import MarginaliaLogger, safe_logger
from marginalia.dataclasses.document import Document, first_date_key
from marginalia.utils import fs, md, parsers
from marginalia.validators.configs import EDITED_KEYS, PUBLISHED_KEYS, LintConfig


_FOOTNOTE_DEFINITION = re.compile(r"^ {0,3}\[\^([^\]\s]+)\]:")
_FOOTNOTE_REFERENCE = re.compile(r"\[\^([^\]\s]+)\](?!:)")
_DISPLAY_MATH = re.compile(r"(?<!\\)\$\$")

# Type mismatches on these fields lose data downstream
_STRICT_TYPE_FIELDS = {"title", "tags", *PUBLISHED_KEYS, *EDITED_KEYS}


@dataclass
class DocumentIssue:
    """Represents a validation issue in a document."""

    file_path: Path
    line_number: Optional[int]
    severity: str  # error, warning
    category: str  # frontmatter, dates, code, image, link, footnote, math, content, duplicate
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": str(self.file_path),
            "line": self.line_number,
            "severity": self.severity,
            "category": self.category,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationReport:
    """Complete validation report for a lint run."""

    files_checked: int = 0
    issues: List[DocumentIssue] = field(default_factory=list)

    def add_issue(self, issue: DocumentIssue) -> None:
        self.issues.append(issue)

    def add_issues(self, issues: Iterable[DocumentIssue]) -> None:
        for issue in issues:
            self.add_issue(issue)

    @property
    def total_errors(self) -> int:
        return sum(1 for i in self.issues if i.severity == "error")

    @property
    def total_warnings(self) -> int:
        return sum(1 for i in self.issues if i.severity == "warning")

    @property
    def files_with_errors(self) -> int:
        return len({i.file_path for i in self.issues if i.severity == "error"})

    @property
    def files_with_warnings(self) -> int:
        return len({i.file_path for i in self.issues if i.severity == "warning"})

    @property
    def has_errors(self) -> bool:
        return self.total_errors > 0

    @property
    def has_warnings(self) -> bool:
        return self.total_warnings > 0

    @property
    def is_healthy(self) -> bool:
        """Check if all files are healthy (no errors)."""
        return not self.has_errors

    def failed(self, strict: bool = False) -> bool:
        """Whether the run should fail; under strict, warnings fail too."""
        return self.has_errors or (strict and self.has_warnings)

    def issues_in(self, category: str) -> List[DocumentIssue]:
        return [i for i in self.issues if i.category == category]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_checked": self.files_checked,
            "files_with_errors": self.files_with_errors,
            "files_with_warnings": self.files_with_warnings,
            "total_errors": self.total_errors,
            "total_warnings": self.total_warnings,
            "issues": [i.to_dict() for i in self.issues],
        }


class DocumentValidator:
    """Validates the documents of an essay corpus."""

    # Per-document checks, in the order they run
    CHECKS = (
        "frontmatter",
        "dates",
        "code",
        "images",
        "links",
        "footnotes",
        "math",
        "body",
    )

    # Checks that need the whole corpus
    CORPUS_CHECKS = ("duplicates",)

    def __init__(
        self,
        content_dir: Path,
        config: Optional[LintConfig] = None,
        logger: Optional[MarginaliaLogger] = None,
    ):
        """
        Initialize document validator.

        Args:
            content_dir: Root directory of the corpus
            config: Lint settings (defaults if None)
            logger: Optional logger instance
        """
        self.content_dir = content_dir
        self.config = config or LintConfig()
        self.logger = logger
        self.report = ValidationReport()
        self.unparseable: List[Path] = []
        self._checks: Dict[str, Callable[[Document], List[DocumentIssue]]] = {
            "frontmatter": self.validate_frontmatter,
            "dates": self.validate_dates,
            "code": self.validate_code_blocks,
            "images": self.validate_images,
            "links": self.validate_links,
            "footnotes": self.validate_footnotes,
            "math": self.validate_math,
            "body": self.validate_body,
        }

    # --- Helpers ---

    def _issue(
        self,
        document: Document,
        line_number: Optional[int],
        severity: str,
        category: str,
        message: str,
        suggestion: Optional[str] = None,
    ) -> DocumentIssue:
        return DocumentIssue(
            file_path=document.path,
            line_number=line_number,
            severity=severity,
            category=category,
            message=message,
            suggestion=suggestion,
        )

    def _field_line(self, document: Document, field_name: str) -> int:
        return md.find_field_line_number(document.frontmatter_text, field_name)

    def _select(self, checks: Optional[Iterable[str]]) -> List[str]:
        if checks is None:
            return list(self.CHECKS + self.CORPUS_CHECKS)
        selected = list(checks)
        unknown = set(selected) - set(self.CHECKS) - set(self.CORPUS_CHECKS)
        if unknown:
            raise ValidationError(f"Unknown check(s): {', '.join(sorted(unknown))}")
        return selected

    def discover(self) -> List[Path]:
        """List the documents under the content root."""
        return fs.find_markdown_files(
            self.content_dir, self.config.patterns, self.config.ignore_dirs
        )

    def load_document(self, file_path: Path) -> Optional[Document]:
        """
        Load a document, recording a parse failure as an issue.

        Returns:
            The Document, or None if it could not be parsed
        """
        try:
            return Document.from_file(file_path)
        except DocumentParseError as e:
            self.unparseable.append(file_path)
            safe_logger(self.logger).log_debug(
                "Unparseable document", {"file": str(file_path), "error": str(e)}
            )
            self.report.add_issue(
                DocumentIssue(
                    file_path=file_path,
                    line_number=e.line_number,
                    severity="error",
                    category="frontmatter",
                    message=str(e),
                    suggestion="Front-matter must be a YAML mapping between two --- lines",
                )
            )
            return None

    # --- Single document ---

    def validate_document(
        self, document: Document, checks: Optional[Iterable[str]] = None
    ) -> List[DocumentIssue]:
        """
        Run per-document checks on an already loaded document.

        Issues are returned, not recorded in the report.
        """
        issues: List[DocumentIssue] = []
        for name in self._select(checks):
            if name in self._checks:
                issues.extend(self._checks[name](document))
        return issues

    def validate_file(
        self, file_path: Path, checks: Optional[Iterable[str]] = None
    ) -> List[DocumentIssue]:
        """
        Validate a single file and record the result.

        Args:
            file_path: Markdown or MDX file
            checks: Names from CHECKS to run (all if None)

        Returns:
            List of issues found in the file
        """
        self.report.files_checked += 1
        before = len(self.report.issues)

        document = self.load_document(file_path)
        if document is not None:
            self.report.add_issues(self.validate_document(document, checks))

        return self.report.issues[before:]

    def validate_frontmatter(self, document: Document) -> List[DocumentIssue]:
        """Validate front-matter presence, required fields, types and keys."""
        issues: List[DocumentIssue] = []
        metadata = document.metadata

        if not document.has_frontmatter:
            issues.append(self._issue(
                document, 1, "error", "frontmatter",
                "No front-matter block",
                "Start the file with a --- delimited YAML block (title, date, tags)",
            ))
            return issues

        for field_name in self.config.required_fields:
            if field_name not in metadata:
                issues.append(self._issue(
                    document, 1, "error", "frontmatter",
                    f"Required field '{field_name}' missing",
                    f"Add '{field_name}: <value>' to the front-matter",
                ))
            elif metadata[field_name] in (None, "", []):
                issues.append(self._issue(
                    document, self._field_line(document, field_name), "error", "frontmatter",
                    f"Required field '{field_name}' is empty",
                ))

        if not any(metadata.get(key) not in (None, "") for key in PUBLISHED_KEYS):
            issues.append(self._issue(
                document, 1, "error", "frontmatter",
                f"Missing publish date (one of: {', '.join(PUBLISHED_KEYS)})",
                "Add 'date: YYYY-MM-DD' to the front-matter",
            ))

        for field_name, value in metadata.items():
            expected = self.config.field_types.get(field_name)
            if expected is None or value is None or isinstance(value, expected):
                continue
            expected_names = (
                expected.__name__ if isinstance(expected, type)
                else " or ".join(t.__name__ for t in expected)
            )
            issues.append(self._issue(
                document, self._field_line(document, field_name),
                "error" if field_name in _STRICT_TYPE_FIELDS else "warning",
                "frontmatter",
                f"Field '{field_name}' has unexpected type: {type(value).__name__}",
                f"Expected: {expected_names}",
            ))

        issues.extend(self._validate_tags(document))

        unknown_fields = sorted(set(metadata) - self.config.known_fields)
        if unknown_fields:
            issues.append(self._issue(
                document, 1, "warning", "frontmatter",
                f"Unknown fields: {', '.join(unknown_fields)}",
                "Check for typos, or list them under extra_fields in marginalia.yaml",
            ))

        return issues

    def _validate_tags(self, document: Document) -> List[DocumentIssue]:
        issues: List[DocumentIssue] = []
        tags = document.metadata.get("tags")
        line = self._field_line(document, "tags")

        if isinstance(tags, str):
            issues.append(self._issue(
                document, line, "warning", "frontmatter",
                "Tags given as a single string",
                "Use a list: tags: [react, hooks]",
            ))
            return issues
        if not isinstance(tags, list):
            return issues

        for idx, tag in enumerate(tags):
            if not isinstance(tag, str):
                issues.append(self._issue(
                    document, line, "error", "frontmatter",
                    f"Tag {idx + 1} is not a string: {tag!r}",
                    "Quote the tag or remove nested structures",
                ))

        counts = Counter(str(t).strip().casefold() for t in tags if isinstance(t, str))
        repeated = sorted(tag for tag, count in counts.items() if count > 1)
        if repeated:
            issues.append(self._issue(
                document, line, "warning", "frontmatter",
                f"Duplicate tags: {', '.join(repeated)}",
                "Tags are a set; list each one once",
            ))
        return issues

    def validate_dates(self, document: Document) -> List[DocumentIssue]:
        """
        Validate publish/edit dates.

        An edit date must fall on or after the publish date. When aliases
        (``date`` and ``publishedAt``) are both given they must agree.
        """
        issues: List[DocumentIssue] = []
        metadata = document.metadata

        for group, label in ((PUBLISHED_KEYS, "publish"), (EDITED_KEYS, "edit")):
            parsed = {}
            for key in group:
                value = metadata.get(key)
                if value in (None, ""):
                    continue
                when = parsers.parse_date(value)
                if when is None:
                    issues.append(self._issue(
                        document, self._field_line(document, key), "error", "dates",
                        f"Invalid {label} date in '{key}': {value!r}",
                        "Use YYYY-MM-DD (e.g. 2021-03-04)",
                    ))
                else:
                    parsed[key] = when
            if len(set(parsed.values())) > 1:
                described = ", ".join(f"{k}={v.isoformat()}" for k, v in parsed.items())
                issues.append(self._issue(
                    document, self._field_line(document, next(iter(parsed))), "warning", "dates",
                    f"Conflicting {label} dates: {described}",
                    f"Keep a single {label} date field",
                ))

        if document.published and document.edited and document.edited < document.published:
            edited_key = first_date_key(metadata, EDITED_KEYS) or EDITED_KEYS[0]
            issues.append(self._issue(
                document, self._field_line(document, edited_key), "error", "dates",
                f"Edit date {document.edited.isoformat()} is before publish date "
                f"{document.published.isoformat()}",
                "An article cannot be edited before it is published; check both dates",
            ))

        return issues

    def validate_code_blocks(self, document: Document) -> List[DocumentIssue]:
        """Validate that fenced code blocks are closed and tagged with a known language."""
        issues: List[DocumentIssue] = []

        for block in md.extract_code_blocks(document.body):
            line = document.file_line(block.line)
            if not block.closed:
                issues.append(self._issue(
                    document, line, "error", "code",
                    "Unterminated code fence",
                    "Close the block with a matching ``` line",
                ))
            if block.language is None:
                issues.append(self._issue(
                    document, line, "warning", "code",
                    "Code block has no language tag",
                    "Tag the fence (```python, ```jsx, ```sh) so it is highlighted",
                ))
            elif block.language not in self.config.known_languages:
                issues.append(self._issue(
                    document, line, "error", "code",
                    f"Unrecognised code block language '{block.language}'",
                    "Fix the tag, or list it under extra_languages in marginalia.yaml",
                ))

        return issues

    def validate_images(self, document: Document) -> List[DocumentIssue]:
        """Validate that local image references exist."""
        issues: List[DocumentIssue] = []
        assets_dir = self.config.assets_dir or self.content_dir

        for index, src in md.extract_images(document.body):
            # MDX expressions like src={diagram} are resolved by the bundler
            if parsers.is_external_url(src) or src.startswith("{"):
                continue
            target = fs.resolve_asset_path(src, document.path, assets_dir)
            if not target.is_file():
                issues.append(self._issue(
                    document, document.file_line(index), "error", "image",
                    f"Missing image: {src}",
                    f"File not found: {target}",
                ))

        return issues

    def validate_links(self, document: Document) -> List[DocumentIssue]:
        """
        Validate relative links to local files.

        External URLs and in-page anchors are skipped. Rooted links without a
        file suffix (``/blog/some-post``) are site routes and skipped too.
        """
        issues: List[DocumentIssue] = []

        for index, href in md.extract_links(document.body):
            if parsers.is_external_url(href) or href.startswith("#"):
                continue
            clean = href.split("#", 1)[0].split("?", 1)[0]
            if not clean:
                continue
            if clean.startswith("/") and not Path(clean).suffix:
                continue
            target = fs.resolve_asset_path(
                clean, document.path, self.config.assets_dir or self.content_dir
            )
            if not target.exists():
                issues.append(self._issue(
                    document, document.file_line(index), "error", "link",
                    f"Broken link: {href}",
                    f"Target not found: {target}",
                ))

        return issues

    def validate_footnotes(self, document: Document) -> List[DocumentIssue]:
        """Validate that footnote references and definitions pair up."""
        issues: List[DocumentIssue] = []
        definitions: Dict[str, int] = {}
        references: Dict[str, int] = {}

        for index, text in md.prose_lines(document.body):
            definition = _FOOTNOTE_DEFINITION.match(text)
            if definition:
                label = definition.group(1)
                if label in definitions:
                    issues.append(self._issue(
                        document, document.file_line(index), "error", "footnote",
                        f"Footnote [^{label}] defined more than once",
                        f"First definition on line {document.file_line(definitions[label])}",
                    ))
                else:
                    definitions[label] = index
            for match in _FOOTNOTE_REFERENCE.finditer(text):
                references.setdefault(match.group(1), index)

        for label, index in references.items():
            if label not in definitions:
                issues.append(self._issue(
                    document, document.file_line(index), "error", "footnote",
                    f"Footnote [^{label}] has no definition",
                    f"Add '[^{label}]: ...' at the end of the article",
                ))
        for label, index in definitions.items():
            if label not in references:
                issues.append(self._issue(
                    document, document.file_line(index), "warning", "footnote",
                    f"Footnote [^{label}] is never referenced",
                ))

        return issues

    def validate_math(self, document: Document) -> List[DocumentIssue]:
        """Validate that ``$$`` display-math delimiters are balanced."""
        open_line: Optional[int] = None

        for index, text in md.prose_lines(document.body):
            for _ in _DISPLAY_MATH.finditer(text):
                open_line = index if open_line is None else None

        if open_line is None:
            return []
        return [self._issue(
            document, document.file_line(open_line), "error", "math",
            "Unclosed $$ display math",
            "Add the closing $$ delimiter",
        )]

    def validate_body(self, document: Document) -> List[DocumentIssue]:
        """Validate body content: not empty, no leftover placeholders."""
        issues: List[DocumentIssue] = []

        if not document.body.strip():
            issues.append(self._issue(
                document, document.body_offset, "warning", "content",
                "Document body is empty",
                "Add content after the front-matter",
            ))
            return issues

        patterns = {p: re.compile(rf"\b{re.escape(p)}\b") for p in self.config.placeholders}
        seen = set()
        for index, text in md.prose_lines(document.body):
            for placeholder, pattern in patterns.items():
                if placeholder not in seen and pattern.search(text):
                    seen.add(placeholder)
                    issues.append(self._issue(
                        document, document.file_line(index), "warning", "content",
                        f"Placeholder text found: {placeholder}",
                        "Replace placeholder with actual content",
                    ))

        return issues

    # --- Corpus ---

    def find_duplicate_titles(self, documents: Iterable[Document]) -> List[DocumentIssue]:
        """
        Flag documents that share a title.

        Titles compare case- and whitespace-insensitively. Every member of a
        group gets an issue naming the others with their dates and tags, so
        diverging copies can be told apart.
        """
        issues: List[DocumentIssue] = []
        severity = "error" if self.config.strict else "warning"

        groups: Dict[str, List[Document]] = defaultdict(list)
        for document in documents:
            if document.title:
                groups[parsers.normalize_title(document.title)].append(document)

        for group in groups.values():
            if len(group) < 2:
                continue
            group = sorted(group, key=lambda d: str(d.path))
            for document in group:
                others = "; ".join(
                    f"{self._display_path(o.path)} "
                    f"({o.published.isoformat() if o.published else 'undated'}, "
                    f"tags: {', '.join(o.tags) or 'none'})"
                    for o in group if o is not document
                )
                issues.append(self._issue(
                    document, self._field_line(document, "title"), severity, "duplicate",
                    f"Duplicate title '{document.title}' also used by: {others}",
                    "Merge the versions or retitle one of them",
                ))

        return issues

    def _display_path(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.content_dir))
        except ValueError:
            return str(path)

    def validate_all(self, checks: Optional[Iterable[str]] = None) -> ValidationReport:
        """
        Validate every document under the content root.

        Args:
            checks: Names from CHECKS and CORPUS_CHECKS to run (all if None)

        Returns:
            Complete validation report
        """
        selected = self._select(checks)
        logger = safe_logger(self.logger)
        files = self.discover()

        if not files:
            logger.log_warning(f"No documents found in {self.content_dir}")

        documents: List[Document] = []
        for file_path in files:
            self.report.files_checked += 1
            document = self.load_document(file_path)
            if document is None:
                continue
            documents.append(document)
            self.report.add_issues(self.validate_document(document, selected))

        if "duplicates" in selected:
            self.report.add_issues(self.find_duplicate_titles(documents))

        logger.log_operation("lint", {
            "content_dir": str(self.content_dir),
            "checks": selected,
            "files_checked": self.report.files_checked,
            "errors": self.report.total_errors,
            "warnings": self.report.total_warnings,
        })
        return self.report


def format_report(report: ValidationReport, root: Optional[Path] = None) -> str:
    """
    Format a validation report as readable text.

    Args:
        report: Validation report to format
        root: If given, file paths are shown relative to it

    Returns:
        Formatted report string
    """
    def display(path: Path) -> str:
        if root is not None:
            try:
                return str(path.relative_to(root))
            except ValueError:
                pass
        return str(path)

    lines = []
    lines.append("\n" + "=" * 60)
    lines.append("CONTENT VALIDATION REPORT")
    lines.append("=" * 60)
    lines.append("")

    clean = report.files_checked - len(
        {i.file_path for i in report.issues}
    )
    lines.append(f"Files Checked: {report.files_checked}")
    lines.append(f"✅ Clean Files: {max(clean, 0)}")
    lines.append(f"⚠️  Files with Warnings: {report.files_with_warnings}")
    lines.append(f"❌ Files with Errors: {report.files_with_errors}")
    lines.append("")
    lines.append(f"Total Warnings: {report.total_warnings}")
    lines.append(f"Total Errors: {report.total_errors}")
    lines.append("")

    if report.is_healthy:
        lines.append("✅ ALL DOCUMENTS VALID")
    else:
        lines.append("❌ VALIDATION FAILED")
    lines.append("")

    if report.issues:
        issues_by_file: Dict[Path, List[DocumentIssue]] = defaultdict(list)
        for issue in report.issues:
            issues_by_file[issue.file_path].append(issue)

        lines.append("ISSUES BY FILE:")
        lines.append("")

        for file_path in sorted(issues_by_file):
            file_issues = sorted(
                issues_by_file[file_path], key=lambda i: (i.line_number or 0)
            )
            icon = "❌" if any(i.severity == "error" for i in file_issues) else "⚠️"
            lines.append(f"{icon} {display(file_path)}")

            for issue in file_issues:
                severity_icon = "❌" if issue.severity == "error" else "⚠️"
                line_info = f":{issue.line_number}" if issue.line_number else ""
                lines.append(f"   {severity_icon} [{issue.category}]{line_info} {issue.message}")
                if issue.suggestion:
                    lines.append(f"      💡 {issue.suggestion}")

            lines.append("")

    lines.append("=" * 60)

    return "\n".join(lines)
