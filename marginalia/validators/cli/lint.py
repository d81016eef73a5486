"""
Lint Commands
-------------

Commands for validating the documents of the corpus.

Commands:
    - frontmatter: Front-matter syntax, required fields, types
    - dates: Publish/edit date validity and ordering
    - code: Fenced code block termination and language tags
    - images: Local image references exist
    - links: Relative links resolve
    - footnotes: Footnote references and definitions pair up
    - duplicates: Titles shared by more than one document
    - all: Every check above, plus math and body checks
"""
import json
from pathlib import Path
from typing import Iterable, Optional

import click

from marginalia.core.cli import LintStats
from marginalia.core.exceptions import ConfigError
from marginalia.core.logging_manager import handle_cli_error
from marginalia.core.paths import CONFIG_FILENAME, CONTENT_DIR


@click.group()
@click.option(
    "--content-dir",
    type=click.Path(file_okay=False),
    default=str(CONTENT_DIR),
    help="Content directory to validate",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help=f"Lint config file (default: <content-dir>/{CONFIG_FILENAME} if present)",
)
@click.option("--strict", is_flag=True, help="Fail on warnings; duplicates become errors")
@click.pass_context
def lint(
    ctx: click.Context, content_dir: str, config_path: Optional[str], strict: bool
) -> None:
    """
    Validate essay documents.

    Check front-matter, dates, code blocks, images, links, footnotes,
    math delimiters and duplicate titles.
    """
    from marginalia.validators.configs import LintConfig

    ctx.ensure_object(dict)
    root = Path(content_dir)
    path = Path(config_path) if config_path else root / CONFIG_FILENAME

    try:
        config = LintConfig.from_file(path) if path.is_file() else LintConfig()
    except ConfigError as e:
        handle_cli_error(ctx, e, "load_config", {"config": str(path)})

    if strict:
        config.strict = True

    ctx.obj["content_dir"] = root
    ctx.obj["config"] = config


def _require_content_dir(ctx: click.Context) -> Path:
    content_dir = ctx.obj["content_dir"]
    if not content_dir.is_dir():
        raise click.ClickException(f"Content directory not found: {content_dir}")
    return content_dir


def _run_checks(
    ctx: click.Context, checks: Optional[Iterable[str]], label: str, as_json: bool = False
) -> None:
    from marginalia.validators.document import DocumentValidator, format_report

    content_dir = _require_content_dir(ctx)
    config = ctx.obj["config"]
    logger = ctx.obj.get("logger")

    if not as_json:
        click.echo(f"🔍 {label} in {content_dir}\n")

    stats = LintStats()
    validator = DocumentValidator(content_dir, config, logger)
    report = validator.validate_all(checks)

    stats.files_processed = report.files_checked
    stats.parse_failures = len(validator.unparseable)
    stats.errors = report.total_errors
    stats.warnings = report.total_warnings
    if logger is not None:
        logger.log_info(f"lint {label}: {stats.summary()}")

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(format_report(report, root=content_dir))

    if report.failed(config.strict):
        if report.has_errors:
            raise click.ClickException(f"Found {report.total_errors} error(s)")
        raise click.ClickException(
            f"Found {report.total_warnings} warning(s) (strict mode)"
        )


@lint.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.pass_context
def frontmatter(ctx: click.Context, file_path: Optional[str]) -> None:
    """
    Validate YAML front-matter.

    Checks for:
    - A front-matter block with valid YAML mapping syntax
    - Required fields (title, publish date)
    - Field types and tag lists
    - Unknown fields
    """
    if not file_path:
        _run_checks(ctx, ["frontmatter"], "Validating front-matter")
        return

    from marginalia.validators.document import DocumentValidator

    validator = DocumentValidator(ctx.obj["content_dir"], ctx.obj["config"], ctx.obj.get("logger"))
    issues = validator.validate_file(Path(file_path), ["frontmatter"])
    if not issues:
        click.echo("✅ No front-matter issues found")
        return

    for issue in issues:
        icon = "❌" if issue.severity == "error" else "⚠️"
        line_info = f":{issue.line_number}" if issue.line_number else ""
        click.echo(f"{icon}{line_info} {issue.message}")
        if issue.suggestion:
            click.echo(f"   💡 {issue.suggestion}")

    if validator.report.failed(ctx.obj["config"].strict):
        raise click.ClickException(f"Found {len(issues)} front-matter issue(s)")


@lint.command()
@click.pass_context
def dates(ctx: click.Context) -> None:
    """
    Validate publish and edit dates.

    Dates must parse, aliases must agree, and an edit date must be on or
    after the publish date.
    """
    _run_checks(ctx, ["dates"], "Validating dates")


@lint.command()
@click.pass_context
def code(ctx: click.Context) -> None:
    """
    Validate fenced code blocks.

    Every fence must be closed and declare a recognised language tag.
    """
    _run_checks(ctx, ["code"], "Checking code blocks")


@lint.command()
@click.pass_context
def images(ctx: click.Context) -> None:
    """
    Check that local image references exist.

    External URLs and data URIs are skipped.
    """
    _run_checks(ctx, ["images"], "Checking images")


@lint.command()
@click.pass_context
def links(ctx: click.Context) -> None:
    """
    Check for broken relative links.

    External links, in-page anchors and extensionless site routes are skipped.
    """
    _run_checks(ctx, ["links"], "Checking links")


@lint.command()
@click.pass_context
def footnotes(ctx: click.Context) -> None:
    """Check that footnote references and definitions pair up."""
    _run_checks(ctx, ["footnotes"], "Checking footnotes")


@lint.command()
@click.pass_context
def duplicates(ctx: click.Context) -> None:
    """
    Flag documents that share a title.

    Duplicates are a content anomaly: reported as warnings, or errors
    with --strict.
    """
    _run_checks(ctx, ["duplicates"], "Looking for duplicate titles")


@lint.command(name="all")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def all_checks(ctx: click.Context, as_json: bool) -> None:
    """
    Run every check.

    Comprehensive validation including front-matter, dates, code blocks,
    images, links, footnotes, math, body content and duplicate titles.
    """
    _run_checks(ctx, None, "Running all content checks", as_json=as_json)
