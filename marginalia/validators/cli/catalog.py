"""
Catalog Command
---------------

Summarise the corpus: document count, date range, tags and the languages
used in code samples.
"""
import json
from pathlib import Path

import click

from marginalia.core.exceptions import ConfigError
from marginalia.core.logging_manager import handle_cli_error
from marginalia.core.paths import CONFIG_FILENAME, CONTENT_DIR


@click.command()
@click.option(
    "--content-dir",
    type=click.Path(file_okay=False),
    default=str(CONTENT_DIR),
    help="Content directory to summarise",
)
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def catalog(ctx: click.Context, content_dir: str, as_json: bool) -> None:
    """
    Summarise the documents of the corpus.

    Unparseable files are listed but do not fail the command; use
    ``marginalia lint`` for that.
    """
    from marginalia.catalog import load_corpus, summarize
    from marginalia.validators.configs import LintConfig

    root = Path(content_dir)
    if not root.is_dir():
        raise click.ClickException(f"Content directory not found: {root}")

    config_path = root / CONFIG_FILENAME
    try:
        config = LintConfig.from_file(config_path) if config_path.is_file() else LintConfig()
    except ConfigError as e:
        handle_cli_error(ctx, e, "load_config", {"config": str(config_path)})

    documents, failures = load_corpus(root, config, logger=ctx.obj.get("logger"))
    summary = summarize(documents)
    summary["unparseable"] = [str(path) for path, _ in failures]

    if as_json:
        summary["items"] = [d.to_dict() for d in sorted(documents, key=lambda d: str(d.path))]
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo(f"📚 {summary['documents']} documents in {root}")
    click.echo(f"   ✏️  {summary['edited']} edited after publication")
    if summary["first_published"]:
        click.echo(
            f"   📅 {summary['first_published']} → {summary['last_published']}"
        )
    if summary["tags"]:
        top = ", ".join(f"{tag} ({count})" for tag, count in list(summary["tags"].items())[:10])
        click.echo(f"   🏷️  {top}")
    if summary["languages"]:
        langs = ", ".join(f"{lang} ({count})" for lang, count in summary["languages"].items())
        click.echo(f"   💻 {langs}")
    for path, error in failures:
        click.echo(f"   ❌ {path}: {error}")
