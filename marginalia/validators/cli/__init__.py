"""
Marginalia CLI
--------------

Single entry point for linting and cataloguing an essay corpus.

Usage:
    marginalia lint all                 # Every check, human-readable report
    marginalia lint all --json          # Same, as JSON
    marginalia lint frontmatter [FILE]  # Front-matter only
    marginalia lint dates               # Publish/edit date checks
    marginalia lint code                # Fenced code language tags
    marginalia lint images              # Missing image files
    marginalia lint links               # Broken relative links
    marginalia lint footnotes           # Footnote references/definitions
    marginalia lint duplicates          # Duplicate titles across the corpus

    marginalia catalog                  # Corpus summary
"""
from marginalia.core.cli import marginalia_cli_group

from .lint import lint
from .catalog import catalog


@marginalia_cli_group("marginalia")
def cli(ctx):
    """
    Marginalia - content linter for an essay corpus.

    Check front-matter, dates, code blocks, images, links, footnotes and
    duplicate titles before an external renderer consumes the files.
    """
    pass


cli.add_command(lint)
cli.add_command(catalog)


if __name__ == "__main__":
    cli()
