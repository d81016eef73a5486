#!/usr/bin/env python3
"""
Integration tests for the marginalia CLI.

Runs the lint and catalog commands against an on-disk corpus through
click's CliRunner.
"""
import json

import pytest
from click.testing import CliRunner

from marginalia.validators.cli import cli


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    """Invoke the CLI with logs kept inside tmp_path."""
    def _invoke(*args):
        return runner.invoke(cli, ["--log-dir", str(tmp_path / "logs"), *args])
    return _invoke


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "lint" in result.output
        assert "catalog" in result.output

    @pytest.mark.parametrize(
        "command",
        ["frontmatter", "dates", "code", "images", "links", "footnotes", "duplicates", "all"],
    )
    def test_lint_subcommand_help(self, invoke, command):
        result = invoke("lint", command, "--help")
        assert result.exit_code == 0

    def test_missing_content_dir(self, invoke, tmp_path):
        result = invoke("lint", "--content-dir", str(tmp_path / "nope"), "all")
        assert result.exit_code == 1
        assert "Content directory not found" in result.output

    def test_help_without_content_dir(self, invoke, tmp_path):
        missing = str(tmp_path / "nope")
        result = invoke("lint", "--content-dir", missing, "all", "--help")
        assert result.exit_code == 0
        result = invoke("catalog", "--content-dir", missing, "--help")
        assert result.exit_code == 0

    def test_catalog_missing_content_dir(self, invoke, tmp_path):
        result = invoke("catalog", "--content-dir", str(tmp_path / "nope"))
        assert result.exit_code == 1
        assert "Content directory not found" in result.output


class TestLintAll:
    """Test `marginalia lint all`."""

    def test_corpus_passes_with_duplicate_warning(self, invoke, corpus_dir, tmp_path):
        result = invoke("lint", "--content-dir", str(corpus_dir), "all")
        assert result.exit_code == 0, result.output
        assert "Duplicate title 'Inventing the Y-Combinator'" in result.output
        assert "y-combinator-v2.md" in result.output
        assert "ALL DOCUMENTS VALID" in result.output
        assert (tmp_path / "logs" / "operations" / "marginalia.log").exists()

    def test_strict_fails_on_duplicates(self, invoke, corpus_dir):
        result = invoke("lint", "--content-dir", str(corpus_dir), "--strict", "all")
        assert result.exit_code == 1
        assert "Found 2 error(s)" in result.output

    def test_strict_from_config_file(self, invoke, corpus_dir):
        (corpus_dir / "marginalia.yaml").write_text("strict: true\n", encoding="utf-8")
        result = invoke("lint", "--content-dir", str(corpus_dir), "duplicates")
        assert result.exit_code == 1

    def test_json_report(self, invoke, corpus_dir):
        result = invoke("lint", "--content-dir", str(corpus_dir), "all", "--json")
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["files_checked"] == 4
        assert data["total_errors"] == 0
        assert data["total_warnings"] == 2
        assert {issue["category"] for issue in data["issues"]} == {"duplicate"}

    def test_errors_fail_the_run(self, invoke, corpus_dir):
        (corpus_dir / "draft.md").write_text(
            "---\ntitle: Draft\ndate: 2021-01-01\n---\n\n![chart](img/chart.png)\n",
            encoding="utf-8",
        )
        result = invoke("lint", "--content-dir", str(corpus_dir), "images")
        assert result.exit_code == 1
        assert "Missing image: img/chart.png" in result.output
        assert "Found 1 error(s)" in result.output

    def test_undecodable_file_is_reported_not_fatal(self, invoke, corpus_dir):
        (corpus_dir / "binary.md").write_bytes(b"\xff\xfe---\ntitle: Binary\n---\n")
        result = invoke("lint", "--content-dir", str(corpus_dir), "all", "--json")
        assert result.exit_code == 1

        data = json.loads(result.stdout)
        assert data["files_checked"] == 5
        parse_errors = [i for i in data["issues"] if i["file"].endswith("binary.md")]
        assert len(parse_errors) == 1
        assert parse_errors[0]["category"] == "frontmatter"
        assert "not valid UTF-8" in parse_errors[0]["message"]
        assert any(i["category"] == "duplicate" for i in data["issues"])

    def test_invalid_config(self, invoke, corpus_dir):
        (corpus_dir / "marginalia.yaml").write_text("colour: blue\n", encoding="utf-8")
        result = invoke("lint", "--content-dir", str(corpus_dir), "all")
        assert result.exit_code == 1
        assert "ConfigError" in result.output

    def test_explicit_config_extends_languages(self, invoke, corpus_dir, tmp_path):
        (corpus_dir / "elm.md").write_text(
            "---\ntitle: Elm\ndate: 2022-01-01\n---\n\n```elm\nmain = text \"hi\"\n```\n",
            encoding="utf-8",
        )
        assert invoke("lint", "--content-dir", str(corpus_dir), "code").exit_code == 1

        config = tmp_path / "lint.yaml"
        config.write_text("extra_languages: [elm]\n", encoding="utf-8")
        result = invoke("lint", "--content-dir", str(corpus_dir), "--config", str(config), "code")
        assert result.exit_code == 0, result.output


class TestLintFrontmatter:
    """Test `marginalia lint frontmatter`."""

    def test_single_valid_file(self, invoke, corpus_dir):
        path = corpus_dir / "tidy-processes.md"
        result = invoke("lint", "--content-dir", str(corpus_dir), "frontmatter", str(path))
        assert result.exit_code == 0
        assert "No front-matter issues found" in result.output

    def test_single_broken_file(self, invoke, corpus_dir):
        path = corpus_dir / "untitled.md"
        path.write_text("---\ndate: 2021-01-01\nmood: grim\n---\n\nText\n", encoding="utf-8")
        result = invoke("lint", "--content-dir", str(corpus_dir), "frontmatter", str(path))
        assert result.exit_code == 1
        assert "Required field 'title' missing" in result.output
        assert "Unknown fields: mood" in result.output

    def test_single_file_needs_no_content_dir(self, invoke, corpus_dir, tmp_path):
        path = corpus_dir / "tidy-processes.md"
        result = invoke(
            "lint", "--content-dir", str(tmp_path / "nope"), "frontmatter", str(path)
        )
        assert result.exit_code == 0, result.output
        assert "No front-matter issues found" in result.output

    def test_whole_corpus(self, invoke, corpus_dir):
        result = invoke("lint", "--content-dir", str(corpus_dir), "frontmatter")
        assert result.exit_code == 0


class TestCatalog:
    """Test `marginalia catalog`."""

    def test_text_summary(self, invoke, corpus_dir):
        result = invoke("catalog", "--content-dir", str(corpus_dir))
        assert result.exit_code == 0
        assert "4 documents" in result.output
        assert "javascript (2)" in result.output

    def test_json_summary(self, invoke, corpus_dir):
        (corpus_dir / "broken.md").write_text("---\ntitle: [\n---\n", encoding="utf-8")
        result = invoke("catalog", "--content-dir", str(corpus_dir), "--json")
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["documents"] == 4
        assert len(data["items"]) == 4
        assert len(data["unparseable"]) == 1
        assert data["first_published"] == "2019-07-02"
