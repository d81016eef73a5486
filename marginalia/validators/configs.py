#!/usr/bin/env python3
"""
configs.py
----------
Declarative lint configuration.

Defaults cover a typical essay corpus (React, lambda calculus, Python,
ML). A ``marginalia.yaml`` at the content root, or a file passed with
``--config``, adjusts them:

    extra_languages: [elm, agda]      # extends known_languages
    ignore_dirs: [drafts]             # replaces the default list
    assets_dir: ../static             # resolved relative to the config file
    strict: true
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from marginalia.core.exceptions import ConfigError


DEFAULT_LANGUAGES: FrozenSet[str] = frozenset({
    # JavaScript ecosystem
    "javascript", "js", "jsx", "typescript", "ts", "tsx", "json", "mdx",
    "html", "css", "scss", "graphql",
    # Python and shells
    "python", "py", "pycon", "python3", "sh", "bash", "shell", "console",
    "zsh", "powershell",
    # Functional and systems languages seen in essays
    "haskell", "hs", "lisp", "scheme", "racket", "clojure", "ocaml", "elixir",
    "c", "cpp", "rust", "go", "java", "ruby", "sql",
    # Markup, data and math
    "markdown", "md", "yaml", "yml", "toml", "ini", "xml", "diff",
    "latex", "tex", "math", "text", "txt", "plaintext",
})

PUBLISHED_KEYS: Tuple[str, ...] = ("date", "publishedAt", "published")
EDITED_KEYS: Tuple[str, ...] = ("updatedAt", "editedAt", "updated")

# Known front-matter fields and the YAML types they may hold
DEFAULT_FIELDS: Dict[str, Union[type, Tuple[type, ...]]] = {
    "title": str,
    "tags": (list, str),
    "description": str,
    "summary": str,
    "draft": bool,
    "slug": str,
    "author": (str, list),
    "image": str,
    "canonical": str,
    **{key: (str, date) for key in PUBLISHED_KEYS + EDITED_KEYS},
}

DEFAULT_PLACEHOLDERS: Tuple[str, ...] = ("TODO", "FIXME", "XXX", "TKTK")


@dataclass
class LintConfig:
    """
    Settings shared by every check.

    Attributes:
        patterns: Glob patterns for documents, relative to the content root
        ignore_dirs: Directory names never descended into
        known_languages: Accepted fenced-code language tags (lower case)
        required_fields: Front-matter keys that must be present and non-empty
        field_types: Known front-matter keys and their allowed types
        placeholders: Markers that must not survive into published prose
        assets_dir: Root for ``/rooted`` image paths (None: the content root)
        strict: Treat warnings as failures and duplicates as errors
    """

    patterns: List[str] = field(default_factory=lambda: ["**/*.md", "**/*.mdx"])
    ignore_dirs: List[str] = field(
        default_factory=lambda: ["node_modules", ".git", ".cache", "public"]
    )
    known_languages: FrozenSet[str] = DEFAULT_LANGUAGES
    required_fields: List[str] = field(default_factory=lambda: ["title"])
    field_types: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_FIELDS))
    placeholders: List[str] = field(default_factory=lambda: list(DEFAULT_PLACEHOLDERS))
    assets_dir: Optional[Path] = None
    strict: bool = False

    # Keys accepted in a config file beyond the dataclass fields
    _EXTENSION_KEYS = ("extra_languages", "extra_fields")

    @classmethod
    def from_file(cls, path: Path) -> "LintConfig":
        """
        Load a config file on top of the defaults.

        Args:
            path: YAML config file

        Returns:
            LintConfig with file values applied

        Raises:
            ConfigError: If the file is unreadable, not a mapping, or has
                unknown keys or wrongly typed values
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data, base_dir=path.parent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "LintConfig":
        """
        Build a config from a plain mapping.

        Args:
            data: Parsed config values
            base_dir: Directory relative ``assets_dir`` values resolve against
        """
        allowed = ({f.name for f in fields(cls)} - {"field_types"}) | set(cls._EXTENSION_KEYS)
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ConfigError(
                f"Unknown config key(s): {', '.join(unknown)}. "
                f"Allowed: {', '.join(sorted(allowed))}"
            )

        config = cls()
        for key in ("patterns", "ignore_dirs", "required_fields", "placeholders"):
            if key in data:
                setattr(config, key, _string_list(data[key], key))

        if "known_languages" in data:
            config.known_languages = frozenset(
                lang.lower() for lang in _string_list(data["known_languages"], "known_languages")
            )
        if "extra_languages" in data:
            config.known_languages = config.known_languages | frozenset(
                lang.lower() for lang in _string_list(data["extra_languages"], "extra_languages")
            )
        if "extra_fields" in data:
            for name in _string_list(data["extra_fields"], "extra_fields"):
                config.field_types.setdefault(name, object)

        if "assets_dir" in data and data["assets_dir"] is not None:
            if not isinstance(data["assets_dir"], str):
                raise ConfigError("Config key 'assets_dir' must be a string path")
            assets_dir = Path(data["assets_dir"]).expanduser()
            if not assets_dir.is_absolute() and base_dir is not None:
                assets_dir = base_dir / assets_dir
            config.assets_dir = assets_dir

        if "strict" in data:
            if not isinstance(data["strict"], bool):
                raise ConfigError("Config key 'strict' must be true or false")
            config.strict = data["strict"]

        return config

    @property
    def known_fields(self) -> FrozenSet[str]:
        return frozenset(self.field_types)


def _string_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Config key '{key}' must be a list of strings")
    return list(value)
