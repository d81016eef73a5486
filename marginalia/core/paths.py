#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for Marginalia.

Marginalia lints a content tree that lives outside the package, so the
project root is the directory the command runs from unless the
``MARGINALIA_ROOT`` environment variable points elsewhere.

The expected layout:
    ROOT/
    ├── content/         # One Markdown/MDX file per article
    ├── marginalia.yaml  # Optional lint configuration
    └── logs/            # Application logs

Every command accepts overrides (``--content-dir``, ``--log-dir``), so
these are defaults only.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Returns:
        ``MARGINALIA_ROOT`` if set, otherwise the current working directory
    """
    env_root = os.environ.get("MARGINALIA_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path.cwd()


# ----- Project directory -----
ROOT: Path = _get_project_root()

# ---- Content ----
CONTENT_DIR = ROOT / "content"
CONFIG_FILENAME = "marginalia.yaml"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
