#!/usr/bin/env python3
"""
cli.py
------
Shared CLI helpers for Marginalia commands.

Functions:
    setup_logger: Initialize MarginaliaLogger for a command
    marginalia_cli_group: Decorator building the top-level click group

Classes:
    OperationStats: Timing and counters for a command run
    LintStats: Lint-specific counters
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional

# --- Third party imports ---
import click

# --- Local imports ---
from marginalia.core.logging_manager import MarginaliaLogger
from marginalia.core.paths import LOG_DIR


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> MarginaliaLogger:
    """
    Setup logging for CLI operations.

    Log files go to ``<log_dir>/operations``.

    Args:
        log_dir: Base log directory (typically paths.LOG_DIR)
        component_name: Component identifier for logging (e.g. 'lint')

    Returns:
        Configured MarginaliaLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return MarginaliaLogger(operations_log_dir, component_name=component_name)


def marginalia_cli_group(component_name: str) -> Callable:
    """
    Decorator factory for the top-level CLI group.

    Adds ``--log-dir`` and ``-v/--verbose`` and fills the click context with:
        ctx.obj["log_dir"]: Path
        ctx.obj["verbose"]: bool
        ctx.obj["logger"]: MarginaliaLogger

    Usage:
        @marginalia_cli_group("marginalia")
        def cli(ctx):
            '''Marginalia - lint an essay corpus'''
    """
    def decorator(f: Callable) -> Callable:
        @click.group()
        @click.option(
            "--log-dir",
            type=click.Path(file_okay=False),
            default=str(LOG_DIR),
            help="Directory for log files",
        )
        @click.option("-v", "--verbose", is_flag=True, help="Show tracebacks on errors")
        @click.pass_context
        @wraps(f)
        def wrapper(ctx: click.Context, log_dir: str, verbose: bool):
            ctx.ensure_object(dict)
            ctx.obj["log_dir"] = Path(log_dir)
            ctx.obj["verbose"] = verbose
            ctx.obj["logger"] = setup_logger(Path(log_dir), component_name)
            return f(ctx)

        return wrapper
    return decorator


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Counters common to every command: files processed, errors, elapsed time.
    """
    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Elapsed seconds since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_processed": self.files_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class LintStats(OperationStats):
    """
    Statistics for a lint run.

    Attributes:
        warnings: Number of warnings reported
        parse_failures: Files that could not be loaded as documents
    """
    warnings: int = 0
    parse_failures: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.warnings < 0:
            raise ValueError(f"warnings must be non-negative, got {self.warnings}")
        if self.parse_failures < 0:
            raise ValueError(f"parse_failures must be non-negative, got {self.parse_failures}")

    def summary(self) -> str:
        return (
            f"{self.files_processed} files processed, "
            f"{self.parse_failures} unparseable, "
            f"{self.errors} errors, "
            f"{self.warnings} warnings, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "warnings": self.warnings,
            "parse_failures": self.parse_failures,
        })
        return d
