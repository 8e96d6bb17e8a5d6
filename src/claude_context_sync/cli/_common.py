"""Helpers shared by CLI commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from claude_context_sync.config import WorkspaceConfig, load_workspace_config
from claude_context_sync.marker.reader import MarkerConfig
from claude_context_sync.paths import preferences_path

MARKER_FIELDS = {f.name for f in fields(MarkerConfig)}


def workspace_config(args: argparse.Namespace) -> WorkspaceConfig:
    return load_workspace_config(getattr(args, "config", None))


def parse_overrides(pairs: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` strings into marker fields.

    Values are read as YAML scalars, so ``auto_push=true`` is a bool.

    Raises:
        ValueError: On a malformed pair or an unknown field.
    """
    overrides: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        if key not in MARKER_FIELDS:
            raise ValueError(f"Unknown marker field '{key}' (valid: {', '.join(sorted(MARKER_FIELDS))})")
        overrides[key] = yaml.safe_load(raw) if raw.strip() else ""
    return overrides


def read_content(source: str | None) -> str:
    """Read rendered preference text from a file, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source).expanduser() if source else preferences_path()
    return path.read_text(encoding="utf-8")
