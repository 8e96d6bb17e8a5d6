"""Workspace configuration (.claude-sync-workspace).

Optional YAML file living in the repos directory:

    scan_paths: [~/projects, ~/work]
    max_depth: 3
    ignore_patterns: [node_modules, .git, "*.tmp"]
    exclude: ["archive-*", scratch]
    marker:
      auto_update: true
      create_pr: false

Every key is optional; a missing file yields the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from claude_context_sync.marker.discover import DEFAULT_IGNORE_PATTERNS, DEFAULT_MAX_DEPTH
from claude_context_sync.paths import default_scan_paths, workspace_config_path


@dataclass
class WorkspaceConfig:
    """Settings shared by discover, sync and mark."""

    scan_paths: list[Path] = field(default_factory=default_scan_paths)
    max_depth: int = DEFAULT_MAX_DEPTH
    ignore_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    exclude: list[str] = field(default_factory=list)
    marker: dict[str, Any] = field(default_factory=dict)


def load_workspace_config(path: Path | str | None = None) -> WorkspaceConfig:
    """Load the workspace config file.

    Args:
        path: Config file. Defaults to <repos_dir>/.claude-sync-workspace.

    Returns:
        WorkspaceConfig with file values layered over the defaults.

    Raises:
        ValueError: If the file exists but is not a YAML mapping or a
            field has the wrong type.
    """
    config_path = Path(path) if path else workspace_config_path()
    config = WorkspaceConfig()
    if not config_path.is_file():
        return config

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed workspace config {config_path}: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ValueError(f"Workspace config at {config_path} is not a YAML mapping")

    if "scan_paths" in data:
        config.scan_paths = [Path(p).expanduser() for p in _string_list(data, "scan_paths")]
    if "max_depth" in data:
        depth = data["max_depth"]
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {depth!r}")
        config.max_depth = depth
    if "ignore_patterns" in data:
        config.ignore_patterns = _string_list(data, "ignore_patterns")
    if "exclude" in data:
        config.exclude = _string_list(data, "exclude")
    if "marker" in data:
        marker = data["marker"] or {}
        if not isinstance(marker, dict):
            raise ValueError("marker must be a mapping of marker fields")
        config.marker = dict(marker)

    return config


def _string_list(data: dict, key: str) -> list[str]:
    value = data.get(key) or []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list of strings")
    return [str(v) for v in value]
