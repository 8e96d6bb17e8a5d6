"""Default path resolution.

Resolves the locations the sync pipeline reads from. Uses environment
variables when available, falls back to conventional defaults.

Environment variables:
    CLAUDE_SYNC_REPOS_DIR: directory bulk-marked repos are cloned into (default: ~/repos)
    CLAUDE_SYNC_SCAN_PATHS: os.pathsep-separated discovery roots
        (default: ~/projects, ~/work, ~/repos)
    CLAUDE_SYNC_PREFERENCES: rendered preference text (default: ~/.claude/CLAUDE.md)
"""

from __future__ import annotations

import os
from pathlib import Path

WORKSPACE_CONFIG_FILENAME = ".claude-sync-workspace"


def repos_dir() -> Path:
    """Return the directory remote repositories are cloned into."""
    return Path(os.environ.get("CLAUDE_SYNC_REPOS_DIR", str(Path.home() / "repos")))


def default_scan_paths() -> list[Path]:
    """Return the roots walked by local discovery when none are given."""
    env = os.environ.get("CLAUDE_SYNC_SCAN_PATHS")
    if env:
        return [Path(p).expanduser() for p in env.split(os.pathsep) if p]
    home = Path.home()
    return [home / "projects", home / "work", home / "repos"]


def preferences_path() -> Path:
    """Return the path to the rendered preference text."""
    env = os.environ.get("CLAUDE_SYNC_PREFERENCES")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".claude" / "CLAUDE.md"


def workspace_config_path() -> Path:
    """Return the path to the workspace config file."""
    return repos_dir() / WORKSPACE_CONFIG_FILENAME
