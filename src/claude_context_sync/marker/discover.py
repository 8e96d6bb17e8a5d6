"""Discover repositories carrying a .claude-sync marker on the local disk."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from claude_context_sync import MARKER_FILENAME
from claude_context_sync.marker.reader import MarkerConfig, read_marker

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3

DEFAULT_IGNORE_PATTERNS = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".archived",
    ".backup",
)


@dataclass
class RepoRecord:
    """A repository that opted in to sync."""

    config: MarkerConfig
    path: Path | None = None
    remote: str | None = None
    source: str = "local"
    marker_path: Path | None = None
    url: str | None = None

    @property
    def identifier(self) -> str:
        if self.path is not None:
            return str(self.path)
        return self.remote or "<unknown>"

    @property
    def name(self) -> str:
        if self.path is not None:
            return self.path.name
        return (self.remote or "").rsplit("/", 1)[-1]


def should_ignore(name: str, patterns: list[str] | tuple[str, ...]) -> bool:
    """Match a directory name against ignore patterns.

    A pattern containing ``*`` is an anchored glob where ``*`` matches any
    run of characters. Any other pattern matches the exact name or a name
    starting with it.
    """
    for pattern in patterns:
        if "*" in pattern:
            regex = ".*".join(re.escape(part) for part in pattern.split("*"))
            if re.fullmatch(regex, name):
                return True
        elif name == pattern or name.startswith(pattern):
            return True
    return False


def read_marker_record(repo_path: Path | str) -> RepoRecord | None:
    """Load the marker of one explicitly named repository.

    Returns None when the marker is missing, unparsable, or declares
    ``sync: false``.
    """
    path = Path(repo_path)
    marker_path = path / MARKER_FILENAME
    if not marker_path.is_file():
        return None
    config = read_marker(marker_path)
    if config is None or not config.sync:
        return None
    return RepoRecord(config=config, path=path, source="local", marker_path=marker_path)


def discover_repos(
    scan_paths: list[Path | str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    follow_symlinks: bool = False,
    ignore_patterns: list[str] | tuple[str, ...] | None = None,
) -> list[RepoRecord]:
    """Walk scan roots looking for .claude-sync markers.

    Structure: <scan_root>/.../<repo>/.claude-sync

    A directory at depth d (the scan root is depth 0) is examined only when
    d <= max_depth. Once a marker is found the walk does not go below that
    directory, whether or not the marker parsed.

    Args:
        scan_paths: Roots to walk. Missing roots are skipped.
        max_depth: Deepest directory level examined.
        follow_symlinks: Descend into symlinked directories.
        ignore_patterns: Directory names to skip. Defaults to
            DEFAULT_IGNORE_PATTERNS.

    Returns:
        Records in walk order: roots in the given order, each walked
        depth-first with children sorted by name.

    Raises:
        OSError: For I/O failures other than permission errors.
    """
    patterns = DEFAULT_IGNORE_PATTERNS if ignore_patterns is None else ignore_patterns
    repos: list[RepoRecord] = []

    for root in scan_paths:
        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            logger.debug("Scan path %s does not exist, skipping", root_path)
            continue

        visited: set[str] = set()
        stack: list[tuple[Path, int]] = [(root_path, 0)]
        while stack:
            directory, depth = stack.pop()

            real = os.path.realpath(directory)
            if real in visited:
                continue
            visited.add(real)

            marker_path = directory / MARKER_FILENAME
            if _marker_present(marker_path):
                config = read_marker(marker_path)
                if config is not None and config.sync:
                    repos.append(RepoRecord(
                        config=config,
                        path=directory,
                        source="local",
                        marker_path=marker_path,
                    ))
                elif config is not None:
                    logger.debug("%s opted out (sync: false)", directory)
                continue

            if depth >= max_depth:
                continue

            children = _child_dirs(directory, patterns, follow_symlinks)
            for child in reversed(children):
                stack.append((child, depth + 1))

    return repos


def _marker_present(marker_path: Path) -> bool:
    try:
        return marker_path.is_file()
    except PermissionError:
        return False


def _child_dirs(
    directory: Path,
    patterns: list[str] | tuple[str, ...],
    follow_symlinks: bool,
) -> list[Path]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except PermissionError:
        logger.debug("Permission denied reading %s", directory)
        return []

    children = []
    for entry in entries:
        if should_ignore(entry.name, patterns):
            continue
        if entry.is_symlink():
            if follow_symlinks and entry.is_dir(follow_symlinks=True):
                children.append(Path(entry.path))
        elif entry.is_dir(follow_symlinks=False):
            children.append(Path(entry.path))
    return children


def filter_by_configurator(repos: list[RepoRecord], configurator: str) -> list[RepoRecord]:
    """Keep repos whose marker names the given configurator."""
    return [r for r in repos if r.config.configurator == configurator]


def auto_update_repos(repos: list[RepoRecord]) -> list[RepoRecord]:
    """Keep repos eligible for unattended sync."""
    return [r for r in repos if r.config.auto_update]


def interactive_repos(repos: list[RepoRecord]) -> list[RepoRecord]:
    """Keep repos that need a confirmation before sync."""
    return [r for r in repos if not r.config.auto_update]
