"""Opt repositories in by writing .claude-sync markers."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Any

from claude_context_sync import MARKER_FILENAME
from claude_context_sync.git.commands import clone
from claude_context_sync.marker.reader import dump_marker, normalize
from claude_context_sync.marker.remote import list_github_repos
from claude_context_sync.paths import repos_dir as default_repos_dir

logger = logging.getLogger(__name__)

# Freshly marked repos take part in unattended batches
MARK_DEFAULTS: dict[str, Any] = {"auto_update": True}


def has_marker(repo_path: Path | str) -> bool:
    return (Path(repo_path) / MARKER_FILENAME).is_file()


def write_marker(repo_path: Path | str, overrides: dict[str, Any] | None = None) -> Path:
    """Write a fully populated marker into ``repo_path``.

    Returns:
        Path to the marker file.
    """
    config = normalize({**MARK_DEFAULTS, **(overrides or {})})
    marker_path = Path(repo_path) / MARKER_FILENAME
    marker_path.write_text(dump_marker(config), encoding="utf-8")
    return marker_path


def mark_repo(
    repo_path: Path | str,
    overrides: dict[str, Any] | None = None,
    force: bool = False,
) -> dict:
    """Mark a single local repository.

    Returns:
        Dict with: path, status ("marked" or "skipped"), marker.

    Raises:
        FileNotFoundError: If the repository directory does not exist.
    """
    path = Path(repo_path)
    if not path.is_dir():
        raise FileNotFoundError(f"Repository directory not found: {path}")

    if has_marker(path) and not force:
        return {"path": str(path), "status": "skipped", "marker": str(path / MARKER_FILENAME)}

    marker = write_marker(path, overrides)
    return {"path": str(path), "status": "marked", "marker": str(marker)}


def is_excluded(name: str, patterns: list[str]) -> bool:
    """Anchored glob match of a repo name, ``*`` matching anything."""
    for pattern in patterns:
        regex = ".*".join(re.escape(part) for part in pattern.split("*"))
        if re.fullmatch(regex, name):
            return True
    return False


def bulk_mark(
    owner: str,
    filter: str = "private",
    repos_dir: Path | str | None = None,
    overrides: dict[str, Any] | None = None,
    dry_run: bool = False,
    force: bool = False,
    exclude: list[str] | None = None,
) -> dict[str, list[str]]:
    """Clone (when needed) and mark every repository an owner has.

    Args:
        owner: GitHub user or organization.
        filter: Visibility filter ("all", "private", "public").
        repos_dir: Where clones live. Defaults to paths.repos_dir().
        overrides: Marker fields layered over MARK_DEFAULTS.
        dry_run: Only report which repos would be processed.
        force: Rewrite markers that already exist.
        exclude: Glob patterns of repo names to leave alone.

    Returns:
        Dict of repo names under: marked, cloned_and_marked, skipped,
        excluded, failed, would_process.

    Raises:
        DiscoveryError: If the repository listing fails.
    """
    base = Path(repos_dir) if repos_dir else default_repos_dir()
    results: dict[str, list[str]] = {
        "marked": [],
        "cloned_and_marked": [],
        "skipped": [],
        "excluded": [],
        "failed": [],
        "would_process": [],
    }

    repos = list_github_repos(owner, filter)
    if not dry_run:
        base.mkdir(parents=True, exist_ok=True)

    for entry in repos:
        name = entry.get("name")
        if not name:
            continue
        if is_excluded(name, exclude or []):
            results["excluded"].append(name)
            continue
        if dry_run:
            results["would_process"].append(name)
            continue

        repo_path = base / name
        cloned = False
        if not repo_path.exists():
            url = entry.get("url") or f"https://github.com/{owner}/{name}"
            try:
                result = clone(url, repo_path)
            except subprocess.TimeoutExpired:
                logger.warning("Clone of %s timed out", url)
                results["failed"].append(name)
                continue
            if result.returncode != 0:
                logger.warning("Clone of %s failed: %s", url, result.stderr.strip())
                results["failed"].append(name)
                continue
            cloned = True

        try:
            outcome = mark_repo(repo_path, overrides, force=force or cloned)
        except OSError as e:
            logger.warning("Could not mark %s: %s", name, e)
            results["failed"].append(name)
            continue

        if outcome["status"] == "skipped":
            results["skipped"].append(name)
        elif cloned:
            results["cloned_and_marked"].append(name)
        else:
            results["marked"].append(name)

    return results
