"""Locate and write CLAUDE.md targets inside a repository."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from claude_context_sync.filesync import LEGACY_TARGET, PRIMARY_TARGET
from claude_context_sync.filesync.backup import create_backup
from claude_context_sync.filesync.merge import is_current, merge_content

logger = logging.getLogger(__name__)


def locate_target(repo_root: Path | str) -> Path:
    """Pick the CLAUDE.md to write in a repository.

    .claude/CLAUDE.md if it exists, else a root-level CLAUDE.md if that
    exists, else .claude/CLAUDE.md (to be created).
    """
    root = Path(repo_root)
    primary = root / PRIMARY_TARGET
    if primary.exists():
        return primary
    legacy = root / LEGACY_TARGET
    if legacy.exists():
        return legacy
    return primary


def target_paths(repo_root: Path | str) -> list[Path]:
    """Every recognized target present in the repo, primary first.

    Falls back to the primary location alone when neither exists.
    """
    root = Path(repo_root)
    present = [root / rel for rel in (PRIMARY_TARGET, LEGACY_TARGET) if (root / rel).exists()]
    return present or [root / PRIMARY_TARGET]


def write_target(
    content: str,
    target: Path | str,
    dry_run: bool = False,
    backup: bool = True,
    merge: bool = True,
) -> dict[str, Any]:
    """Apply ``content`` to a target file.

    Args:
        content: Rendered preference text.
        target: File to write.
        dry_run: Work out the action without touching the filesystem.
        backup: Back up a pre-existing target before overwriting it.
        merge: Keep the existing project block (see merge_content) instead
            of overwriting.

    Returns:
        Dict with: path, action ("created", "updated", "unchanged"),
        backup (path or None), merged, dry_run.
    """
    target_path = Path(target)
    result: dict[str, Any] = {
        "path": str(target_path),
        "action": "unchanged",
        "backup": None,
        "merged": False,
        "dry_run": dry_run,
    }

    if not target_path.exists():
        result["action"] = "created"
        if not dry_run:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(content, encoding="utf-8")
        return result

    existing = target_path.read_text(encoding="utf-8")
    if merge:
        if is_current(existing, content):
            return result
        final = merge_content(existing, content)
        result["merged"] = True
    else:
        if existing == content:
            return result
        final = content

    result["action"] = "updated"
    if dry_run:
        return result

    if backup:
        result["backup"] = str(create_backup(target_path))
    target_path.write_text(final, encoding="utf-8")
    logger.debug("Wrote %s (%s)", target_path, "merged" if result["merged"] else "overwrite")
    return result
