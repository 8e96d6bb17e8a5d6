"""Timestamped sibling backups of target files.

Backups are named ``<target>.backup.<YYYY-MM-DD-HH-MM-SS-mmm>`` (UTC), so
lexicographic order is chronological order. They are never pruned here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from claude_context_sync.filesync import BACKUP_INFIX

logger = logging.getLogger(__name__)


def backup_timestamp(now: datetime | None = None) -> str:
    """Millisecond timestamp using only filesystem-safe characters."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d-%H-%M-%S") + f"-{now.microsecond // 1000:03d}"


def create_backup(target: Path | str, now: datetime | None = None) -> Path:
    """Copy ``target`` to a new timestamped sibling.

    Two backups inside the same millisecond get a zero-padded numeric
    suffix instead of overwriting each other, so name order stays
    chronological.

    Raises:
        FileNotFoundError: If the target does not exist.
    """
    target_path = Path(target)
    content = target_path.read_bytes()

    stem = f"{target_path.name}{BACKUP_INFIX}{backup_timestamp(now)}"
    backup_path = target_path.with_name(stem)
    counter = 1
    while backup_path.exists():
        backup_path = target_path.with_name(f"{stem}-{counter:03d}")
        counter += 1

    backup_path.write_bytes(content)
    logger.debug("Backed up %s to %s", target_path, backup_path)
    return backup_path


def list_backups(target: Path | str) -> list[Path]:
    """All backups of ``target``, most recent first."""
    target_path = Path(target)
    directory = target_path.parent
    if not directory.is_dir():
        return []

    prefix = f"{target_path.name}{BACKUP_INFIX}"
    backups = [p for p in directory.iterdir() if p.name.startswith(prefix) and p.is_file()]
    return sorted(backups, key=lambda p: p.name, reverse=True)


def restore_backup(backup_path: Path | str, target: Path | str) -> dict:
    """Overwrite ``target`` with a backup's content.

    The current target, if any, is backed up first so the restore itself
    can be undone.

    Returns:
        Dict with: path, restored_from, backup (path of the pre-restore
        backup, or None).

    Raises:
        FileNotFoundError: If the backup does not exist.
    """
    source = Path(backup_path)
    target_path = Path(target)
    if not source.is_file():
        raise FileNotFoundError(f"Backup not found: {source}")

    content = source.read_bytes()
    pre_restore = create_backup(target_path) if target_path.exists() else None

    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_bytes(content)

    return {
        "path": str(target_path),
        "restored_from": str(source),
        "backup": str(pre_restore) if pre_restore else None,
    }
