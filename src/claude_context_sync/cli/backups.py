"""Backup CLI commands."""

import argparse
from pathlib import Path


def _resolve_target(raw: str) -> Path:
    from claude_context_sync.filesync.writer import locate_target

    path = Path(raw).expanduser()
    return locate_target(path) if path.is_dir() else path


def cmd_backups_list(args: argparse.Namespace) -> int:
    from claude_context_sync.filesync.backup import list_backups

    target = _resolve_target(args.path)
    backups = list_backups(target)
    if not backups:
        print(f"No backups found for {target}")
        return 0

    print(f"Found {len(backups)} backup(s) for {target}:")
    for i, backup in enumerate(backups, 1):
        print(f"  {i}. {backup}")
    return 0


def cmd_backups_restore(args: argparse.Namespace) -> int:
    from claude_context_sync.filesync.backup import restore_backup

    target = _resolve_target(args.path)
    try:
        result = restore_backup(args.backup, target)
    except FileNotFoundError as e:
        print(f"  ERROR: {e}")
        return 1

    print(f"  Restored {result['path']}")
    print(f"  From: {result['restored_from']}")
    if result["backup"]:
        print(f"  Previous version saved as: {result['backup']}")
    return 0
