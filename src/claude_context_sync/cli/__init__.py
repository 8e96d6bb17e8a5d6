"""Command-line interface for claude-context-sync.

Usage:
    claude-context-sync discover [--scan <path>]... [--max-depth N]
    claude-context-sync discover --github <owner> [--filter all|private|public]
    claude-context-sync sync [--path <repo>]... [--scan <path>]... [--content <file>|-]
                             [--dry-run] [--force] [--auto] [--interactive] [--no-backup]
    claude-context-sync mark repo <path> [--force] [--set key=value]...
    claude-context-sync mark bulk --user <owner> [--filter F] [--repos-dir D]
                                  [--exclude PATTERN]... [--dry-run] [--force]
    claude-context-sync backups list <repo>
    claude-context-sync backups restore <repo> <backup>
"""

import argparse
import logging
import sys

from claude_context_sync import __version__
from claude_context_sync.cli.backups import cmd_backups_list, cmd_backups_restore
from claude_context_sync.cli.discover import cmd_discover
from claude_context_sync.cli.mark import cmd_mark_bulk, cmd_mark_repo
from claude_context_sync.cli.sync import cmd_sync


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-context-sync",
        description="Propagate CLAUDE.md preferences into opted-in repositories",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", default=None,
        help="Path to workspace config (default: <repos-dir>/.claude-sync-workspace)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # discover
    disc = sub.add_parser("discover", help="Find repositories with .claude-sync markers")
    disc.add_argument(
        "--scan", action="append", default=[],
        help="Directory to scan (repeatable)",
    )
    disc.add_argument(
        "--max-depth", type=int, default=None,
        help="Deepest directory level examined (default 3)",
    )
    disc.add_argument(
        "--follow-symlinks", action="store_true",
        help="Descend into symlinked directories",
    )
    disc.add_argument(
        "--github", default=None, metavar="OWNER",
        help="Query GitHub instead of the local disk",
    )
    disc.add_argument(
        "--filter", default="all", choices=["all", "private", "public"],
        help="Visibility filter for --github",
    )

    # sync
    syn = sub.add_parser("sync", help="Sync preferences into discovered repositories")
    syn.add_argument(
        "--path", action="append", default=[],
        help="Sync this repository only (repeatable)",
    )
    syn.add_argument(
        "--scan", action="append", default=[],
        help="Directory to scan (repeatable)",
    )
    syn.add_argument(
        "--max-depth", type=int, default=None,
        help="Deepest directory level examined (default 3)",
    )
    syn.add_argument(
        "--content", default=None,
        help="Rendered preference file, or - for stdin (default: ~/.claude/CLAUDE.md)",
    )
    syn.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing or committing",
    )
    syn.add_argument(
        "--force", action="store_true",
        help="Sync repositories with uncommitted changes",
    )
    syn.add_argument(
        "--auto", action="store_true",
        help="Only repositories with auto_update: true",
    )
    syn.add_argument(
        "--interactive", action="store_true",
        help="Confirm each repository before syncing",
    )
    syn.add_argument(
        "--no-backup", action="store_true",
        help="Do not back up existing CLAUDE.md files",
    )

    # mark
    mark = sub.add_parser("mark", help="Opt repositories in to sync")
    mark_sub = mark.add_subparsers(dest="subcommand")

    mark_repo = mark_sub.add_parser("repo", help="Mark a local repository")
    mark_repo.add_argument("path")
    mark_repo.add_argument(
        "--force", action="store_true",
        help="Overwrite an existing marker",
    )
    mark_repo.add_argument(
        "--set", action="append", default=[], metavar="KEY=VALUE",
        help="Marker field override (repeatable)",
    )

    mark_bulk = mark_sub.add_parser("bulk", help="Clone and mark an owner's repositories")
    mark_bulk.add_argument("--user", required=True, help="GitHub user or organization")
    mark_bulk.add_argument(
        "--filter", default="private", choices=["all", "private", "public"],
        help="Visibility filter (default private)",
    )
    mark_bulk.add_argument(
        "--repos-dir", default=None,
        help="Clone directory (default ~/repos)",
    )
    mark_bulk.add_argument(
        "--exclude", action="append", default=[],
        help="Repo name glob to skip (repeatable)",
    )
    mark_bulk.add_argument(
        "--set", action="append", default=[], metavar="KEY=VALUE",
        help="Marker field override (repeatable)",
    )
    mark_bulk.add_argument(
        "--dry-run", action="store_true",
        help="List repositories without cloning or marking",
    )
    mark_bulk.add_argument(
        "--force", action="store_true",
        help="Overwrite existing markers",
    )

    # backups
    bak = sub.add_parser("backups", help="Inspect and restore CLAUDE.md backups")
    bak_sub = bak.add_subparsers(dest="subcommand")
    bak_list = bak_sub.add_parser("list", help="List backups, newest first")
    bak_list.add_argument("path", help="Repository root or CLAUDE.md file")
    bak_restore = bak_sub.add_parser("restore", help="Restore a backup")
    bak_restore.add_argument("path", help="Repository root or CLAUDE.md file")
    bak_restore.add_argument("backup", help="Backup file to restore")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        ("mark", "repo"): cmd_mark_repo,
        ("mark", "bulk"): cmd_mark_bulk,
        ("backups", "list"): cmd_backups_list,
        ("backups", "restore"): cmd_backups_restore,
    }

    # Handle top-level commands (no subcommand)
    if args.command == "discover":
        return cmd_discover(args)
    if args.command == "sync":
        return cmd_sync(args)

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
