"""Sync CLI command."""

import argparse


def _confirm(repo) -> bool:
    try:
        answer = input(f"Sync {repo.identifier}? (y/n) ")
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def _print_result(result) -> None:
    if result.success:
        print(f"  OK   {result.repo}")
        for change in result.changes:
            print(f"       - {change}")
    elif result.skipped:
        print(f"  SKIP {result.repo}")
        for err in result.errors:
            print(f"       - {err}")
    else:
        print(f"  FAIL {result.repo}")
        for err in result.errors:
            print(f"       - {err}")


def cmd_sync(args: argparse.Namespace) -> int:
    from claude_context_sync.cli._common import read_content, workspace_config
    from claude_context_sync.marker.discover import discover_repos, read_marker_record
    from claude_context_sync.reposync.orchestrator import sync_repos

    try:
        content = read_content(args.content)
    except (OSError, UnicodeDecodeError) as e:
        print(f"  ERROR: Cannot read preferences: {e}")
        return 1

    try:
        config = workspace_config(args)
    except ValueError as e:
        print(f"  ERROR: {e}")
        return 1

    if args.path:
        repos = []
        for raw in args.path:
            record = read_marker_record(raw)
            if record is None:
                print(f"  WARN: No usable .claude-sync marker in {raw}")
                continue
            repos.append(record)
    else:
        try:
            repos = discover_repos(
                args.scan or config.scan_paths,
                max_depth=args.max_depth if args.max_depth is not None else config.max_depth,
                ignore_patterns=config.ignore_patterns,
            )
        except OSError as e:
            print(f"  ERROR: Discovery failed: {e}")
            return 1

    if not repos:
        print("No repositories to sync.")
        return 0

    if args.dry_run:
        print("=== DRY RUN MODE: no changes will be made ===\n")

    batch = sync_repos(
        repos,
        content,
        dry_run=args.dry_run,
        force=args.force,
        auto_only=args.auto,
        confirm=_confirm if args.interactive else None,
        backup=not args.no_backup,
        on_result=_print_result,
    )

    print()
    print(batch.report())
    return 0 if batch.passed else 1
