"""Mark CLI commands."""

import argparse


def cmd_mark_repo(args: argparse.Namespace) -> int:
    from claude_context_sync.cli._common import parse_overrides, workspace_config
    from claude_context_sync.marker.mark import mark_repo

    try:
        overrides = {**workspace_config(args).marker, **parse_overrides(args.set)}
        result = mark_repo(args.path, overrides, force=args.force)
    except (ValueError, OSError) as e:
        print(f"  ERROR: {e}")
        return 1

    if result["status"] == "skipped":
        print(f"  {args.path} is already marked (use --force to overwrite)")
        return 0

    print(f"  Marked {result['path']}")
    print(f"  Marker file: {result['marker']}")
    return 0


def cmd_mark_bulk(args: argparse.Namespace) -> int:
    from claude_context_sync.cli._common import parse_overrides, workspace_config
    from claude_context_sync.marker.mark import bulk_mark
    from claude_context_sync.marker.remote import DiscoveryError

    try:
        config = workspace_config(args)
        overrides = {**config.marker, **parse_overrides(args.set)}
        results = bulk_mark(
            args.user,
            filter=args.filter,
            repos_dir=args.repos_dir,
            overrides=overrides,
            dry_run=args.dry_run,
            force=args.force,
            exclude=config.exclude + args.exclude,
        )
    except (DiscoveryError, ValueError, OSError) as e:
        print(f"  ERROR: {e}")
        return 1

    prefix = "[DRY RUN] " if args.dry_run else ""
    print(f"{prefix}Bulk marking for {args.user}")
    print("─" * 40)
    labels = [
        ("cloned_and_marked", "Cloned and marked"),
        ("marked", "Marked (already cloned)"),
        ("skipped", "Skipped (already marked)"),
        ("excluded", "Excluded"),
        ("would_process", "Would process"),
        ("failed", "Failed"),
    ]
    for key, label in labels:
        if results[key]:
            print(f"  {label}: {len(results[key])}")
            for name in results[key]:
                print(f"    - {name}")

    return 1 if results["failed"] else 0
