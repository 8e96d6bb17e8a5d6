"""Discover CLI command."""

import argparse


def print_repos(repos: list) -> None:
    for i, repo in enumerate(repos, 1):
        print(f"{i}. {repo.identifier}")
        print(f"   Configurator: {repo.config.configurator}")
        print(f"   Auto-update: {'Yes' if repo.config.auto_update else 'No'}")
        print(f"   Create PR: {'Yes' if repo.config.create_pr else 'No'}")
        print()


def cmd_discover(args: argparse.Namespace) -> int:
    from claude_context_sync.cli._common import workspace_config
    from claude_context_sync.marker.discover import discover_repos
    from claude_context_sync.marker.remote import DiscoveryError, discover_from_github

    try:
        config = workspace_config(args)
        if args.github:
            repos = discover_from_github(args.github, args.filter)
        else:
            repos = discover_repos(
                args.scan or config.scan_paths,
                max_depth=args.max_depth if args.max_depth is not None else config.max_depth,
                follow_symlinks=args.follow_symlinks,
                ignore_patterns=config.ignore_patterns,
            )
    except (DiscoveryError, ValueError, OSError) as e:
        print(f"  ERROR: Discovery failed: {e}")
        return 1

    if not repos:
        print("No repositories found with .claude-sync markers")
        print("To mark a repository for auto-sync, create a .claude-sync file in its root:\n")
        print("  sync: true")
        print("  auto_update: true")
        return 0

    print(f"Found {len(repos)} repository(ies) with .claude-sync markers:\n")
    print_repos(repos)
    return 0
