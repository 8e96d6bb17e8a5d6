"""Drive a batch of discovered repositories through sync_repo."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from claude_context_sync.marker.discover import RepoRecord, auto_update_repos
from claude_context_sync.paths import repos_dir as default_repos_dir
from claude_context_sync.reposync.models import BatchResult, SyncResult
from claude_context_sync.reposync.sync import sync_repo

logger = logging.getLogger(__name__)

DECLINED_MESSAGE = "Skipped by user"


def resolve_checkout(repo: RepoRecord, repos_dir: Path | str | None = None) -> RepoRecord:
    """Point a remote record at its clone under ``repos_dir``, if one exists."""
    if repo.path is not None or not repo.remote:
        return repo
    base = Path(repos_dir) if repos_dir else default_repos_dir()
    checkout = base / repo.name
    if checkout.is_dir():
        return replace(repo, path=checkout)
    return repo


def sync_repos(
    repos: list[RepoRecord],
    content: str,
    dry_run: bool = False,
    force: bool = False,
    auto_only: bool = False,
    confirm: Callable[[RepoRecord], bool] | None = None,
    backup: bool = True,
    on_result: Callable[[SyncResult], None] | None = None,
) -> BatchResult:
    """Sync repositories one at a time, in the order given.

    Args:
        repos: Discovered repositories. Remote records are mapped onto an
            existing clone under the repos directory.
        content: Rendered preference text.
        dry_run: Report only.
        force: Ignore uncommitted changes.
        auto_only: Keep only repos whose marker sets auto_update.
        confirm: Asked per repo before a real, non-auto sync. Declined
            repos are recorded as skipped.
        backup: Back up targets before overwriting.
        on_result: Called with each result as soon as it is available.

    Returns:
        BatchResult with one result per processed repo, input order kept.
    """
    selected = auto_update_repos(repos) if auto_only else list(repos)
    batch = BatchResult(dry_run=dry_run)

    for repo in selected:
        if confirm is not None and not dry_run and not auto_only and not confirm(repo):
            result = SyncResult(repo=repo.identifier, skipped=True, errors=[DECLINED_MESSAGE])
        else:
            logger.info("Syncing %s", repo.identifier)
            result = sync_repo(resolve_checkout(repo), content, dry_run=dry_run, force=force, backup=backup)
        batch.results.append(result)
        if on_result is not None:
            on_result(result)

    return batch
