"""Sync one repository: safety check, apply, publish.

The sequence for a repository:
1. Refuse a dirty working tree unless forced
2. In PR mode, switch to the PR branch so targets merge with its copy
3. Write the preference text into every recognized CLAUDE.md target
4. If anything changed, commit targets and their backups, directly or on
   the PR branch
5. Report the outcome as a SyncResult

Nothing raised while applying or publishing leaves this module; it is
recorded on the result instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

from claude_context_sync.filesync.writer import target_paths, write_target
from claude_context_sync.git.commands import (
    GitError,
    checkout_branch,
    commit,
    create_pull_request,
    push,
    stage,
    working_tree_clean,
)
from claude_context_sync.marker.discover import RepoRecord
from claude_context_sync.reposync.models import SyncResult

logger = logging.getLogger(__name__)

DIRTY_TREE_MESSAGE = "Repository has uncommitted changes. Use --force to override."


def sync_repo(
    repo: RepoRecord,
    content: str,
    dry_run: bool = False,
    force: bool = False,
    backup: bool = True,
) -> SyncResult:
    """Propagate ``content`` into one repository.

    Args:
        repo: Discovered repository with a local checkout.
        content: Rendered preference text.
        dry_run: Report intended changes; write and commit nothing.
        force: Sync even with uncommitted changes. Backups still happen.
        backup: Back up pre-existing targets before overwriting them.

    Returns:
        SyncResult; success is true only when nothing was skipped or
        recorded as an error.
    """
    result = SyncResult(repo=repo.identifier)

    if repo.path is None:
        result.errors.append(f"No local checkout for {repo.identifier}")
        return result

    repo_path = repo.path
    try:
        if not force and not working_tree_clean(repo_path):
            result.skipped = True
            result.errors.append(DIRTY_TREE_MESSAGE)
            return result

        if repo.config.create_pr and not dry_run:
            # The merge must read the PR branch's copy of each target
            branch = repo.config.branch_name
            try:
                created = checkout_branch(repo_path, branch)
            except GitError as e:
                result.errors.append(f"Pull request branch {branch}: {e}")
                return result
            result.changes.append(f"{'Created' if created else 'Switched to'} branch {branch}")

        changed = _apply(repo, content, dry_run, backup, result)

        if changed and not dry_run:
            _publish(repo, changed, result)
        elif changed:
            if repo.config.create_pr:
                result.changes.append(f"Would create PR on branch {repo.config.branch_name}")
            else:
                push_note = " and push" if repo.config.auto_push else ""
                result.changes.append(f"Would commit{push_note} changes")
    except Exception as e:
        logger.debug("Sync of %s raised", repo_path, exc_info=True)
        result.errors.append(str(e) or type(e).__name__)

    result.success = not result.skipped and not result.errors
    return result


def _apply(
    repo: RepoRecord,
    content: str,
    dry_run: bool,
    backup: bool,
    result: SyncResult,
) -> list[str]:
    """Write every target.

    Returns:
        Repo-relative paths to stage: changed targets and any backups
        written for them. Empty when nothing changed.
    """
    changed: list[str] = []
    for target in target_paths(repo.path):
        rel = target.relative_to(repo.path).as_posix()
        outcome = write_target(
            content,
            target,
            dry_run=dry_run,
            backup=backup,
            merge=repo.config.preserve_overrides,
        )
        action = outcome["action"]
        if action == "unchanged":
            continue

        changed.append(rel)
        if dry_run:
            verb = "create" if action == "created" else "update"
            mode = " (merge)" if outcome["merged"] else ""
            result.changes.append(f"Would {verb} {rel}{mode}")
        elif action == "created":
            result.changes.append(f"Created {rel}")
        elif outcome["backup"]:
            backup_path = Path(outcome["backup"])
            changed.append(backup_path.relative_to(repo.path).as_posix())
            result.changes.append(f"Updated {rel} (backup: {backup_path.name})")
        else:
            result.changes.append(f"Updated {rel}")

    if not changed:
        result.changes.append("CLAUDE.md already up to date")
    return changed


def _publish(repo: RepoRecord, changed: list[str], result: SyncResult) -> None:
    """Stage and commit ``changed``. A PR branch is already checked out."""
    config = repo.config
    repo_path = repo.path

    if config.create_pr:
        branch = config.branch_name
        try:
            stage(repo_path, changed)
            commit(repo_path)
            push(repo_path, branch)
        except GitError as e:
            result.errors.append(f"Pull request branch {branch}: {e}")
            return
        result.changes.append(f"Committed and pushed to {branch}")
        if create_pull_request(repo_path):
            result.changes.append(f"Opened pull request from {branch}")
        return

    try:
        stage(repo_path, changed)
        commit(repo_path)
    except GitError as e:
        result.errors.append(f"Commit failed: {e.detail or e}")
        return
    result.changes.append("Committed changes to current branch")

    if config.auto_push:
        try:
            push(repo_path)
        except GitError as e:
            result.errors.append(f"Push failed: {e.detail or e}")
            return
        result.changes.append("Pushed to remote")
