"""Git module: working-tree checks and publication for synced repositories."""

from claude_context_sync.git.commands import (
    COMMIT_MESSAGE,
    GitError,
    checkout_branch,
    commit,
    create_pull_request,
    push,
    run_gh,
    run_git,
    stage,
    working_tree_clean,
)

__all__ = [
    "COMMIT_MESSAGE",
    "GitError",
    "checkout_branch",
    "commit",
    "create_pull_request",
    "push",
    "run_gh",
    "run_git",
    "stage",
    "working_tree_clean",
]
