"""Blocking wrappers around the git and gh command-line tools.

Every call runs to completion and is judged only by its exit code and
captured output. Helpers that mutate the repository raise GitError on a
non-zero exit; the caller decides which stages are fatal.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = (
    "chore: update Claude Code configuration\n\n"
    "Auto-synced from claude-context-sync"
)
PR_TITLE = "Update Claude Code Configuration"
PR_BODY = "Auto-synced configuration from claude-context-sync"


class GitError(RuntimeError):
    """A git stage exited non-zero."""

    def __init__(self, stage: str, detail: str):
        self.stage = stage
        self.detail = detail.strip()
        super().__init__(f"{stage} failed: {self.detail}" if self.detail else f"{stage} failed")


def _run(cmd: list[str], cwd: Path | str | None, timeout: int | None = None) -> subprocess.CompletedProcess:
    logger.debug("$ %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        # Tool not installed: report it the way a shell would
        return subprocess.CompletedProcess(cmd, 127, stdout="", stderr=str(e))


def run_git(args: list[str], cwd: Path | str, timeout: int | None = None) -> subprocess.CompletedProcess:
    """Run a git command and return the result."""
    return _run(["git"] + args, cwd, timeout)


def run_gh(args: list[str], cwd: Path | str | None = None) -> subprocess.CompletedProcess:
    """Run a GitHub CLI command and return the result."""
    return _run(["gh"] + args, cwd)


def _check(result: subprocess.CompletedProcess, stage: str) -> subprocess.CompletedProcess:
    if result.returncode != 0:
        raise GitError(stage, result.stderr or result.stdout)
    return result


def working_tree_clean(repo_path: Path | str) -> bool:
    """True when ``git status --porcelain`` prints nothing.

    A failing status (not a repo, git missing) prints nothing either and
    so counts as clean; the later commit stage reports the real problem.
    """
    result = run_git(["status", "--porcelain"], repo_path)
    if result.returncode != 0:
        logger.debug("git status failed in %s: %s", repo_path, result.stderr.strip())
        return True
    return result.stdout.strip() == ""


def current_branch(repo_path: Path | str) -> str | None:
    """Name of the checked-out branch, or None when detached."""
    result = run_git(["rev-parse", "--abbrev-ref", "HEAD"], repo_path)
    if result.returncode != 0:
        return None
    name = result.stdout.strip()
    return None if name == "HEAD" else name


def branch_exists(repo_path: Path | str, branch: str) -> bool:
    result = run_git(["rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"], repo_path)
    return result.returncode == 0


def checkout_branch(repo_path: Path | str, branch: str) -> bool:
    """Switch to ``branch``, creating it from HEAD when absent.

    Returns:
        True if the branch was created.
    """
    if branch_exists(repo_path, branch):
        _check(run_git(["checkout", branch], repo_path), "Checkout")
        return False
    _check(run_git(["checkout", "-b", branch], repo_path), "Branch creation")
    return True


def stage(repo_path: Path | str, paths: list[str]) -> None:
    _check(run_git(["add", "--"] + paths, repo_path), "Stage")


def commit(repo_path: Path | str, message: str = COMMIT_MESSAGE) -> None:
    _check(run_git(["commit", "-m", message], repo_path), "Commit")


def push(repo_path: Path | str, branch: str | None = None) -> None:
    """Push HEAD, or publish ``branch`` to origin with upstream tracking."""
    args = ["push"]
    if branch:
        args += ["-u", "origin", branch]
    _check(run_git(args, repo_path), "Push")


def create_pull_request(
    repo_path: Path | str,
    title: str = PR_TITLE,
    body: str = PR_BODY,
) -> bool:
    """Open a pull request for the current branch with ``gh``.

    Returns:
        False when gh is missing or refuses (e.g. a PR already exists).
    """
    result = run_gh(["pr", "create", "--title", title, "--body", body], repo_path)
    if result.returncode != 0:
        logger.info("Pull request not created in %s: %s", repo_path, result.stderr.strip())
        return False
    return True


def clone(url: str, target: Path | str, timeout: int = 300) -> subprocess.CompletedProcess:
    """Clone ``url`` into ``target``."""
    return _run(["git", "clone", url, str(target)], cwd=None, timeout=timeout)
