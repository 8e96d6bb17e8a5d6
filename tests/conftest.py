"""Shared test fixtures for claude-context-sync."""

import subprocess
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def git(args: list[str], cwd: Path) -> str:
    result = subprocess.run(["git"] + args, cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout.strip()


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolate git from the developer's global config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "t@t")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "t@t")
    monkeypatch.setenv("CLAUDE_SYNC_REPOS_DIR", str(tmp_path / "repos"))
    return home


@pytest.fixture
def make_repo(tmp_path, git_env):
    """Factory for committed git repos carrying a marker.

    With ``remote=True`` a bare repo is attached as origin and main is
    pushed with upstream tracking.
    """
    def _make(name: str = "repo", marker: str | None = "sync: true\n", remote: bool = False) -> Path:
        repo = tmp_path / name
        repo.mkdir(parents=True)
        git(["init", "-b", "main"], repo)
        if marker is not None:
            (repo / ".claude-sync").write_text(marker)
        (repo / "README.md").write_text(f"# {name}\n")
        git(["add", "."], repo)
        git(["commit", "-m", "init"], repo)
        if remote:
            bare = tmp_path / f"{name}-origin.git"
            git(["init", "--bare", "-b", "main", str(bare)], tmp_path)
            git(["remote", "add", "origin", str(bare)], repo)
            git(["push", "-u", "origin", "main"], repo)
        return repo

    return _make


@pytest.fixture
def preferences():
    return (FIXTURES / "preferences.md").read_text()
