"""Tests for single-repository sync against real git repos."""

from claude_context_sync.filesync.backup import list_backups
from claude_context_sync.git.commands import COMMIT_MESSAGE, GitError
from claude_context_sync.marker.discover import RepoRecord, read_marker_record
from claude_context_sync.marker.reader import MarkerConfig
from claude_context_sync.reposync.sync import DIRTY_TREE_MESSAGE, sync_repo

from conftest import git

AUTO_PUSH_MARKER = "sync: true\nauto_update: true\ncreate_pr: false\nauto_push: true\n"
PR_MARKER = "sync: true\ncreate_pr: true\nbranch_name: chore/update-claude-config\n"


def _commit_count(repo) -> int:
    return int(git(["rev-list", "--count", "HEAD"], repo))


def _commit_file(repo, rel, text):
    path = repo / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    git(["add", rel], repo)
    git(["commit", "-m", f"add {rel}"], repo)
    return path


class TestSafetyCheck:
    def test_dirty_tree_skipped_and_untouched(self, make_repo, preferences):
        repo = make_repo()
        target = _commit_file(repo, ".claude/CLAUDE.md", "old content\n")
        (repo / "scratch.txt").write_text("wip")
        before = target.read_bytes()

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.skipped is True
        assert result.success is False
        assert result.errors == [DIRTY_TREE_MESSAGE]
        assert result.changes == []
        assert target.read_bytes() == before
        assert list_backups(target) == []

    def test_force_bypasses_check_but_keeps_backups(self, make_repo, preferences):
        repo = make_repo()
        target = _commit_file(repo, "CLAUDE.md", "old content\n")
        (repo / "scratch.txt").write_text("wip")

        result = sync_repo(read_marker_record(repo), preferences, force=True)

        assert result.success is True
        assert len(list_backups(target)) == 1
        assert git(["log", "-1", "--format=%B"], repo) == COMMIT_MESSAGE
        # target and backup committed, scratch left alone
        assert git(["status", "--porcelain"], repo) == "?? scratch.txt"


class TestDirectCommit:
    def test_created_committed_and_pushed(self, make_repo, preferences, tmp_path):
        repo = make_repo(marker=AUTO_PUSH_MARKER, remote=True)
        record = read_marker_record(repo)
        assert record.config == MarkerConfig(auto_update=True, auto_push=True)

        result = sync_repo(record, preferences)

        assert result.success is True
        assert result.errors == []
        assert (repo / ".claude" / "CLAUDE.md").read_text() == preferences
        assert result.changes == [
            "Created .claude/CLAUDE.md",
            "Committed changes to current branch",
            "Pushed to remote",
        ]
        assert git(["log", "-1", "--format=%B"], repo) == COMMIT_MESSAGE
        origin = tmp_path / "repo-origin.git"
        assert git(["--git-dir", str(origin), "rev-parse", "main"], tmp_path) == git(["rev-parse", "HEAD"], repo)

    def test_without_auto_push_nothing_pushed(self, make_repo, preferences, tmp_path):
        repo = make_repo(remote=True)
        origin_head = git(["--git-dir", str(tmp_path / "repo-origin.git"), "rev-parse", "main"], tmp_path)

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is True
        assert "Pushed to remote" not in result.changes
        assert git(["--git-dir", str(tmp_path / "repo-origin.git"), "rev-parse", "main"], tmp_path) == origin_head

    def test_push_failure_is_distinct_error(self, make_repo, preferences):
        repo = make_repo(marker=AUTO_PUSH_MARKER)  # no origin configured
        before = _commit_count(repo)

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is False
        assert result.skipped is False
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Push failed:")
        assert "Committed changes to current branch" in result.changes
        assert _commit_count(repo) == before + 1

    def test_commit_failure_recorded(self, make_repo, preferences, monkeypatch):
        repo = make_repo()

        def boom(repo_path, message=COMMIT_MESSAGE):
            raise GitError("Commit", "hook rejected")

        monkeypatch.setattr("claude_context_sync.reposync.sync.commit", boom)
        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is False
        assert result.errors == ["Commit failed: hook rejected"]

    def test_legacy_and_primary_both_updated(self, make_repo, preferences):
        repo = make_repo()
        primary = _commit_file(repo, ".claude/CLAUDE.md", "primary notes")
        legacy = _commit_file(repo, "CLAUDE.md", "legacy notes")

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is True
        assert primary.read_text().startswith(preferences)
        assert legacy.read_text().startswith(preferences)
        assert legacy.read_text().endswith("legacy notes")
        assert git(["diff", "HEAD", "--name-only"], repo) == ""

    def test_overwrite_when_overrides_not_preserved(self, make_repo, preferences):
        repo = make_repo(marker="preserve_overrides: false\n")
        target = _commit_file(repo, "CLAUDE.md", "stale\n")

        sync_repo(read_marker_record(repo), preferences)

        assert target.read_text() == preferences

    def test_up_to_date_makes_no_commit(self, make_repo, preferences):
        repo = make_repo()
        target = _commit_file(repo, ".claude/CLAUDE.md", preferences)
        before = _commit_count(repo)

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is True
        assert result.changes == ["CLAUDE.md already up to date"]
        assert _commit_count(repo) == before
        assert list_backups(target) == []

    def test_repeat_sync_with_new_content(self, make_repo, preferences):
        repo = make_repo()
        target = _commit_file(repo, "CLAUDE.md", "notes")

        first = sync_repo(read_marker_record(repo), preferences)
        second = sync_repo(read_marker_record(repo), "revised preferences\n")

        assert first.success is True
        assert second.success is True
        assert second.skipped is False
        assert target.read_text().startswith("revised preferences\n")
        backups = list_backups(target)
        assert len(backups) == 2
        tracked = git(["ls-files"], repo).splitlines()
        assert all(b.name in tracked for b in backups)
        assert git(["status", "--porcelain"], repo) == ""


class TestPullRequest:
    def test_branch_pushed_pr_failure_tolerated(self, make_repo, preferences, tmp_path, monkeypatch):
        repo = make_repo(marker=PR_MARKER, remote=True)
        monkeypatch.setattr(
            "claude_context_sync.reposync.sync.create_pull_request",
            lambda repo_path: False,
        )

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is True
        assert result.errors == []
        assert git(["rev-parse", "--abbrev-ref", "HEAD"], repo) == "chore/update-claude-config"
        origin = tmp_path / "repo-origin.git"
        assert git(["--git-dir", str(origin), "rev-parse", "chore/update-claude-config"], tmp_path) == \
            git(["rev-parse", "HEAD"], repo)
        assert result.changes == [
            "Created branch chore/update-claude-config",
            "Created .claude/CLAUDE.md",
            "Committed and pushed to chore/update-claude-config",
        ]

    def test_pr_opened(self, make_repo, preferences, monkeypatch):
        repo = make_repo(marker=PR_MARKER, remote=True)
        opened = []
        monkeypatch.setattr(
            "claude_context_sync.reposync.sync.create_pull_request",
            lambda repo_path: opened.append(repo_path) or True,
        )

        result = sync_repo(read_marker_record(repo), preferences)

        assert opened == [repo]
        assert result.changes[-1] == "Opened pull request from chore/update-claude-config"

    def test_existing_branch_reused(self, make_repo, preferences, monkeypatch):
        repo = make_repo(marker=PR_MARKER, remote=True)
        git(["branch", "chore/update-claude-config"], repo)
        monkeypatch.setattr("claude_context_sync.reposync.sync.create_pull_request", lambda repo_path: False)

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is True
        assert result.changes[0] == "Switched to branch chore/update-claude-config"

    def test_second_run_after_returning_to_main(self, make_repo, preferences, tmp_path, monkeypatch):
        repo = make_repo(marker=PR_MARKER, remote=True)
        monkeypatch.setattr("claude_context_sync.reposync.sync.create_pull_request", lambda repo_path: False)
        assert sync_repo(read_marker_record(repo), preferences).success is True
        git(["checkout", "main"], repo)

        result = sync_repo(read_marker_record(repo), "revised preferences\n")

        assert result.errors == []
        assert result.success is True
        assert result.changes[0] == "Switched to branch chore/update-claude-config"
        assert git(["rev-parse", "--abbrev-ref", "HEAD"], repo) == "chore/update-claude-config"
        target = repo / ".claude" / "CLAUDE.md"
        assert target.read_text().startswith("revised preferences\n")
        assert len(list_backups(target)) == 1
        assert git(["status", "--porcelain"], repo) == ""
        origin = tmp_path / "repo-origin.git"
        assert git(["--git-dir", str(origin), "rev-parse", "chore/update-claude-config"], tmp_path) == \
            git(["rev-parse", "HEAD"], repo)
        git(["checkout", "main"], repo)
        assert not target.exists()

    def test_push_failure_on_branch_recorded(self, make_repo, preferences, monkeypatch):
        repo = make_repo(marker=PR_MARKER)  # no origin
        called = []
        monkeypatch.setattr(
            "claude_context_sync.reposync.sync.create_pull_request",
            lambda repo_path: called.append(repo_path) or True,
        )

        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is False
        assert result.errors[0].startswith("Pull request branch chore/update-claude-config: Push failed")
        assert called == []


class TestDryRun:
    def test_no_side_effects(self, make_repo, preferences):
        repo = make_repo(marker=AUTO_PUSH_MARKER)
        target = _commit_file(repo, "CLAUDE.md", "notes")
        before = _commit_count(repo)

        result = sync_repo(read_marker_record(repo), preferences, dry_run=True)

        assert result.success is True
        assert result.changes == ["Would update CLAUDE.md (merge)", "Would commit and push changes"]
        assert target.read_text() == "notes"
        assert list_backups(target) == []
        assert _commit_count(repo) == before
        assert not (repo / ".claude").exists()

    def test_pr_intent(self, make_repo, preferences):
        repo = make_repo(marker=PR_MARKER)
        result = sync_repo(read_marker_record(repo), preferences, dry_run=True)
        assert result.changes == [
            "Would create .claude/CLAUDE.md",
            "Would create PR on branch chore/update-claude-config",
        ]
        assert git(["rev-parse", "--abbrev-ref", "HEAD"], repo) == "main"


class TestFailures:
    def test_remote_record_without_checkout(self, preferences):
        record = RepoRecord(config=MarkerConfig(), remote="octo/service", source="remote")
        result = sync_repo(record, preferences)
        assert result.success is False
        assert result.errors == ["No local checkout for octo/service"]

    def test_apply_exception_recorded(self, make_repo, preferences, monkeypatch):
        repo = make_repo()

        def explode(*args, **kwargs):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr("claude_context_sync.reposync.sync.write_target", explode)
        result = sync_repo(read_marker_record(repo), preferences)

        assert result.success is False
        assert result.skipped is False
        assert result.errors == ["read-only filesystem"]

