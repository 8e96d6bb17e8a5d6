"""Result types for repository sync runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath


@dataclass
class SyncResult:
    """Outcome of syncing one repository."""

    repo: str
    success: bool = False
    skipped: bool = False
    changes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return not self.success and not self.skipped

    @property
    def display_name(self) -> str:
        return PurePath(self.repo).name or self.repo

    def first_message(self, default: str) -> str:
        return self.errors[0] if self.errors else default


@dataclass
class Summary:
    """Counts over a batch of SyncResults."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0


def summarize(results: list[SyncResult]) -> Summary:
    return Summary(
        total=len(results),
        successful=sum(1 for r in results if r.success),
        failed=sum(1 for r in results if r.failed),
        skipped=sum(1 for r in results if r.skipped),
    )


@dataclass
class BatchResult:
    """Ordered per-repository results of one sync run."""

    results: list[SyncResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def summary(self) -> Summary:
        return summarize(self.results)

    @property
    def passed(self) -> bool:
        return self.summary.failed == 0

    def report(self) -> str:
        s = self.summary
        lines = ["Sync Summary", "=" * 40, f"Total repositories: {s.total}"]
        if s.successful:
            lines.append(f"\nSuccessful: {s.successful}")
            for r in self.results:
                if r.success:
                    lines.append(f"  {r.display_name}")
        if s.failed:
            lines.append(f"\nFailed: {s.failed}")
            for r in self.results:
                if r.failed:
                    lines.append(f"  {r.display_name}: {r.first_message('Unknown error')}")
        if s.skipped:
            lines.append(f"\nSkipped: {s.skipped}")
            for r in self.results:
                if r.skipped:
                    lines.append(f"  {r.display_name}: {r.first_message('Unknown reason')}")
        if self.dry_run:
            lines.append("\n[DRY RUN] No files were modified.")
        return "\n".join(lines)
