"""Repository sync: apply preferences and publish them through git."""

from claude_context_sync.reposync.models import BatchResult, Summary, SyncResult, summarize
from claude_context_sync.reposync.orchestrator import resolve_checkout, sync_repos
from claude_context_sync.reposync.sync import sync_repo

__all__ = [
    "BatchResult",
    "Summary",
    "SyncResult",
    "resolve_checkout",
    "summarize",
    "sync_repo",
    "sync_repos",
]
