"""Marker module: discover, read, and write .claude-sync opt-in markers."""

from claude_context_sync.marker.discover import RepoRecord, discover_repos, read_marker_record
from claude_context_sync.marker.reader import MarkerConfig, normalize, read_marker
from claude_context_sync.marker.remote import DiscoveryError, discover_from_github

__all__ = [
    "DiscoveryError",
    "MarkerConfig",
    "RepoRecord",
    "discover_from_github",
    "discover_repos",
    "normalize",
    "read_marker",
    "read_marker_record",
]
