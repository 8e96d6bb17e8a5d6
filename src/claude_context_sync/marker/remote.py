"""Discover opted-in repositories through the GitHub CLI."""

from __future__ import annotations

import base64
import binascii
import json
import logging

from claude_context_sync import MARKER_FILENAME
from claude_context_sync.git.commands import run_gh
from claude_context_sync.marker.discover import RepoRecord
from claude_context_sync.marker.reader import parse_marker

logger = logging.getLogger(__name__)

VISIBILITY_FILTERS = ("all", "private", "public")


class DiscoveryError(RuntimeError):
    """Remote listing failed; the whole discovery call is abandoned."""


def list_github_repos(owner: str, filter: str = "all", limit: int = 100) -> list[dict]:
    """List an owner's source repositories.

    Args:
        owner: GitHub user or organization.
        filter: One of "all", "private", "public".
        limit: Maximum number of repositories returned.

    Returns:
        List of dicts with: name, url, isPrivate.

    Raises:
        ValueError: On an unknown filter.
        DiscoveryError: If gh fails or prints something other than a JSON list.
    """
    if filter not in VISIBILITY_FILTERS:
        raise ValueError(f"Unknown filter: {filter}. Valid: {', '.join(VISIBILITY_FILTERS)}")

    args = ["repo", "list", owner, "--source"]
    if filter != "all":
        args += ["--visibility", filter]
    args += ["--limit", str(limit), "--json", "name,url,isPrivate"]

    result = run_gh(args)
    if result.returncode != 0:
        raise DiscoveryError(f"Failed to list repos for {owner}: {result.stderr.strip()}")

    try:
        repos = json.loads(result.stdout)
    except ValueError as e:
        raise DiscoveryError(f"Unexpected gh output for {owner}: {e}") from e
    if not isinstance(repos, list):
        raise DiscoveryError(f"Unexpected gh output for {owner}: not a list")
    return repos


def fetch_marker_text(owner: str, repo: str) -> str | None:
    """Fetch a repository's marker file through the contents API.

    Returns:
        Decoded file text, or None when the repo has no marker (HTTP 404)
        or its payload cannot be decoded.

    Raises:
        DiscoveryError: For any other gh failure, such as a rate limit or an
            expired login.
    """
    result = run_gh(["api", f"repos/{owner}/{repo}/contents/{MARKER_FILENAME}"])
    if result.returncode != 0:
        stderr = result.stderr.strip()
        if _is_not_found(stderr):
            return None
        raise DiscoveryError(f"Failed to fetch marker for {owner}/{repo}: {stderr}")
    try:
        payload = json.loads(result.stdout)
        return base64.b64decode(payload.get("content", "")).decode("utf-8")
    except (ValueError, AttributeError, binascii.Error, UnicodeDecodeError):
        logger.debug("Undecodable marker payload for %s/%s", owner, repo)
        return None


def _is_not_found(stderr: str) -> bool:
    return "HTTP 404" in stderr or "Not Found" in stderr


def discover_from_github(owner: str, filter: str = "all", limit: int = 100) -> list[RepoRecord]:
    """Find remote repositories that carry a valid, sync-enabled marker.

    Repositories are returned in listing order; those without a marker,
    with an unparsable one, or with ``sync: false`` are omitted.

    Raises:
        DiscoveryError: If listing fails or a marker fetch fails for any
            reason other than the file being absent.
    """
    repos: list[RepoRecord] = []
    for entry in list_github_repos(owner, filter, limit):
        name = entry.get("name")
        if not name:
            continue
        text = fetch_marker_text(owner, name)
        if text is None:
            continue
        config = parse_marker(text)
        if config is None or not config.sync:
            continue
        repos.append(RepoRecord(
            config=config,
            remote=f"{owner}/{name}",
            source="remote",
            url=entry.get("url"),
        ))
    return repos
