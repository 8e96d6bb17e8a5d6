"""Parse and normalize .claude-sync marker files."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATOR = "claude-actions-setup"
DEFAULT_VERSION = "*"
DEFAULT_BRANCH = "chore/update-claude-config"


@dataclass(frozen=True)
class MarkerConfig:
    """Sync policy declared by one repository's marker file."""

    sync: bool = True
    auto_update: bool = False
    configurator: str = DEFAULT_CONFIGURATOR
    version: str = DEFAULT_VERSION
    preserve_overrides: bool = True
    create_pr: bool = False
    branch_name: str = DEFAULT_BRANCH
    auto_push: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def normalize(partial: Mapping | None) -> MarkerConfig:
    """Fill a partial marker mapping with defaults.

    ``sync`` and ``preserve_overrides`` stay on unless set to exactly
    False. The other flags are off unless truthy. Empty strings fall back
    to the default value.
    """
    data = dict(partial or {})
    return MarkerConfig(
        sync=data.get("sync") is not False,
        auto_update=bool(data.get("auto_update", False)),
        configurator=str(data.get("configurator") or DEFAULT_CONFIGURATOR),
        version=str(data.get("version") or DEFAULT_VERSION),
        preserve_overrides=data.get("preserve_overrides") is not False,
        create_pr=bool(data.get("create_pr", False)),
        branch_name=str(data.get("branch_name") or DEFAULT_BRANCH),
        auto_push=bool(data.get("auto_push", False)),
    )


def parse_marker(text: str) -> MarkerConfig | None:
    """Parse marker text, YAML first with a JSON fallback.

    Returns:
        Normalized config, or None when the text is neither a YAML nor a
        JSON mapping. Blank text normalizes to the defaults.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        try:
            data = json.loads(text)
        except ValueError:
            return None

    if data is None:
        return normalize({})
    if not isinstance(data, dict):
        return None
    return normalize(data)


def read_marker(path: Path | str) -> MarkerConfig | None:
    """Read a marker file from disk.

    Unreadable or unparsable markers yield None rather than raising.
    """
    marker_path = Path(path)
    try:
        text = marker_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read marker %s: %s", marker_path, e)
        return None

    config = parse_marker(text)
    if config is None:
        logger.debug("Ignoring unparsable marker %s", marker_path)
    return config


def dump_marker(config: MarkerConfig) -> str:
    """Serialize a marker config as YAML, in field declaration order."""
    return yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False)
