"""Propagate a single body of CLAUDE.md preferences into opted-in repositories."""

__version__ = "0.4.0"

# Opt-in marker at a repository root
MARKER_FILENAME = ".claude-sync"
