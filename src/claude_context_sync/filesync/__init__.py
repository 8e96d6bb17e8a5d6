"""CLAUDE.md file sync.

Writes the rendered preference text into a repository's CLAUDE.md,
keeping a timestamped backup of whatever was there before.

Project-specific content is kept by a textual merge. Anything from the
delimiter line onwards is carried over verbatim below the fresh block:

    <fresh preferences>

    ---

    # PROJECT CONTEXT
    ...

Without a delimiter the whole previous file is carried over instead.
"""

# Start of the project-owned block in an existing target
PROJECT_DELIMITER = "# PROJECT CONTEXT"
SEPARATOR = "\n\n---\n\n"

# Target locations relative to a repository root, preferred first
PRIMARY_TARGET = ".claude/CLAUDE.md"
LEGACY_TARGET = "CLAUDE.md"

BACKUP_INFIX = ".backup."
