"""Textual merge of fresh preferences with an existing target."""

from __future__ import annotations

from claude_context_sync.filesync import PROJECT_DELIMITER, SEPARATOR


def merge_content(existing: str, new: str, delimiter: str = PROJECT_DELIMITER) -> str:
    """Put ``new`` on top and carry the project-owned part of ``existing`` below it.

    With the delimiter at offset k the result is ``new + SEPARATOR +
    existing[k:]``; without it, ``new + SEPARATOR + existing``.
    """
    index = existing.find(delimiter)
    if index >= 0:
        return new + SEPARATOR + existing[index:]
    return new + SEPARATOR + existing


def is_current(existing: str, new: str, delimiter: str = PROJECT_DELIMITER) -> bool:
    """Whether ``existing`` already carries ``new`` as its top block.

    True when the file equals the fresh text, equals the merge result, or
    already starts with the fresh block followed by the separator.
    """
    if existing == new:
        return True
    if existing.startswith(new + SEPARATOR):
        return True
    return merge_content(existing, new, delimiter) == existing
