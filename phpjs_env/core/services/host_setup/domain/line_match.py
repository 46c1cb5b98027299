"""
L1 Domain — Literal line presence checks (pure).

Both checks are textual. A line that is present with different spacing
or quoting counts as absent and will be appended again.
"""

from __future__ import annotations


def contains_literal(content: str, needle: str) -> bool:
    """Substring search anywhere in the file."""
    return needle in content


def has_line_prefix(content: str, prefix: str) -> bool:
    """Some line starts with ``prefix``."""
    return any(line.startswith(prefix) for line in content.splitlines())


def line_present(content: str, line: str, *, anchored: bool = False) -> bool:
    """Dispatch to the anchored or unanchored check."""
    if anchored:
        return has_line_prefix(content, line)
    return contains_literal(content, line)
