"""
L1 Domain — Interpretation of interactive answers (pure).
"""

from __future__ import annotations

import re

# "y" or "yes", any letter case
_YES_RE = re.compile(r"([yY][eE][sS]|[yY])")


def is_yes(answer: str | None) -> bool:
    """True only for ``y`` / ``yes`` in any letter case.

    Leading and trailing whitespace is ignored, as a terminal ``read``
    trims it. Empty input, ``n``, ``yep`` and ``yes please`` count as no.
    """
    if answer is None:
        return False
    return bool(_YES_RE.fullmatch(answer.strip()))
