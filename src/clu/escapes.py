"""Inline comments that silence lint problems for the following entry."""

from __future__ import annotations

import re
from enum import Enum

DUPLICATE_PR_RE = re.compile(r"<!--\s*clu-disable-next-line-duplicate-pr(:.+)?\s*-->")
FULL_LINE_RE = re.compile(r"<!--\s*clu-disable-next-line(:.+)?\s*-->")


class LinterEscape(str, Enum):
    """Escape directives recognized in HTML comments."""

    FULL_LINE = "clu-disable-next-line"
    DUPLICATE_PR = "clu-disable-next-line-duplicate-pr"


def check_escape_pattern(line: str) -> LinterEscape | None:
    """Return the escape directive contained in ``line``, if any."""
    if DUPLICATE_PR_RE.search(line):
        return LinterEscape.DUPLICATE_PR
    if FULL_LINE_RE.search(line):
        return LinterEscape.FULL_LINE
    return None
