"""Location-tagged lint problems."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple


class Problem(NamedTuple):
    """A style violation attributed to a file and, optionally, a line.

    ``line`` is the zero-based index of the source line; it is rendered
    one-based.
    """

    path: Path
    line: int | None
    message: str

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line + 1}: {self.message}"


def add_to_problems(
    problems: list[Problem], path: Path, line: int | None, messages: list[str]
) -> None:
    """Append one problem per message, all attributed to the same location."""
    for message in messages:
        problems.append(Problem(path=path, line=line, message=message))
