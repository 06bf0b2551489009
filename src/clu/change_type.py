"""Change type headers such as ``### Bug Fixes``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from clu.config import Config
from clu.entry import Entry
from clu.errors import ChangeTypeParseError

CHANGE_TYPE_RE = re.compile(r"^\s*###\s*(?P<name>[a-zA-Z0-9\- ]+?)\s*$")


@dataclass
class ChangeType:
    """A named section of a release holding its entries.

    ``items`` keeps parsed entries together with lines preserved verbatim
    (comments and lines that could not be parsed) in document order.
    """

    name: str
    fixed: str
    problems: list[str] = field(default_factory=list)
    items: list[Entry | str] = field(default_factory=list)

    @property
    def entries(self) -> list[Entry]:
        return [item for item in self.items if isinstance(item, Entry)]

    def get_fixed_contents(self) -> str:
        lines = [self.fixed, ""]
        lines.extend(item.fixed if isinstance(item, Entry) else item for item in self.items)
        return "\n".join(lines) + "\n"


def new(name: str, entries: list[Entry] | None = None) -> ChangeType:
    """Create a change type section with the given entries."""
    return ChangeType(name=name, fixed=f"### {name}", items=list(entries or []))


def _name_pattern(long_name: str) -> re.Pattern[str]:
    # Whitespace in the configured name may be missing or repeated in the header.
    parts = [re.escape(part) for part in long_name.split()]
    return re.compile(r"^\s*" + r"\s*".join(parts) + r"\s*$", re.IGNORECASE)


def parse(config: Config, line: str) -> ChangeType:
    """Parse a change type header, raising ``ChangeTypeParseError`` if it does not match."""
    match = CHANGE_TYPE_RE.match(line)
    if match is None:
        raise ChangeTypeParseError(f"no change type found in line: {line}")

    name = match.group("name")
    fixed_name = name
    problems: list[str] = []

    for change_type in config.change_types:
        if not _name_pattern(change_type.long).match(name):
            continue
        if name != change_type.long:
            problems.append(f"'{change_type.long}' should be used instead of '{name}'")
            fixed_name = change_type.long
        break
    else:
        problems.append(f"'{name}' is not a valid change type")

    fixed = f"### {fixed_name}"
    if f"### {name}" != line:
        problems.append(f"Change type line is malformed; should be: '{fixed}'")

    return ChangeType(name=fixed_name, fixed=fixed, problems=problems)
