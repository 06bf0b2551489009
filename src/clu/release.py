"""Release headers: ``## Unreleased`` or ``## [vX.Y.Z](link) - YYYY-MM-DD``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from clu import version
from clu.change_type import ChangeType
from clu.config import Config
from clu.errors import ReleaseParseError

UNRELEASED = "Unreleased"
UNRELEASED_HEADER = "## Unreleased"

UNRELEASED_RE = re.compile(r"^\s*##\s*unreleased\s*$", re.IGNORECASE)
RELEASE_RE = re.compile(
    r"^\s*##\s*\[(?P<version>v\d+\.\d+\.\d+(?:-rc\d+)?)]"
    r"(?P<link>\(.*\))?\s*-\s*(?P<date>\d{4}-\d{2}-\d{2})$",
    re.IGNORECASE,
)


@dataclass
class Release:
    """One version section of the changelog.

    ``notes`` holds lines kept verbatim between the header and the first
    change type.
    """

    version: str
    line: str
    fixed: str
    change_types: list[ChangeType] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def is_unreleased(self) -> bool:
        return self.version == UNRELEASED

    def is_legacy(self, config: Config) -> bool:
        """Return whether the release is at or below the configured legacy version.

        Unreleased is never legacy, and nothing is legacy without a configured
        legacy version.
        """
        if self.is_unreleased() or config.legacy_version is None:
            return False

        legacy = version.parse(config.legacy_version)
        return not version.parse(self.version).gt(legacy)

    def get_change_type(self, name: str) -> ChangeType | None:
        return next((ct for ct in self.change_types if ct.name == name), None)

    def get_fixed_contents(self) -> str:
        contents = self.fixed + "\n"
        if self.notes:
            contents += "\n" + "".join(f"{note}\n" for note in self.notes)
        for change_type in self.change_types:
            contents += "\n" + change_type.get_fixed_contents()
        return contents


def new_unreleased() -> Release:
    """Return an empty Unreleased section."""
    return Release(version=UNRELEASED, line=UNRELEASED_HEADER, fixed=UNRELEASED_HEADER)


def release_link(config: Config, label: str) -> str:
    return f"{config.target_repo}/releases/tag/{label}"


def release_header(config: Config, label: str, date: str) -> str:
    return f"## [{label}]({release_link(config, label)}) - {date}"


def check_link(config: Config, link: str, label: str) -> tuple[str, list[str]]:
    """Check that the release link points to the GitHub release of ``label``."""
    fixed = release_link(config, label)

    if not link:
        return fixed, [f"Release link is missing for version {label}"]

    if link != fixed:
        return fixed, [
            f"Release link should point to the GitHub release for {label}; "
            f"expected: '{fixed}'; got: '{link}'"
        ]

    return fixed, []


def _check_unreleased(line: str) -> Release | None:
    if UNRELEASED_RE.match(line) is None:
        return None

    release = new_unreleased()
    release.line = line
    if line != UNRELEASED_HEADER:
        release.problems.append(
            f"Unreleased header is malformed; expected: '{UNRELEASED_HEADER}'; got: '{line}'"
        )
    return release


def parse(config: Config, line: str) -> Release:
    """Parse a release header, raising ``ReleaseParseError`` if it does not match."""
    unreleased = _check_unreleased(line)
    if unreleased is not None:
        return unreleased

    match = RELEASE_RE.match(line)
    if match is None:
        raise ReleaseParseError(f"no release pattern found in line: {line}")

    raw_label = match.group("version")
    label = str(version.parse(raw_label))
    raw_link = match.group("link")
    # strip the surrounding brackets: "(link)" -> "link"
    link = raw_link[1:-1] if raw_link else ""
    fixed_link, problems = check_link(config, link, label)
    if raw_label != label:
        problems.insert(0, f"Version label should be written as '{label}'; got: '{raw_label}'")

    return Release(
        version=label,
        line=line,
        fixed=f"## [{label}]({fixed_link}) - {match.group('date')}",
        problems=problems,
    )


def new_release(config: Config, label: str, date: str) -> Release:
    """Return an empty dated release with a canonical header."""
    header = release_header(config, label, date)
    return Release(version=label, line=header, fixed=header)
