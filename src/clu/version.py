"""Release version labels of the form ``vMAJOR.MINOR.PATCH[-rcN]``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from clu.errors import VersionError

VERSION_RE = re.compile(
    r"^v(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?:-rc(?P<rc>\d+))?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class Version:
    """Parsed semantic version with an optional release candidate number."""

    major: int
    minor: int
    patch: int
    rc: int | None = None

    def __str__(self) -> str:
        label = f"v{self.major}.{self.minor}.{self.patch}"
        if self.rc is not None:
            label += f"-rc{self.rc}"
        return label

    def gt(self, other: Version) -> bool:
        """Return whether this version is strictly higher than ``other``.

        A final release ranks above any release candidate of the same
        major/minor/patch triple.
        """
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        if mine != theirs:
            return mine > theirs

        if self.rc is None:
            return other.rc is not None
        if other.rc is None:
            return False
        return self.rc > other.rc


def parse(label: str) -> Version:
    """Parse a version label, raising ``VersionError`` when it is malformed."""
    match = VERSION_RE.match(label)
    if match is None:
        raise VersionError(f"version does not follow semantic versioning: {label!r}")

    rc = match.group("rc")
    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        rc=int(rc) if rc is not None else None,
    )
