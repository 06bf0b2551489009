"""Look up the notes of a single release."""

from __future__ import annotations

from clu.changelog import Changelog
from clu.errors import VersionNotFoundError
from clu.release import Release


def get_release(changelog: Changelog, version: str) -> Release:
    """Return the release with the given version label.

    The label is matched case-insensitively, so ``unreleased`` finds the
    Unreleased section.
    """
    wanted = version.lower()
    for release in changelog.releases:
        if release.version.lower() == wanted:
            return release
    raise VersionNotFoundError(f"version {version} not found in changelog")


def render_release(release: Release) -> str:
    """Return the canonical text of one release, without trailing blank lines."""
    return release.get_fixed_contents().rstrip("\n") + "\n"
