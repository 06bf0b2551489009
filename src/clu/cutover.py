"""Turn the Unreleased section into a dated release."""

from __future__ import annotations

import datetime
import logging

from clu import release as release_mod
from clu import version as version_mod
from clu.changelog import Changelog
from clu.config import Config
from clu.errors import DuplicateVersionError, NoUnreleasedError, ReleaseParseError
from clu.release import Release

logger = logging.getLogger(__name__)


def _check_date(value: str) -> str:
    try:
        return datetime.date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise ReleaseParseError(f"release date should be formatted as YYYY-MM-DD: {value}") from exc


def cut_release(
    config: Config, changelog: Changelog, version: str, date: str | None = None
) -> Release:
    """Replace the Unreleased section with a release of ``version``.

    The release is dated ``date`` or today; the change types, entries and
    notes of the Unreleased section move over unchanged.
    """
    label = str(version_mod.parse(version))

    if changelog.get_release(label) is not None:
        raise DuplicateVersionError(f"version {label} already exists in the changelog")

    unreleased = changelog.get_unreleased()
    if unreleased is None:
        raise NoUnreleasedError("no Unreleased section found in the changelog")

    release_date = _check_date(date) if date else datetime.date.today().isoformat()
    release = release_mod.new_release(config, label, release_date)
    release.change_types = unreleased.change_types
    release.notes = unreleased.notes

    changelog.releases[changelog.releases.index(unreleased)] = release
    logger.info("Released %s on %s", label, release_date)
    return release
