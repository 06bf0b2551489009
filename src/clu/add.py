"""Add a new entry to the Unreleased section."""

from __future__ import annotations

import logging

from clu import change_type as change_type_mod
from clu import release as release_mod
from clu.changelog import Changelog
from clu.config import Config
from clu.entry import Entry, new_entry
from clu.errors import NotFoundError
from clu.release import Release

logger = logging.getLogger(__name__)


def resolve_change_type(config: Config, value: str) -> str:
    """Return the long change type name for a short code or long name."""
    by_short = config.get_short_change_type(value)
    if by_short is not None:
        return by_short.long

    for change_type in config.change_types:
        if change_type.long.lower() == value.lower():
            return change_type.long

    raise NotFoundError(f"change type not found: {value}")


def _get_or_create_unreleased(changelog: Changelog) -> Release:
    unreleased = changelog.get_unreleased()
    if unreleased is None:
        unreleased = release_mod.new_unreleased()
        changelog.releases.insert(0, unreleased)
    return unreleased


def add_entry(
    config: Config,
    changelog: Changelog,
    change_type: str,
    category: str | None,
    description: str,
    pr_number: int,
) -> Entry:
    """Insert a new entry at the top of its change type in the Unreleased section.

    Missing sections are created: the Unreleased release at the top of the
    changelog, and the change type at the end of the release.
    """
    name = resolve_change_type(config, change_type)
    entry = new_entry(config, category, description, pr_number)
    unreleased = _get_or_create_unreleased(changelog)

    section = unreleased.get_change_type(name)
    if section is None:
        unreleased.change_types.append(change_type_mod.new(name, [entry]))
    else:
        section.items.insert(0, entry)

    if entry.problems:
        logger.warning("New entry for PR #%d has problems: %s", pr_number, "; ".join(entry.problems))
    logger.info("Added entry for PR #%d to %s", pr_number, name)
    return entry
