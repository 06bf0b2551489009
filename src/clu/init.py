"""Set up the changelog tooling in a project folder."""

from __future__ import annotations

import logging
from pathlib import Path

from clu.changelog import settings_from_existing_changelog
from clu.config import CONFIG_FILE_NAME, Config, default_config
from clu.errors import ConfigAlreadyFoundError

logger = logging.getLogger(__name__)

CHANGELOG_FILE_NAME = "CHANGELOG.md"


def create_empty_changelog() -> str:
    """Return the skeleton written when a project has no changelog yet."""
    return "\n".join(
        [
            "<!--",
            "This changelog was created using the `clu` binary",
            "(https://github.com/MalteHerrmann/changelog-utils).",
            "-->",
            "",
            "# Changelog",
            "",
            "## Unreleased",
            "",
        ]
    )


def init_in_folder(target: Path) -> Config:
    """Write a default configuration into ``target``.

    An existing ``CHANGELOG.md`` is used to derive the categories and change
    types; otherwise an empty changelog is created next to the configuration.
    """
    config_path = target / CONFIG_FILE_NAME
    if config_path.exists():
        raise ConfigAlreadyFoundError(f"configuration already exists: {config_path}")

    config = default_config()
    changelog_path = target / CHANGELOG_FILE_NAME

    if changelog_path.is_file():
        logger.info("Deriving settings from %s", changelog_path)
        settings_from_existing_changelog(config, changelog_path.read_text(encoding="utf-8"))
    else:
        changelog_path.write_text(create_empty_changelog(), encoding="utf-8")
        logger.info("Created empty changelog at %s", changelog_path)

    config.export(config_path)
    return config
