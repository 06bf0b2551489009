"""Lint the configured changelog in single or multi file mode."""

from __future__ import annotations

import logging
from pathlib import Path

from clu import changelog as single_file
from clu import multi_file
from clu.changelog import Changelog
from clu.config import Config, Mode
from clu.multi_file import MultiFileChangelog

logger = logging.getLogger(__name__)


def lint(config: Config, path: Path | None = None) -> Changelog | MultiFileChangelog:
    """Parse the changelog and return it together with its problems.

    ``path`` overrides the configured changelog file or directory.
    """
    if config.mode is Mode.MULTI:
        changelog: Changelog | MultiFileChangelog = multi_file.load(config, path)
    else:
        changelog = single_file.load(config, path)

    logger.info("Found %d problem(s) in %s", len(changelog.problems), changelog.path)
    return changelog
