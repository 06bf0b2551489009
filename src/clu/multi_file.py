"""Directory based changelog with one file per entry.

Layout::

    .changelog/
        unreleased/
            bug-fixes/
                123-fix-the-thing.md
        v1.0.0/
            features/
                99-add-the-thing.md

Each entry file holds a single line ``- (category) Description ([#N](link))``.
Only linting is supported; problems are reported per file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from clu import version
from clu.checks import check_category, check_description, check_link, check_whitespace
from clu.config import Config
from clu.errors import ChangelogNotFoundError, InvalidConfigError, InvalidEntryError, VersionError
from clu.problems import Problem, add_to_problems

logger = logging.getLogger(__name__)

UNRELEASED_DIR = "unreleased"
UNRELEASED_DIR_RE = re.compile(r"^\s*unreleased\s*$", re.IGNORECASE)

EXPECTED_WHITESPACE = ("", " ", " ", " ", "")
WHITESPACE_PROBLEMS = (
    "There should be no leading whitespace before the dash",
    "There should be exactly one space between the leading dash and the category",
    "There should be exactly one space between the category and the description",
    "There should be exactly one space between the description and the PR link",
    "There should be no whitespace inside of the markdown link",
)
FILENAME_PROBLEM = "The filename should be prefixed with the PR number"


def _entry_pattern(use_categories: bool) -> re.Pattern[str]:
    category = r"\((?P<category>[a-zA-Z0-9\-]+)\)" if use_categories else ""
    return re.compile(
        r"^(?P<ws0>\s*)-(?P<ws1>\s*)" + category + r"(?P<ws2>\s*)(?P<desc>.+\S)"
        r"(?P<ws3>\s*)\(\[#(?P<pr>\d+)]"
        r"(?P<ws4>\s*)\((?P<link>[^)]*)\)\)\s*$"
    )


def change_type_dir_name(long_name: str) -> str:
    """Return the directory name used for a change type, e.g. ``bug-fixes``."""
    return long_name.lower().replace(" ", "-")


@dataclass
class MultiFileEntry:
    category: str | None
    fixed: str
    path: Path
    pr_number: int
    problems: list[str] = field(default_factory=list)


@dataclass
class MultiFileChangeType:
    name: str
    path: Path
    problems: list[str] = field(default_factory=list)
    entries: list[MultiFileEntry] = field(default_factory=list)


@dataclass
class MultiFileRelease:
    version: str
    path: Path
    problems: list[str] = field(default_factory=list)
    change_types: list[MultiFileChangeType] = field(default_factory=list)

    def is_unreleased(self) -> bool:
        return self.version == "Unreleased"


@dataclass
class MultiFileChangelog:
    """Parsed contents of a changelog directory."""

    path: Path
    releases: list[MultiFileRelease] = field(default_factory=list)
    problems: list[Problem] = field(default_factory=list)

    def has_problems(self) -> bool:
        return bool(self.problems)

    def get_all_pr_numbers(self) -> list[int]:
        return [
            entry.pr_number
            for release in self.releases
            for change_type in release.change_types
            for entry in change_type.entries
        ]


def build_fixed(category: str | None, link: str, description: str, pr_number: int) -> str:
    if category is None:
        return f"- {description} ([#{pr_number}]({link}))"
    return f"- ({category}) {description} ([#{pr_number}]({link}))"


def parse_entry(config: Config, path: Path) -> MultiFileEntry:
    """Parse one entry file, raising ``InvalidEntryError`` if it does not match."""
    contents = path.read_text(encoding="utf-8")
    match = _entry_pattern(config.use_categories).match(contents)
    if match is None:
        raise InvalidEntryError(contents)

    pr_number = int(match.group("pr"))
    gaps = [match.group(f"ws{i}") for i in range(5)]
    if not config.use_categories:
        # Without a category the dash is followed directly by the description.
        gaps[2] = gaps[1]
        gaps[1] = " "

    problems: list[str] = []
    if not path.name.startswith(str(pr_number)):
        problems.append(FILENAME_PROBLEM)

    fixed_category: str | None = None
    if config.use_categories:
        fixed_category, category_problems = check_category(config, match.group("category"))
        problems.extend(category_problems)

    fixed_link, link_problems = check_link(config, match.group("link"), pr_number)
    problems.extend(link_problems)

    fixed_description, description_problems = check_description(config, match.group("desc"))
    problems.extend(description_problems)

    problems.extend(check_whitespace(gaps, EXPECTED_WHITESPACE, WHITESPACE_PROBLEMS))

    return MultiFileEntry(
        category=fixed_category,
        fixed=build_fixed(fixed_category, fixed_link, fixed_description, pr_number),
        path=path,
        pr_number=pr_number,
        problems=problems,
    )


def parse_change_type(config: Config, directory: Path) -> MultiFileChangeType:
    name = directory.name
    change_type = MultiFileChangeType(name=name, path=directory)

    if not any(change_type_dir_name(ct.long) == name for ct in config.change_types):
        change_type.problems.append(f"invalid change type: {name}")

    for path in sorted(p for p in directory.iterdir() if p.is_file()):
        try:
            change_type.entries.append(parse_entry(config, path))
        except InvalidEntryError:
            change_type.problems.append(f"invalid entry found in file: {path}")

    return change_type


def parse_release(config: Config, directory: Path) -> MultiFileRelease:
    name = directory.name
    if UNRELEASED_DIR_RE.match(name):
        release = MultiFileRelease(version="Unreleased", path=directory)
        if name != UNRELEASED_DIR:
            release.problems.append(
                "Unreleased directory name is wrong; "
                f"expected: '{UNRELEASED_DIR}'; got: '{name}'"
            )
    else:
        release = MultiFileRelease(version=name, path=directory)
        try:
            version.parse(name)
        except VersionError:
            release.problems.append(f"invalid version string: {name}")

    for child in sorted(p for p in directory.iterdir() if p.is_dir()):
        release.change_types.append(parse_change_type(config, child))

    return release


def parse_changelog(config: Config, directory: Path) -> MultiFileChangelog:
    """Parse every release directory and collect the problems in sorted order."""
    if not directory.is_dir():
        raise ChangelogNotFoundError(f"changelog directory not found: {directory}")

    changelog = MultiFileChangelog(path=directory)
    for child in sorted(p for p in directory.iterdir() if p.is_dir()):
        changelog.releases.append(parse_release(config, child))

    problems: list[Problem] = []
    for release in changelog.releases:
        add_to_problems(problems, release.path, None, release.problems)
        for change_type in release.change_types:
            add_to_problems(problems, change_type.path, None, change_type.problems)
            for entry in change_type.entries:
                add_to_problems(problems, entry.path, 0, entry.problems)

    changelog.problems = sorted(problems, key=str)
    logger.debug(
        "Parsed %s: %d release(s), %d problem(s)",
        directory,
        len(changelog.releases),
        len(changelog.problems),
    )
    return changelog


def load(config: Config, directory: Path | None = None) -> MultiFileChangelog:
    """Load the configured changelog directory from the working directory."""
    if directory is not None:
        return parse_changelog(config, directory)

    if not config.changelog_dir:
        raise InvalidConfigError("changelog_dir must be set in multi file mode")

    base = Path.cwd()
    wanted = config.changelog_dir.lower()
    for child in sorted(base.iterdir()):
        if child.is_dir() and child.name.lower() == wanted:
            return parse_changelog(config, child)

    raise ChangelogNotFoundError(f"could not find the changelog directory: {config.changelog_dir}")
