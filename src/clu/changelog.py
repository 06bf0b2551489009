"""Single file changelog: line-by-line assembly and canonical rendering.

The document is scanned once from top to bottom. Each line is classified and
dispatched to the parser for its construct; the scan keeps an explicit
``ScanState`` with the seen releases, change types and PR numbers, the pending
escape directive and the index of the release and change type currently being
filled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from clu import change_type as change_type_mod
from clu import entry as entry_mod
from clu import release as release_mod
from clu.change_type import ChangeType
from clu.config import ChangeTypeConfig, Config
from clu.errors import (
    ChangelogNotFoundError,
    ChangeTypeParseError,
    InvalidChangelogError,
    InvalidEntryError,
    ReleaseParseError,
)
from clu.escapes import LinterEscape, check_escape_pattern
from clu.problems import Problem, add_to_problems
from clu.release import Release

logger = logging.getLogger(__name__)

TITLE = "# Changelog"
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"


class ScanMode(Enum):
    NORMAL = "normal"
    IN_COMMENT = "in_comment"
    LEGACY = "legacy"


class LineKind(Enum):
    COMMENT = "comment"
    RELEASE = "release"
    CHANGE_TYPE = "change_type"
    ENTRY = "entry"
    BLANK = "blank"
    TEXT = "text"


def classify_line(line: str) -> LineKind:
    """Classify a line outside of a comment block by its leading token."""
    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK
    if COMMENT_OPEN in stripped:
        return LineKind.COMMENT
    if stripped.startswith("## "):
        return LineKind.RELEASE
    if stripped.startswith("### "):
        return LineKind.CHANGE_TYPE
    if stripped.startswith("-"):
        return LineKind.ENTRY
    return LineKind.TEXT


@dataclass
class ScanState:
    """Accumulated state of one document scan."""

    mode: ScanMode = ScanMode.NORMAL
    seen_releases: set[str] = field(default_factory=set)
    seen_change_types: set[str] = field(default_factory=set)
    seen_prs: set[int] = field(default_factory=set)
    escape: LinterEscape | None = None
    release_idx: int | None = None
    change_type_idx: int | None = None

    def take_escape(self) -> LinterEscape | None:
        """Return the pending escape directive and clear it."""
        escape, self.escape = self.escape, None
        return escape


@dataclass
class Changelog:
    """Parsed contents of a changelog file."""

    path: Path
    comments: list[str] = field(default_factory=list)
    preamble: list[str] = field(default_factory=list)
    releases: list[Release] = field(default_factory=list)
    problems: list[Problem] = field(default_factory=list)
    legacy_contents: list[str] = field(default_factory=list)

    def has_problems(self) -> bool:
        return bool(self.problems)

    def get_unreleased(self) -> Release | None:
        return next((r for r in self.releases if r.is_unreleased()), None)

    def get_release(self, version: str) -> Release | None:
        return next((r for r in self.releases if r.version == version), None)

    def get_all_pr_numbers(self) -> list[int]:
        return [
            entry.pr_number
            for release in self.releases
            for change_type in release.change_types
            for entry in change_type.entries
        ]

    def get_fixed_contents(self) -> str:
        """Return the canonical rendering of the changelog."""
        contents = "".join(f"{comment}\n" for comment in self.comments)
        if self.comments:
            contents += "\n"
        contents += f"{TITLE}\n"
        if self.preamble:
            contents += "\n" + "".join(f"{line}\n" for line in self.preamble)
        for release in self.releases:
            contents += "\n" + release.get_fixed_contents()
        contents += "".join(f"{line}\n" for line in self.legacy_contents)
        return contents

    def write(self, export_path: Path | None = None) -> None:
        """Write the canonical rendering, by default back to the parsed file."""
        target = export_path or self.path
        target.write_text(self.get_fixed_contents(), encoding="utf-8")
        logger.info("Wrote changelog to %s", target)


class ChangelogParser:
    """Folds the lines of one document into a ``Changelog``."""

    def __init__(self, config: Config, path: Path) -> None:
        self.config = config
        self.state = ScanState()
        self.changelog = Changelog(path=path)

    @property
    def current_release(self) -> Release | None:
        if self.state.release_idx is None:
            return None
        return self.changelog.releases[self.state.release_idx]

    @property
    def current_change_type(self) -> ChangeType | None:
        release = self.current_release
        if release is None or self.state.change_type_idx is None:
            return None
        return release.change_types[self.state.change_type_idx]

    def _report(self, index: int, messages: list[str]) -> None:
        add_to_problems(self.changelog.problems, self.changelog.path, index, messages)

    def _fail(self, index: int, reason: str) -> InvalidChangelogError:
        return InvalidChangelogError(path=self.changelog.path, line=index, reason=reason)

    def _keep_verbatim(self, line: str) -> None:
        """Keep a line that is not validated at its place in the document."""
        change_type = self.current_change_type
        if change_type is not None:
            change_type.items.append(line)
            return

        release = self.current_release
        if release is not None:
            release.notes.append(line)
        elif line.strip() != TITLE:
            self.changelog.preamble.append(line)

    def feed(self, index: int, line: str) -> None:
        """Process one line of the document."""
        if self.state.mode is ScanMode.LEGACY:
            self.changelog.legacy_contents.append(line)
            return

        if self.state.mode is ScanMode.IN_COMMENT:
            self._handle_comment(line)
            return

        kind = classify_line(line)
        if kind is LineKind.COMMENT:
            self._handle_comment(line)
        elif kind is LineKind.RELEASE:
            self._handle_release(index, line)
        elif kind is LineKind.CHANGE_TYPE:
            self._handle_change_type(index, line)
        elif kind is LineKind.ENTRY and self.current_release is not None:
            self._handle_entry(index, line)
        elif kind is not LineKind.BLANK:
            self._keep_verbatim(line)

    def _handle_comment(self, line: str) -> None:
        stripped = line.strip()
        if self.current_release is None:
            self.changelog.comments.append(line)
        else:
            self._keep_verbatim(line)

        if COMMENT_CLOSE not in stripped:
            self.state.mode = ScanMode.IN_COMMENT
            return

        self.state.mode = ScanMode.NORMAL
        escape = check_escape_pattern(stripped)
        if escape is not None:
            self.state.escape = escape

    def _handle_release(self, index: int, line: str) -> None:
        try:
            release = release_mod.parse(self.config, line)
        except ReleaseParseError as exc:
            raise self._fail(index, f"invalid release header: {line}") from exc

        state = self.state
        self.changelog.releases.append(release)
        state.release_idx = len(self.changelog.releases) - 1
        state.change_type_idx = None
        state.seen_change_types = set()
        state.escape = None

        if release.version in state.seen_releases:
            self._report(index, [f"duplicate release: {release.version}"])
        else:
            state.seen_releases.add(release.version)

        if release.is_unreleased() and state.release_idx != 0:
            self._report(index, ["Unreleased section should be the first release"])

        self._report(index, release.problems)

        if release.is_legacy(self.config):
            logger.debug("Release %s is legacy; archiving the rest verbatim", release.version)
            state.mode = ScanMode.LEGACY

    def _handle_change_type(self, index: int, line: str) -> None:
        release = self.current_release
        if release is None:
            raise self._fail(index, f"change type found outside of a release: {line.strip()}")

        try:
            change_type = change_type_mod.parse(self.config, line)
        except ChangeTypeParseError as exc:
            raise self._fail(index, f"invalid change type header: {line}") from exc

        state = self.state
        state.escape = None
        if change_type.name in state.seen_change_types:
            self._report(
                index,
                [f"duplicate change type in release {release.version}: {change_type.name}"],
            )
        else:
            state.seen_change_types.add(change_type.name)

        self._report(index, change_type.problems)

        release.change_types.append(change_type)
        state.change_type_idx = len(release.change_types) - 1

    def _handle_entry(self, index: int, line: str) -> None:
        state = self.state
        escape = state.take_escape()

        change_type = self.current_change_type
        if change_type is None:
            if escape is not LinterEscape.FULL_LINE:
                self._report(index, [f"entry found outside of a change type: {line.strip()}"])
            self._keep_verbatim(line)
            return

        try:
            entry = entry_mod.parse(self.config, line)
        except InvalidEntryError as exc:
            if escape is not LinterEscape.FULL_LINE:
                self._report(index, [str(exc)])
            change_type.items.append(line)
            return

        if entry.pr_number in state.seen_prs and escape is None:
            self._report(index, [f"duplicate PR: #{entry.pr_number}"])
        state.seen_prs.add(entry.pr_number)

        if escape is not LinterEscape.FULL_LINE:
            self._report(index, entry.problems)

        change_type.items.append(entry)

    def finish(self) -> Changelog:
        return self.changelog


def parse_text(config: Config, contents: str, path: Path) -> Changelog:
    """Parse changelog contents; ``path`` is only used to attribute problems."""
    parser = ChangelogParser(config, path)
    for index, line in enumerate(contents.splitlines()):
        parser.feed(index, line)

    changelog = parser.finish()
    logger.debug(
        "Parsed %s: %d release(s), %d problem(s)",
        path,
        len(changelog.releases),
        len(changelog.problems),
    )
    return changelog


def parse_changelog(config: Config, path: Path) -> Changelog:
    """Read and parse the changelog file at ``path``."""
    try:
        contents = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise ChangelogNotFoundError(f"changelog not found: {path}") from exc
    return parse_text(config, contents, path)


def find_changelog(config: Config, directory: Path | None = None) -> Path:
    """Locate the configured changelog file, ignoring the case of its name."""
    base = directory or Path.cwd()
    candidate = base / config.changelog_path
    if candidate.is_file():
        return candidate

    parent = candidate.parent
    if parent.is_dir():
        wanted = candidate.name.lower()
        for child in sorted(parent.iterdir()):
            if child.is_file() and child.name.lower() == wanted:
                return child

    raise ChangelogNotFoundError(f"could not find the changelog: {candidate}")


def load(config: Config, path: Path | None = None) -> Changelog:
    """Load the changelog at ``path`` or the configured one in the working directory."""
    return parse_changelog(config, path or find_changelog(config))


def settings_from_existing_changelog(config: Config, contents: str) -> None:
    """Derive categories and change types from an existing changelog.

    Lines that cannot be parsed are skipped; the goal is only to extract what
    information is available.
    """
    seen_change_types: list[str] = []
    seen_categories: list[str] = []

    for line in contents.splitlines():
        kind = classify_line(line)
        if kind is LineKind.CHANGE_TYPE:
            try:
                name = change_type_mod.parse(config, line).name
            except ChangeTypeParseError:
                continue
            if name not in seen_change_types:
                seen_change_types.append(name)
        elif kind is LineKind.ENTRY:
            try:
                category = entry_mod.parse(config, line).category
            except InvalidEntryError:
                continue
            if category is not None and category not in seen_categories:
                seen_categories.append(category)

    config.categories = sorted(seen_categories)
    config.change_types = [
        ChangeTypeConfig(short=name[:4].strip().lower(), long=name) for name in seen_change_types
    ]
