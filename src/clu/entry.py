"""Entry lines of the form ``- (category) [#N](link) Description.``."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from clu.checks import check_category, check_description, check_link, check_whitespace
from clu.config import Config
from clu.errors import InvalidEntryError

logger = logging.getLogger(__name__)

ENTRY_RE = re.compile(
    r"^(?P<ws0>\s*)-(?P<ws1>\s*)\((?P<category>[a-zA-Z0-9\-]+)\)"
    r"(?P<ws2>\s*)\[(?P<bs>\\)?#(?P<pr>\d+)]"
    r"(?P<ws3>\s*)\((?P<link>[^)]*)\)(?P<ws4>\s*)(?P<desc>.+)$"
)

# Used when categories are not enforced: the category token becomes optional.
ENTRY_OPTIONAL_CATEGORY_RE = re.compile(
    r"^(?P<ws0>\s*)-(?P<ws1>\s*)(?:\((?P<category>[a-zA-Z0-9\-]+)\)(?P<ws2>\s*))?"
    r"\[(?P<bs>\\)?#(?P<pr>\d+)]"
    r"(?P<ws3>\s*)\((?P<link>[^)]*)\)(?P<ws4>\s*)(?P<desc>.+)$"
)

EXPECTED_WHITESPACE = ("", " ", " ", "", " ")
WHITESPACE_PROBLEMS = (
    "There should be no leading whitespace before the dash",
    "There should be exactly one space between the leading dash and the category",
    "There should be exactly one space between the category and the PR link",
    "There should be no whitespace inside of the markdown link",
    "There should be exactly one space between the PR link and the description",
)

EXPECTED_WHITESPACE_NO_CATEGORY = ("", " ", "", " ")
WHITESPACE_PROBLEMS_NO_CATEGORY = (
    "There should be no leading whitespace before the dash",
    "There should be exactly one space between the leading dash and the PR link",
    "There should be no whitespace inside of the markdown link",
    "There should be exactly one space between the PR link and the description",
)

BACKSLASH_PROBLEM = "There should be no backslash in front of the # in the PR link"


@dataclass
class Entry:
    """A single change record tied to one pull request."""

    category: str | None
    pr_number: int
    fixed: str
    problems: list[str] = field(default_factory=list)


def build_fixed(category: str | None, link: str, description: str, pr_number: int) -> str:
    """Return the canonical entry line."""
    if category is None:
        return f"- [#{pr_number}]({link}) {description}"
    return f"- ({category}) [#{pr_number}]({link}) {description}"


def parse(config: Config, line: str) -> Entry:
    """Parse an entry line, raising ``InvalidEntryError`` if it does not match."""
    pattern = ENTRY_RE if config.use_categories else ENTRY_OPTIONAL_CATEGORY_RE
    match = pattern.match(line)
    if match is None:
        raise InvalidEntryError(line)

    category = match.group("category")
    pr_number = int(match.group("pr"))
    problems: list[str] = []

    if category is None:
        gaps = [match.group(name) for name in ("ws0", "ws1", "ws3", "ws4")]
        problems.extend(
            check_whitespace(gaps, EXPECTED_WHITESPACE_NO_CATEGORY, WHITESPACE_PROBLEMS_NO_CATEGORY)
        )
    else:
        gaps = [match.group(name) for name in ("ws0", "ws1", "ws2", "ws3", "ws4")]
        problems.extend(check_whitespace(gaps, EXPECTED_WHITESPACE, WHITESPACE_PROBLEMS))

    if match.group("bs") is not None:
        problems.append(BACKSLASH_PROBLEM)

    fixed_category: str | None = None
    if category is not None:
        fixed_category, category_problems = check_category(config, category)
        problems.extend(category_problems)

    fixed_link, link_problems = check_link(config, match.group("link"), pr_number)
    problems.extend(link_problems)

    fixed_description, description_problems = check_description(config, match.group("desc"))
    problems.extend(description_problems)

    logger.debug("Parsed entry for PR #%d with %d problem(s)", pr_number, len(problems))
    return Entry(
        category=fixed_category,
        pr_number=pr_number,
        fixed=build_fixed(fixed_category, fixed_link, fixed_description, pr_number),
        problems=problems,
    )


def new_entry(config: Config, category: str | None, description: str, pr_number: int) -> Entry:
    """Create an entry from its parts, applying all automatic fixes.

    Problems that cannot be fixed automatically (e.g. an unknown category)
    are kept on the entry.
    """
    if not description.strip():
        raise InvalidEntryError(f"empty description for PR #{pr_number}")

    problems: list[str] = []

    fixed_category: str | None = None
    if category:
        fixed_category, category_problems = check_category(config, category)
        problems.extend(category_problems)

    link = f"{config.target_repo}/pull/{pr_number}"
    fixed_description, description_problems = check_description(config, description.strip())
    problems.extend(description_problems)

    return Entry(
        category=fixed_category,
        pr_number=pr_number,
        fixed=build_fixed(fixed_category, link, fixed_description, pr_number),
        problems=problems,
    )
