"""Text checks shared by the entry parsers.

Every check returns the corrected value together with the list of problems it
found; none of them rejects its input.
"""

from __future__ import annotations

import re
from typing import Sequence

from clu.config import Config

CODE_SPAN_RE = re.compile(r"`[^`]*`")

# A word starts at the beginning of the text, after whitespace or after an
# opening bracket or quote; it ends at the end of the text, at whitespace or
# at punctuation.
_WORD_START = r"(?<![^\s(\[\"'])"
_WORD_END = r"(?![^\s.,;:!?)\]\"'])"


def check_category(config: Config, category: str) -> tuple[str, list[str]]:
    """Check that the category is lower-case and one of the configured ones."""
    problems: list[str] = []
    fixed = category.lower()
    if fixed != category:
        problems.append(f"category should be lowercase: ({category})")

    if fixed not in config.categories:
        problems.append(f"invalid change category: ({category})")

    return fixed, problems


def check_link(config: Config, link: str, pr_number: int) -> tuple[str, list[str]]:
    """Check that the PR link points to the given PR of the target repository."""
    problems: list[str] = []
    fixed = f"{config.target_repo}/pull/{pr_number}"

    if not link.startswith(config.target_repo):
        problems.append(f"PR link points to wrong repository: {link}")

    trailing = link.rstrip("/").rsplit("/", 1)[-1]
    if not trailing.isdecimal() or int(trailing) != pr_number:
        problems.append(f"PR link is not matching PR number {pr_number}: '{link}'")

    return fixed, problems


def check_description(config: Config, description: str) -> tuple[str, list[str]]:
    """Check capitalization, the closing period and the spelling of a description."""
    problems: list[str] = []
    fixed = description

    first = description[0]
    if first.isalpha() and not first.isupper():
        fixed = first.upper() + description[1:]
        problems.append(f"PR description should start with capital letter: '{description}'")

    if not fixed.endswith("."):
        fixed += "."
        problems.append(f"PR description should end with a dot: '{description}'")

    fixed, spelling_problems = check_spelling(config, fixed)
    problems.extend(spelling_problems)

    return fixed, problems


def _word_regex(pattern: str) -> re.Pattern[str]:
    return re.compile(f"{_WORD_START}(?:{pattern}){_WORD_END}", re.IGNORECASE)


def _code_spans(text: str) -> list[tuple[int, int]]:
    return [span.span() for span in CODE_SPAN_RE.finditer(text)]


def _in_code_span(match: re.Match[str], spans: list[tuple[int, int]]) -> bool:
    return any(match.start() < end and match.end() > start for start, end in spans)


def iter_spelling_matches(pattern: str, text: str) -> list[re.Match[str]]:
    """Return the isolated matches of ``pattern`` in ``text``.

    Matches nested inside another word, inside a link target or inside a
    back-tick code span are skipped.
    """
    spans = _code_spans(text)
    return [m for m in _word_regex(pattern).finditer(text) if not _in_code_span(m, spans)]


def get_spelling_match(pattern: str, text: str) -> str | None:
    """Return the literal text of the first isolated match, if there is one."""
    matches = iter_spelling_matches(pattern, text)
    return matches[0].group(0) if matches else None


def check_spelling(config: Config, text: str) -> tuple[str, list[str]]:
    """Replace misspelled words with the configured spelling."""
    fixed = text
    problems: list[str] = []

    for correct, pattern in config.expected_spellings.items():
        wrong = next(
            (m.group(0) for m in iter_spelling_matches(pattern, fixed) if m.group(0) != correct),
            None,
        )
        if wrong is None:
            continue

        spans = _code_spans(fixed)
        fixed = _word_regex(pattern).sub(
            lambda m: m.group(0) if _in_code_span(m, spans) else correct, fixed
        )
        problems.append(f"'{correct}' should be used instead of '{wrong}'")

    return fixed, problems


def check_whitespace(
    gaps: Sequence[str], expected: Sequence[str], messages: Sequence[str]
) -> list[str]:
    """Compare every whitespace gap with its expected value.

    One message is reported per position that deviates.
    """
    return [
        message
        for got, want, message in zip(gaps, expected, messages, strict=True)
        if got != want
    ]
