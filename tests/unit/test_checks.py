"""Unit tests for the shared entry checks."""

from __future__ import annotations

from clu.checks import (
    check_category,
    check_description,
    check_link,
    check_spelling,
    check_whitespace,
    get_spelling_match,
)
from clu.config import Config

REPO = "https://github.com/MalteHerrmann/changelog-utils"


def test_check_category_passes(example_config: Config) -> None:
    assert check_category(example_config, "cli") == ("cli", [])


def test_check_category_invalid(example_config: Config) -> None:
    fixed, problems = check_category(example_config, "invalid")
    assert fixed == "invalid"
    assert problems == ["invalid change category: (invalid)"]


def test_check_category_not_lowercase(example_config: Config) -> None:
    fixed, problems = check_category(example_config, "cLi")
    assert fixed == "cli"
    assert problems == ["category should be lowercase: (cLi)"]


def test_check_link_passes(example_config: Config) -> None:
    link = f"{REPO}/pull/1"
    assert check_link(example_config, link, 1) == (link, [])


def test_check_link_wrong_repository(example_config: Config) -> None:
    link = "https://github.com/MalteHerrmann/changelg-utils/pull/1"
    fixed, problems = check_link(example_config, link, 1)
    assert fixed == f"{REPO}/pull/1"
    assert problems == [f"PR link points to wrong repository: {link}"]


def test_check_link_wrong_pr_number(example_config: Config) -> None:
    link = f"{REPO}/pull/2"
    fixed, problems = check_link(example_config, link, 1)
    assert fixed == f"{REPO}/pull/1"
    assert problems == [f"PR link is not matching PR number 1: '{link}'"]


def test_check_link_non_numeric_trailing_segment(example_config: Config) -> None:
    link = f"{REPO}/pull/abc"
    _, problems = check_link(example_config, link, 1)
    assert problems == [f"PR link is not matching PR number 1: '{link}'"]


def test_check_link_non_decimal_digit(example_config: Config) -> None:
    link = f"{REPO}/pull/²"
    fixed, problems = check_link(example_config, link, 2)
    assert fixed == f"{REPO}/pull/2"
    assert problems == [f"PR link is not matching PR number 2: '{link}'"]


def test_check_description_passes(example_config: Config) -> None:
    example = "Add Python implementation."
    assert check_description(example_config, example) == (example, [])


def test_check_description_allows_leading_code_span(example_config: Config) -> None:
    example = "`add` method implemented."
    assert check_description(example_config, example) == (example, [])


def test_check_description_capitalizes(example_config: Config) -> None:
    fixed, problems = check_description(example_config, "add Python implementation.")
    assert fixed == "Add Python implementation."
    assert problems == [
        "PR description should start with capital letter: 'add Python implementation.'"
    ]


def test_check_description_adds_dot(example_config: Config) -> None:
    fixed, problems = check_description(example_config, "Add Python implementation")
    assert fixed == "Add Python implementation."
    assert problems == ["PR description should end with a dot: 'Add Python implementation'"]


def test_check_description_reports_every_step(example_config: Config) -> None:
    fixed, problems = check_description(example_config, "fix aPi")
    assert fixed == "Fix API."
    assert problems == [
        "PR description should start with capital letter: 'fix aPi'",
        "PR description should end with a dot: 'fix aPi'",
        "'API' should be used instead of 'aPi'",
    ]


def test_check_spelling_passes() -> None:
    config = Config(expected_spellings={"API": "api"})
    assert check_spelling(config, "Fix API.") == ("Fix API.", [])


def test_check_spelling_wrong_spelling(example_config: Config) -> None:
    fixed, problems = check_spelling(example_config, "Fix web--SdK.")
    assert fixed == "Fix Web-SDK."
    assert problems == ["'Web-SDK' should be used instead of 'web--SdK'"]


def test_check_spelling_multiple_problems(example_config: Config) -> None:
    fixed, problems = check_spelling(example_config, "Fix aPi and ClI.")
    assert fixed == "Fix API and CLI."
    assert problems == [
        "'API' should be used instead of 'aPi'",
        "'CLI' should be used instead of 'ClI'",
    ]


def test_check_spelling_replaces_all_occurrences(example_config: Config) -> None:
    fixed, problems = check_spelling(example_config, "Use api, not `api` or (Api).")
    assert fixed == "Use API, not `api` or (API)."
    assert problems == ["'API' should be used instead of 'api'"]


def test_check_spelling_ignores_code_spans(example_config: Config) -> None:
    example = "Fix `ApI in codeblocks`."
    assert check_spelling(example_config, example) == (example, [])


def test_check_spelling_ignores_nested_words(example_config: Config) -> None:
    example = "FixApI in another word."
    assert check_spelling(example_config, example) == (example, [])


def test_check_spelling_ignores_links(example_config: Config) -> None:
    example = "See https://example.com/api/docs for details."
    assert check_spelling(example_config, example) == (example, [])


def test_check_spelling_with_special_characters() -> None:
    config = Config(expected_spellings={"$USDN": r"\$*usdn"})
    _, problems = check_spelling(
        config, "Enable the issuance of Noble's stablecoin $UsDN."
    )
    assert problems == ["'$USDN' should be used instead of '$UsDN'"]


def test_get_spelling_match() -> None:
    assert get_spelling_match("api", "Fix API.") == "API"
    assert get_spelling_match("api", "Fix aPi.") == "aPi"
    assert get_spelling_match("api", "Fix `aPi in codeblocks`.") is None
    assert get_spelling_match("api", "FixApI") is None


def test_check_whitespace() -> None:
    expected = ("", " ", " ")
    messages = ("no leading", "one after dash", "one after category")
    assert check_whitespace(["", " ", " "], expected, messages) == []
    assert check_whitespace([" ", "  ", " "], expected, messages) == [
        "no leading",
        "one after dash",
    ]
