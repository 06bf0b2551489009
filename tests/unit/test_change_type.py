"""Unit tests for change type header parsing."""

from __future__ import annotations

import pytest

from clu import change_type
from clu.config import Config
from clu.errors import ChangeTypeParseError


def test_parse_valid_change_type(example_config: Config) -> None:
    parsed = change_type.parse(example_config, "### Bug Fixes")
    assert parsed.name == "Bug Fixes"
    assert parsed.fixed == "### Bug Fixes"
    assert parsed.problems == []


def test_parse_wrong_spelling(example_config: Config) -> None:
    parsed = change_type.parse(example_config, "### bugfixes")
    assert parsed.name == "Bug Fixes"
    assert parsed.fixed == "### Bug Fixes"
    assert parsed.problems == ["'Bug Fixes' should be used instead of 'bugfixes'"]


def test_parse_malformed_line(example_config: Config) -> None:
    parsed = change_type.parse(example_config, "###   Features ")
    assert parsed.name == "Features"
    assert parsed.problems == ["Change type line is malformed; should be: '### Features'"]


def test_parse_unknown_change_type(example_config: Config) -> None:
    parsed = change_type.parse(example_config, "### Documentation")
    assert parsed.name == "Documentation"
    assert parsed.fixed == "### Documentation"
    assert parsed.problems == ["'Documentation' is not a valid change type"]


def test_parse_does_not_match_partial_name(example_config: Config) -> None:
    parsed = change_type.parse(example_config, "### Features and more")
    assert parsed.problems == ["'Features and more' is not a valid change type"]


def test_parse_invalid_line(example_config: Config) -> None:
    with pytest.raises(ChangeTypeParseError):
        change_type.parse(example_config, "### Bug Fixes!")


def test_get_fixed_contents(example_config: Config) -> None:
    section = change_type.new("Features")
    section.items.extend(["- first", "- second"])
    assert section.get_fixed_contents() == "### Features\n\n- first\n- second\n"
    assert section.entries == []
