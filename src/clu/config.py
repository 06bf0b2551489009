"""Changelog configuration stored in ``.clconfig.json``.

The configuration is validated in two passes: the raw JSON against the bundled
JSON schema (structure), then the pydantic model (semantics such as regular
expression patterns and version labels).
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate as jsonschema_validate
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from clu import version
from clu.errors import (
    AlreadyExistsError,
    ConfigNotFoundError,
    InvalidConfigError,
    NoGitHubRepositoryError,
    NotFoundError,
    VersionError,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".clconfig.json"
ASSETS_PACKAGE = "clu.assets"

_CONFIG_SCHEMA = json.loads(
    resources.files(ASSETS_PACKAGE).joinpath("config.schema.json").read_text(encoding="utf-8")
)


class Mode(str, Enum):
    """Whether the changelog is one file or a directory of entry files."""

    SINGLE = "single"
    MULTI = "multi"


class ChangeTypeConfig(BaseModel):
    """A change type with its long (header) name and short code.

    Example: ``short="imp"``, ``long="Improvements"``.
    """

    short: str = Field(..., description="Short code used on the command line")
    long: str = Field(..., description="Canonical name used in section headers")


class Config(BaseModel):
    """House style rules applied to the changelog."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    categories: list[str] = Field(
        default_factory=list, description="Allowed lower-case entry categories"
    )
    change_types: list[ChangeTypeConfig] = Field(
        default_factory=list, description="Allowed change types, in preferred order"
    )
    commit_message: str = Field(
        default="add changelog entry", description="Commit message for new entries"
    )
    changelog_path: str = Field(
        default="CHANGELOG.md", description="Relative path of the changelog file"
    )
    changelog_dir: str | None = Field(
        default=None, description="Directory holding entry files in multi mode"
    )
    expected_spellings: dict[str, str] = Field(
        default_factory=dict,
        description="Correct spelling mapped to a case-insensitive pattern of misspellings",
    )
    legacy_version: str | None = Field(
        default=None, description="Releases up to this version are not validated"
    )
    mode: Mode = Field(default=Mode.SINGLE, description="Single file or multi file changelog")
    target_repo: str = Field(
        default="", description="Repository base URL enforced in PR and release links"
    )
    use_categories: bool = Field(
        default=True, description="Whether entries must carry a category"
    )

    @field_validator("expected_spellings")
    @classmethod
    def _check_spelling_patterns(cls, value: dict[str, str]) -> dict[str, str]:
        for correct, pattern in value.items():
            try:
                re.compile(pattern, re.IGNORECASE)
            except re.error as exc:
                raise ValueError(f"invalid spelling pattern for {correct!r}: {exc}") from exc
        return value

    @field_validator("legacy_version")
    @classmethod
    def _check_legacy_version(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                version.parse(value)
            except VersionError as exc:
                raise ValueError(str(exc)) from exc
        return value

    def has_legacy_version(self) -> bool:
        return self.legacy_version is not None

    def get_long_change_type(self, long: str) -> ChangeTypeConfig | None:
        return next((ct for ct in self.change_types if ct.long == long), None)

    def get_short_change_type(self, short: str) -> ChangeTypeConfig | None:
        return next((ct for ct in self.change_types if ct.short == short), None)

    def add_category(self, value: str) -> None:
        if value in self.categories:
            raise AlreadyExistsError(f"category already found: {value}")
        self.categories = sorted([*self.categories, value])

    def remove_category(self, value: str) -> None:
        if value not in self.categories:
            raise NotFoundError(f"category not found: {value}")
        self.categories = [cat for cat in self.categories if cat != value]

    def add_change_type(self, long: str, short: str) -> None:
        if self.get_long_change_type(long) is not None:
            raise AlreadyExistsError(f"duplicate change type: {long}")
        if self.get_short_change_type(short) is not None:
            raise AlreadyExistsError(f"duplicate change type: {short}")
        self.change_types = [*self.change_types, ChangeTypeConfig(short=short, long=long)]

    def remove_change_type(self, short: str) -> None:
        if self.get_short_change_type(short) is None:
            raise NotFoundError(f"change type not found: {short}")
        self.change_types = [ct for ct in self.change_types if ct.short != short]

    def add_expected_spelling(self, key: str, value: str) -> None:
        if key in self.expected_spellings:
            raise AlreadyExistsError(f"spelling already configured: {key}")
        self.expected_spellings = {**self.expected_spellings, key: value}

    def remove_expected_spelling(self, key: str) -> None:
        if key not in self.expected_spellings:
            raise NotFoundError(f"spelling not found: {key}")
        self.expected_spellings = {
            k: v for k, v in self.expected_spellings.items() if k != key
        }

    def set_legacy_version(self, value: str | None) -> None:
        try:
            self.legacy_version = value
        except ValidationError as exc:
            raise InvalidConfigError(f"invalid legacy version: {value}") from exc

    def set_changelog_dir(self, value: str | None) -> None:
        self.changelog_dir = value

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode

    def set_use_categories(self, value: bool) -> None:
        self.use_categories = value

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), indent=2) + "\n"

    def export(self, path: Path) -> None:
        """Write the configuration as pretty-printed JSON."""
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info("Wrote configuration to %s", path)


def default_config() -> Config:
    """Return the configuration written by ``clu init``."""
    return Config(
        change_types=[
            ChangeTypeConfig(short="feat", long="Features"),
            ChangeTypeConfig(short="imp", long="Improvements"),
            ChangeTypeConfig(short="fix", long="Bug Fixes"),
        ],
    )


def set_target_repo(config: Config, value: str) -> None:
    """Set the target repository after checking it is a GitHub URL."""
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or parsed.hostname != "github.com":
        raise NoGitHubRepositoryError(f"target repository should be a GitHub link: {value}")
    config.target_repo = value.rstrip("/")


def unpack_config(contents: str) -> Config:
    """Decode and validate a configuration from its raw JSON text."""
    try:
        data: Any = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"failed to parse configuration: {exc}") from exc

    try:
        jsonschema_validate(instance=data, schema=_CONFIG_SCHEMA)
    except SchemaValidationError as exc:
        raise InvalidConfigError(f"invalid configuration: {exc.message}") from exc

    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfigError(f"invalid configuration: {exc}") from exc


def load(path: Path | None = None) -> Config:
    """Load the configuration file, by default from the working directory."""
    config_path = path or Path(CONFIG_FILE_NAME)
    if not config_path.is_file():
        raise ConfigNotFoundError(f"configuration file not found: {config_path}")

    logger.debug("Loading configuration from %s", config_path)
    return unpack_config(config_path.read_text(encoding="utf-8"))
