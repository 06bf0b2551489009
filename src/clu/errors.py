"""Custom exceptions for changelog operations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class CluError(RuntimeError):
    """Base exception for changelog utility failures."""


class ChangelogNotFoundError(CluError):
    """Raised when no changelog file or directory can be located."""


@dataclass(slots=True)
class InvalidChangelogError(CluError):
    """Raised when the document structure prevents a safe parse."""

    path: Path
    line: int
    reason: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line + 1}: {self.reason}"


class ConfigError(CluError):
    """Base exception for configuration loading failures."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file does not exist."""


class InvalidConfigError(ConfigError):
    """Raised when the configuration cannot be decoded or validated."""


class ConfigAdjustError(CluError):
    """Base exception for rejected configuration adjustments."""


class AlreadyExistsError(ConfigAdjustError):
    """Raised when adding a value that is already configured."""


class NotFoundError(ConfigAdjustError):
    """Raised when removing a value that is not configured."""


class NoGitHubRepositoryError(ConfigAdjustError):
    """Raised when the target repository is not a GitHub URL."""


class InvalidEntryError(CluError):
    """Raised when a line does not follow the entry grammar."""

    def __init__(self, line: str) -> None:
        super().__init__(f"invalid entry: {line}")
        self.line = line


class ReleaseParseError(CluError):
    """Raised when a line does not follow the release header grammar."""


class ChangeTypeParseError(CluError):
    """Raised when a line does not follow the change type header grammar."""


class VersionError(CluError):
    """Raised when a version label does not follow semantic versioning."""


class VersionNotFoundError(CluError):
    """Raised when a requested release is missing from the changelog."""


class DuplicateVersionError(CluError):
    """Raised when cutting a release whose version already exists."""


class NoUnreleasedError(CluError):
    """Raised when the changelog has no Unreleased section to release."""


class InitError(CluError):
    """Base exception for initialization failures."""


class ConfigAlreadyFoundError(InitError):
    """Raised when initializing a folder that already has a configuration."""
