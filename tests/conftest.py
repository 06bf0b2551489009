"""Pytest configuration helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from clu import config
from clu.config import Config
from clu.logs import app_logger
from clu.settings import get_settings

TESTDATA = Path(__file__).resolve().parent / "testdata"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Reset memoized settings so environment overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_clu_logger() -> Iterator[None]:
    """Drop handlers installed by CLI invocations bound to captured streams."""
    yield
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def testdata() -> Path:
    return TESTDATA


@pytest.fixture
def example_config() -> Config:
    """Configuration used by most tests, loaded through the regular loader."""
    return config.load(TESTDATA / "example_config.json")


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory holding the example configuration and changelog."""
    (tmp_path / ".clconfig.json").write_text(
        (TESTDATA / "example_config.json").read_text(encoding="utf-8"), encoding="utf-8"
    )
    (tmp_path / "CHANGELOG.md").write_text(
        (TESTDATA / "changelog_ok.md").read_text(encoding="utf-8"), encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path
