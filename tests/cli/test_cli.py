"""CLI tests for the changelog commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from clu.cli import app

runner = CliRunner()

REPO = "https://github.com/MalteHerrmann/changelog-utils"


def test_lint_passes(project_dir: Path) -> None:
    result = runner.invoke(app, ["lint"])
    assert result.exit_code == 0
    assert "changelog has no problems" in result.stdout


def test_lint_reports_problems(project_dir: Path, testdata: Path) -> None:
    (project_dir / "CHANGELOG.md").write_text(
        (testdata / "changelog_fail.md").read_text(encoding="utf-8"), encoding="utf-8"
    )
    result = runner.invoke(app, ["lint"])
    assert result.exit_code == 1
    assert "found problems in changelog:" in result.stdout
    assert "CHANGELOG.md:21: duplicate PR: #4" in result.stdout


def test_lint_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["lint"])
    assert result.exit_code == 1
    assert "Error: configuration file not found" in result.output


def test_lint_uses_config_option(project_dir: Path) -> None:
    custom = project_dir / "custom.json"
    (project_dir / ".clconfig.json").rename(custom)
    result = runner.invoke(app, ["--config", str(custom), "lint"])
    assert result.exit_code == 0


def test_lint_uses_config_from_environment(
    project_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (project_dir / ".clconfig.json").rename(project_dir / "env.json")
    monkeypatch.setenv("CLU_CONFIG_PATH", "env.json")
    result = runner.invoke(app, ["lint"])
    assert result.exit_code == 0


def test_lint_structural_failure(project_dir: Path) -> None:
    (project_dir / "CHANGELOG.md").write_text("# Changelog\n\n### Features\n", encoding="utf-8")
    result = runner.invoke(app, ["lint"])
    assert result.exit_code == 1
    assert "CHANGELOG.md:3: change type found outside of a release" in result.output


def test_fix(project_dir: Path, testdata: Path) -> None:
    (project_dir / "CHANGELOG.md").write_text(
        (testdata / "changelog_fail.md").read_text(encoding="utf-8"), encoding="utf-8"
    )
    result = runner.invoke(app, ["fix"])
    assert result.exit_code == 0
    assert (project_dir / "CHANGELOG.md").read_text(encoding="utf-8") == (
        testdata / "changelog_fail_fixed.md"
    ).read_text(encoding="utf-8")


def test_fix_rejects_multi_mode(project_dir: Path) -> None:
    config_path = project_dir / ".clconfig.json"
    data = json.loads(config_path.read_text(encoding="utf-8"))
    data["mode"] = "multi"
    config_path.write_text(json.dumps(data), encoding="utf-8")

    result = runner.invoke(app, ["fix"])
    assert result.exit_code == 1
    assert "not supported for multi file changelogs" in result.output


def test_get(project_dir: Path) -> None:
    result = runner.invoke(app, ["get", "v0.1.0"])
    assert result.exit_code == 0
    assert result.stdout == (
        f"## [v0.1.0]({REPO}/releases/tag/v0.1.0) - 2024-04-01\n"
        "\n"
        "### Features\n"
        "\n"
        f"- (cli) [#1]({REPO}/pull/1) Add initial Python implementation.\n"
    )


def test_get_missing_version(project_dir: Path) -> None:
    result = runner.invoke(app, ["get", "v9.9.9"])
    assert result.exit_code == 1
    assert "version v9.9.9 not found" in result.output


def test_add(project_dir: Path) -> None:
    result = runner.invoke(
        app,
        ["add", "-t", "fix", "-c", "test", "-p", "15", "-d", "fix the tests"],
    )
    assert result.exit_code == 0
    contents = (project_dir / "CHANGELOG.md").read_text(encoding="utf-8")
    assert f"### Bug Fixes\n\n- (test) [#15]({REPO}/pull/15) Fix the tests.\n" in contents


def test_add_requires_category(project_dir: Path) -> None:
    result = runner.invoke(app, ["add", "-t", "fix", "-p", "15", "-d", "Fix the tests."])
    assert result.exit_code == 1
    assert "category is required" in result.output


def test_add_unknown_change_type(project_dir: Path) -> None:
    result = runner.invoke(
        app, ["add", "-t", "docs", "-c", "cli", "-p", "15", "-d", "Add docs."]
    )
    assert result.exit_code == 1
    assert "change type not found: docs" in result.output


def test_release(project_dir: Path) -> None:
    result = runner.invoke(app, ["release", "v0.3.0", "--date", "2024-06-01"])
    assert result.exit_code == 0
    contents = (project_dir / "CHANGELOG.md").read_text(encoding="utf-8")
    assert "## Unreleased" not in contents
    assert f"## [v0.3.0]({REPO}/releases/tag/v0.3.0) - 2024-06-01" in contents


def test_release_duplicate_version(project_dir: Path) -> None:
    result = runner.invoke(app, ["release", "v0.2.0"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_init(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert (tmp_path / ".clconfig.json").is_file()
    assert (tmp_path / "CHANGELOG.md").is_file()

    again = runner.invoke(app, ["init"])
    assert again.exit_code == 1
    assert "configuration already exists" in again.output


def test_verbose_logging(project_dir: Path) -> None:
    result = runner.invoke(app, ["--verbose", "lint"])
    assert result.exit_code == 0
