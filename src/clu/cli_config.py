"""Configuration management CLI commands."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Callable, NoReturn

import typer

from clu import config
from clu.config import Config, Mode
from clu.errors import CluError, InvalidConfigError

app = typer.Typer(no_args_is_help=True, help="Adjust the changelog configuration")
category_app = typer.Typer(no_args_is_help=True, help="Adjust the allowed entry categories")
change_type_app = typer.Typer(
    no_args_is_help=True, help="Adjust the allowed change types (like 'Bug Fixes')"
)
spelling_app = typer.Typer(
    no_args_is_help=True, help="Adjust the spellings enforced in entry descriptions"
)
legacy_version_app = typer.Typer(no_args_is_help=True, help="Set or unset the legacy version")
changelog_dir_app = typer.Typer(
    no_args_is_help=True, help="Set or unset the changelog directory for multi mode"
)


@dataclass
class CliState:
    """Options shared by all commands."""

    config_path: pathlib.Path


def abort(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


def config_path_from(ctx: typer.Context) -> pathlib.Path:
    state = ctx.find_object(CliState)
    if state is None:
        return pathlib.Path(config.CONFIG_FILE_NAME)
    return state.config_path


def _adjust(ctx: typer.Context, change: Callable[[Config], None]) -> None:
    """Load the configuration, apply ``change`` and write it back."""
    path = config_path_from(ctx)
    try:
        configuration = config.load(path)
        change(configuration)
        configuration.export(path)
    except CluError as exc:
        abort(exc)


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show the current configuration."""
    try:
        configuration = config.load(config_path_from(ctx))
    except CluError as exc:
        abort(exc)
    typer.echo(configuration.to_json(), nl=False)


@category_app.command("add")
def category_add(ctx: typer.Context, value: str = typer.Argument(..., help="Category to allow")) -> None:
    """Add a category to the allowed ones."""
    _adjust(ctx, lambda c: c.add_category(value))


@category_app.command("remove")
def category_remove(
    ctx: typer.Context, value: str = typer.Argument(..., help="Category to remove")
) -> None:
    """Remove a category from the allowed ones."""
    _adjust(ctx, lambda c: c.remove_category(value))


@change_type_app.command("add")
def change_type_add(
    ctx: typer.Context,
    long: str = typer.Argument(..., help="Name used in the section header, e.g. 'Bug Fixes'"),
    short: str = typer.Argument(..., help="Short code, e.g. 'fix'"),
) -> None:
    """Add a change type."""
    _adjust(ctx, lambda c: c.add_change_type(long, short))


@change_type_app.command("remove")
def change_type_remove(
    ctx: typer.Context, short: str = typer.Argument(..., help="Short code of the change type")
) -> None:
    """Remove a change type by its short code."""
    _adjust(ctx, lambda c: c.remove_change_type(short))


@spelling_app.command("add")
def spelling_add(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Correct spelling, e.g. 'API'"),
    value: str = typer.Argument(..., help="Case-insensitive pattern of the misspellings"),
) -> None:
    """Add an expected spelling."""
    _adjust(ctx, lambda c: c.add_expected_spelling(key, value))


@spelling_app.command("remove")
def spelling_remove(
    ctx: typer.Context, key: str = typer.Argument(..., help="Correct spelling to remove")
) -> None:
    """Remove an expected spelling."""
    _adjust(ctx, lambda c: c.remove_expected_spelling(key))


@legacy_version_app.command("set")
def legacy_version_set(
    ctx: typer.Context, value: str = typer.Argument(..., help="Version label, e.g. 'v1.0.0'")
) -> None:
    """Stop validating releases up to the given version."""
    _adjust(ctx, lambda c: c.set_legacy_version(value))


@legacy_version_app.command("unset")
def legacy_version_unset(ctx: typer.Context) -> None:
    """Validate all releases again."""
    _adjust(ctx, lambda c: c.set_legacy_version(None))


@changelog_dir_app.command("set")
def changelog_dir_set(
    ctx: typer.Context, value: str = typer.Argument(..., help="Directory holding the entry files")
) -> None:
    """Set the changelog directory used in multi mode."""
    _adjust(ctx, lambda c: c.set_changelog_dir(value))


@changelog_dir_app.command("unset")
def changelog_dir_unset(ctx: typer.Context) -> None:
    """Unset the changelog directory."""
    _adjust(ctx, lambda c: c.set_changelog_dir(None))


@app.command("target-repo")
def target_repo(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="GitHub URL of the repository"),
) -> None:
    """Set the repository that PR and release links must point to."""
    _adjust(ctx, lambda c: config.set_target_repo(c, value))


@app.command("mode")
def mode(ctx: typer.Context, value: Mode = typer.Argument(..., help="single or multi")) -> None:
    """Set whether the changelog is one file or a directory of entry files."""
    _adjust(ctx, lambda c: c.set_mode(value))


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered not in ("true", "false"):
        raise InvalidConfigError(f"expected 'true' or 'false'; got: '{value}'")
    return lowered == "true"


@app.command("use-categories")
def use_categories(
    ctx: typer.Context, value: str = typer.Argument(..., help="'true' or 'false'")
) -> None:
    """Set whether entries must carry a category."""
    _adjust(ctx, lambda c: c.set_use_categories(_parse_bool(value)))


app.add_typer(category_app, name="category")
app.add_typer(change_type_app, name="change-type")
app.add_typer(spelling_app, name="spelling")
app.add_typer(legacy_version_app, name="legacy-version")
app.add_typer(changelog_dir_app, name="changelog-dir")
