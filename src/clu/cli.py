from __future__ import annotations

import pathlib
from typing import Optional

import typer

from clu import __version__, changelog, cli_config, config, cutover, get, init, lint
from clu.add import add_entry
from clu.cli_config import CliState, abort, config_path_from
from clu.config import Config, Mode
from clu.errors import CluError
from clu.logs import setup_logging
from clu.settings import get_settings

app = typer.Typer(no_args_is_help=True, help="Lint, fix and maintain changelogs")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Optional[pathlib.Path] = typer.Option(
        None,
        "--config",
        help="Configuration file to use (defaults to CLU_CONFIG_PATH or .clconfig.json).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Changelog utilities."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.LOG_LEVEL)
    ctx.obj = CliState(config_path=config_file or pathlib.Path(settings.CONFIG_PATH))


def _load_config(ctx: typer.Context) -> Config:
    try:
        return config.load(config_path_from(ctx))
    except CluError as exc:
        abort(exc)


def _load_changelog(configuration: Config) -> changelog.Changelog:
    if configuration.mode is Mode.MULTI:
        abort(CluError("this command is not supported for multi file changelogs"))
    try:
        return changelog.load(configuration)
    except CluError as exc:
        abort(exc)


@app.command("lint")
def lint_command(
    ctx: typer.Context,
    path: Optional[pathlib.Path] = typer.Option(
        None, "--path", help="Changelog file or directory to lint instead of the configured one."
    ),
) -> None:
    """Check if the changelog contents adhere to the configured rules."""
    configuration = _load_config(ctx)
    try:
        result = lint.lint(configuration, path)
    except CluError as exc:
        abort(exc)

    if not result.has_problems():
        typer.echo("changelog has no problems")
        return

    typer.echo("found problems in changelog:")
    for problem in result.problems:
        typer.echo(str(problem))
    raise typer.Exit(1)


@app.command("fix")
def fix_command(ctx: typer.Context) -> None:
    """Apply all possible automatic fixes to the changelog."""
    configuration = _load_config(ctx)
    document = _load_changelog(configuration)
    document.write()
    typer.echo(f"fixed changelog: {document.path}")


@app.command("get")
def get_command(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Release version, e.g. 'v1.2.0' or 'Unreleased'"),
) -> None:
    """Print the notes of one release."""
    configuration = _load_config(ctx)
    document = _load_changelog(configuration)
    try:
        release = get.get_release(document, version)
    except CluError as exc:
        abort(exc)
    typer.echo(get.render_release(release), nl=False)


@app.command("add")
def add_command(
    ctx: typer.Context,
    change_type: str = typer.Option(
        ..., "--change-type", "-t", help="Short code or name of the change type."
    ),
    pr_number: int = typer.Option(..., "--pr", "-p", min=0, help="Pull request number."),
    description: str = typer.Option(..., "--description", "-d", help="Description of the change."),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Entry category."),
) -> None:
    """Add a new entry to the Unreleased section of the changelog."""
    configuration = _load_config(ctx)
    if configuration.use_categories and not category:
        abort(CluError("a category is required when categories are enabled"))

    document = _load_changelog(configuration)
    try:
        entry = add_entry(configuration, document, change_type, category, description, pr_number)
    except CluError as exc:
        abort(exc)
    document.write()
    typer.echo(f"added entry: {entry.fixed}")


@app.command("release")
def release_command(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Version to release, e.g. 'v1.2.0'"),
    date: Optional[str] = typer.Option(
        None, "--date", help="Release date as YYYY-MM-DD (defaults to today)."
    ),
) -> None:
    """Turn the Unreleased section into a new release with the given version."""
    configuration = _load_config(ctx)
    document = _load_changelog(configuration)
    try:
        release = cutover.cut_release(configuration, document, version, date)
    except CluError as exc:
        abort(exc)
    document.write()
    typer.echo(f"released {release.version}")


@app.command("init")
def init_command() -> None:
    """Initialize the changelog configuration in the current directory.

    Creates an empty changelog skeleton if no changelog exists yet.
    """
    try:
        configuration = init.init_in_folder(pathlib.Path.cwd())
    except CluError as exc:
        abort(exc)

    if configuration.categories:
        typer.echo(f"extracted categories: {', '.join(configuration.categories)}")
    if configuration.change_types:
        names = ", ".join(ct.long for ct in configuration.change_types)
        typer.echo(f"configured change types: {names}")
    typer.echo(f"wrote configuration: {config.CONFIG_FILE_NAME}")


app.add_typer(cli_config.app, name="config")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
