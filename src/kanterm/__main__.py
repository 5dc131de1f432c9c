"""CLI entry point for kanterm."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import click

from kanterm import __version__
from kanterm.config import KantermConfig
from kanterm.debug_log import setup_debug_logging
from kanterm.paths import get_config_path, get_database_path, get_debug_log_path


@dataclass(slots=True)
class CliOptions:
    db: Path | None
    debug: bool
    remigrate: int
    config_path: Path


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--db",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Folder holding kanterm.db (default: platform data directory)",
)
@click.option("--debug", is_flag=True, help="Log at DEBUG level and write debug.log")
@click.option(
    "--remigrate",
    type=int,
    default=0,
    show_default=True,
    help="Number of schema migrations to roll back and re-apply on startup",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml",
)
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    db: Path | None,
    debug: bool,
    remigrate: int,
    config_path: Path | None,
) -> None:
    """Keyboard-driven Kanban board for the terminal."""
    if version:
        click.echo(f"kanterm {__version__}")
        ctx.exit(0)

    ctx.obj = CliOptions(
        db=db,
        debug=debug,
        remigrate=max(0, remigrate),
        config_path=config_path or get_config_path(),
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(tui)


@cli.command()
@click.pass_obj
def tui(options: CliOptions) -> None:
    """Run the board (default command)."""
    config = KantermConfig.load(options.config_path)
    setup_debug_logging(
        debug=options.debug,
        log_file=get_debug_log_path() if options.debug else None,
    )
    db_path = get_database_path(options.db) if options.db else config.database_path

    from kanterm.app import KantermApp

    app = KantermApp(config, db_path=db_path, remigrate_count=options.remigrate)
    app.run()


@cli.command("init-config")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@click.pass_obj
def init_config(options: CliOptions, force: bool) -> None:
    """Write a config file with default settings."""
    path = options.config_path
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    asyncio.run(KantermConfig().save(path))
    click.echo(f"Wrote {path}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
