from __future__ import annotations

import typer
from rich.console import Console
from rich.syntax import Syntax

from dohome.cli.common import load_settings_or_exit, resolve_config_path_or_exit
from dohome.config import CONFIG_ENV_VAR, render_settings_toml

app = typer.Typer(no_args_is_help=True, help="Inspect the dohome configuration")


@app.command("show")
def show_config() -> None:
    """Print the effective settings as TOML."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    typer.echo(f"Config source: {path if exists else 'defaults'}")
    Console().print(Syntax(render_settings_toml(settings), "toml", theme="ansi_dark"))


@app.command("path")
def show_path() -> None:
    """Print where the config file is read from."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)
    typer.echo(str(path))
    if not exists:
        typer.echo(
            f"(not created yet; run `dohome init` or set {CONFIG_ENV_VAR})", err=True
        )
