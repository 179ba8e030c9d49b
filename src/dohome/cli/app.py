from __future__ import annotations

from typing import Annotated

import typer

from dohome.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands.control import register as register_control
from .commands.info import register as register_info
from .commands.init import register as register_init
from .commands.scan import register as register_scan

app = typer.Typer(
    help="dohome - discover and control DoHome LED controllers", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config")

register_init(app)
register_scan(app)
register_control(app)
register_info(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """dohome CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"dohome version {get_version('dohome')}")
        raise typer.Exit()
