"""SecretDesk CLI."""

import typer

from secretdesk.cli._console import console
from secretdesk.cli.secrets import (
    delete_cmd,
    get_cmd,
    list_cmd,
    set_cmd,
    workflows_cmd,
)

app = typer.Typer(
    name="secretdesk",
    help="Manage global and workflow-scoped secrets.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from secretdesk import __version__

        console.print(f"[bold]secretdesk[/bold] [dim]{__version__}[/dim]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """Secrets for workflow orchestration."""


secrets_app = typer.Typer(
    help="Create, inspect and delete secrets.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
secrets_app.command("list")(list_cmd)
secrets_app.command("get")(get_cmd)
secrets_app.command("set")(set_cmd)
secrets_app.command("delete")(delete_cmd)

app.add_typer(secrets_app, name="secrets")
app.command("workflows")(workflows_cmd)
