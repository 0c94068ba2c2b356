"""Secret management commands."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import typer
from rich.box import ROUNDED
from rich.table import Table

from secretdesk.cli._console import (
    console,
    dim,
    error,
    error_panel,
    info,
    nl,
    setup_logging,
    success,
)
from secretdesk.data.secrets import SecretRepository
from secretdesk.data.workflows import WorkflowCatalog
from secretdesk.domain.secrets import Scope
from secretdesk.engine.backend_api import BackendAPI
from secretdesk.engine.cache import QueryCache
from secretdesk.errors import RequestError, SecretNotFoundError
from secretdesk.forms.secret_form import SecretFormController
from secretdesk.views.secret_list import SecretListView

MASK = "********"

_workflow_option = typer.Option(
    None,
    "--workflow",
    "-w",
    help="Workflow scope (omit for Global secrets)",
)
_verbose_option = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")


def open_backend() -> BackendAPI:
    """Backend client for one CLI invocation."""
    return BackendAPI()


@asynccontextmanager
async def _repository() -> AsyncIterator[SecretRepository]:
    async with open_backend() as backend:
        yield SecretRepository(backend, QueryCache())


def _request_failed(exc: RequestError) -> typer.Exit:
    error_panel(exc.message, title="Request failed")
    return typer.Exit(1)


def list_cmd(
    workflow: str | None = _workflow_option,
    verbose: bool = _verbose_option,
) -> None:
    """List secret names in a scope."""
    setup_logging(verbose=verbose)

    async def _run() -> SecretListView:
        async with _repository() as repo:
            view = SecretListView(repo, workflow or "")
            await view.refresh()
            return view

    view = asyncio.run(_run())
    if view.error_message is not None:
        error_panel(view.error_message, title="Request failed")
        raise typer.Exit(1)

    nl()
    table = Table(box=ROUNDED, border_style="dim", title_justify="left")
    table.add_column("Name", style="bold")
    table.add_column("Scope", style="dim")
    table.add_column("Path", style="cyan")
    for row in view.rows:
        table.add_row(row.name, view.scope.label, row.path)
    console.print(table)
    dim(f"{view.title} · new: {view.new_secret_path}")
    nl()


def get_cmd(
    name: str = typer.Argument(..., help="Secret name"),
    workflow: str | None = _workflow_option,
    reveal: bool = typer.Option(
        False, "--reveal", help="Print the value in clear text"
    ),
    verbose: bool = _verbose_option,
) -> None:
    """Show a secret's metadata."""
    setup_logging(verbose=verbose)

    async def _run():
        async with _repository() as repo:
            return await repo.get(name, workflow)

    try:
        secret = asyncio.run(_run())
    except SecretNotFoundError as exc:
        error(exc.message)
        raise typer.Exit(1)
    except RequestError as exc:
        raise _request_failed(exc)

    if secret is None:
        error("Secret name is required")
        raise typer.Exit(1)
    nl()
    console.print(f"  [bold]{secret.name}[/bold]  [dim]{secret.scope.label}[/dim]")
    if secret.value is None:
        dim("value not returned by server")
    else:
        console.print(f"  {secret.value if reveal else MASK}")
    nl()


def set_cmd(
    name: str = typer.Argument(..., help="Secret name"),
    workflow: str | None = _workflow_option,
    value: str | None = typer.Option(
        None,
        "--value",
        help="Secret value (prompted without echo when omitted)",
    ),
    verbose: bool = _verbose_option,
) -> None:
    """Create a secret or update its value."""
    setup_logging(verbose=verbose)
    if value is None:
        value = typer.prompt("Value", hide_input=True)

    async def _run() -> SecretFormController:
        async with _repository() as repo:
            existing = await repo.exists(name, workflow)
            if existing:
                form = SecretFormController(
                    repo, secret_name=name, workflow_name=workflow
                )
                await form.load()
            else:
                form = SecretFormController(repo, workflow_name=workflow)
                form.set_name(name)
            form.set_value(value)
            await form.request_save()
            return form

    try:
        form = asyncio.run(_run())
    except RequestError as exc:
        raise _request_failed(exc)

    if form.navigated_to is None:
        error(form.error_message or "Save failed")
        raise typer.Exit(1)
    success(f"Saved secret [bold]{name}[/bold] ({Scope.of(workflow).label})")


def delete_cmd(
    name: str = typer.Argument(..., help="Secret name"),
    workflow: str | None = _workflow_option,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    verbose: bool = _verbose_option,
) -> None:
    """Delete a secret after confirmation."""
    setup_logging(verbose=verbose)

    async def _run() -> SecretFormController | None:
        async with _repository() as repo:
            form = SecretFormController(repo, secret_name=name, workflow_name=workflow)
            await form.load()
            if form.error_message is not None or not form.request_delete():
                return form
            if yes or typer.confirm(form.delete_prompt, default=False):
                await form.confirm_delete()
            else:
                form.cancel_delete()
                return None
            return form

    form = asyncio.run(_run())
    if form is None:
        info("Cancelled")
        return
    if form.navigated_to is None:
        error(form.error_message or "Delete failed")
        raise typer.Exit(1)
    success(f"Deleted secret [bold]{name}[/bold] ({form.scope.label})")


def workflows_cmd(verbose: bool = _verbose_option) -> None:
    """List workflow names usable as secret scopes."""
    setup_logging(verbose=verbose)

    async def _run() -> list[str]:
        async with open_backend() as backend:
            return await WorkflowCatalog(backend, QueryCache()).names()

    try:
        names = asyncio.run(_run())
    except RequestError as exc:
        raise _request_failed(exc)

    nl()
    for workflow_name in names:
        console.print(f"  {workflow_name}")
    dim(f"{len(names)} workflow{'s' if len(names) != 1 else ''}")
    nl()
