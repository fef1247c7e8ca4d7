import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

import click
from pydantic import ValidationError

from tfcstate import __version__
from tfcstate.client import TfcClient
from tfcstate.errors import TfcStateError
from tfcstate.log import setup_logging
from tfcstate.managers.locks import release_lock
from tfcstate.managers.state import pull_state, push_state
from tfcstate.managers.workspaces import list_workspaces, register_workspace, resolve_workspace_id
from tfcstate.models.state import PullResult, PushResult
from tfcstate.models.workspace import WorkspaceEntry
from tfcstate.settings import LOG_LEVELS, TfcSettings, get_settings
from tfcstate.store.local import LocalStateFile, LocalWorkspaceStore

T = TypeVar("T")


@click.group()
@click.version_option(version=__version__, prog_name="tfcstate")
@click.option(
    "--registry-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Workspace registry file (default: from TFC_REGISTRY_FILE or ./.workspaces).",
)
@click.option(
    "--state-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Local state file (default: from TFC_STATE_FILE or ./state.tfstate).",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: from TFC_LOG_LEVEL or WARNING).",
)
@click.pass_context
def main(ctx: click.Context, registry_file: Path | None, state_file: Path | None, log_level: str | None) -> None:
    """tfcstate - pull and push Terraform Cloud state files by workspace name."""
    overrides = {
        "registry_file": registry_file,
        "state_file": state_file,
        "log_level": log_level.upper() if log_level else None,
    }
    try:
        settings = get_settings()
    except ValidationError as exc:
        msg = f"invalid configuration: {exc}"
        raise click.ClickException(msg) from None
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    setup_logging(settings.log_level)
    ctx.obj = settings


def create_client(settings: TfcSettings) -> TfcClient:
    """Build the API client.  Raises ``ConfigurationError`` if no token is set."""
    return TfcClient(settings.require_token(), base_url=settings.api_url)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run one command coroutine, mapping expected failures to a clean CLI error."""
    try:
        return asyncio.run(coro)
    except (TfcStateError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# Workspace registry
# ---------------------------------------------------------------------------


@main.command()
@click.option("--workspace-name", required=True, help="Local name for the workspace.")
@click.option("--workspace-id", required=True, help="Terraform Cloud workspace ID (ws-...).")
@click.pass_obj
def new(settings: TfcSettings, workspace_name: str, workspace_id: str) -> None:
    """Add a new workspace to the local registry."""
    if not workspace_id:
        raise click.UsageError("workspace ID is required")
    if not workspace_name:
        raise click.UsageError("workspace name is required")

    store = LocalWorkspaceStore(settings.registry_file)
    _run(register_workspace(store, workspace_name, workspace_id))
    click.echo(f"Workspace {workspace_name} added successfully.")


@main.command(name="list")
@click.pass_obj
def list_(settings: TfcSettings) -> None:
    """List registered workspaces."""
    entries: list[WorkspaceEntry] = _run(list_workspaces(LocalWorkspaceStore(settings.registry_file)))
    if not entries:
        click.echo("No workspaces registered.")
        return
    width = max(len(entry.name) for entry in entries)
    for entry in entries:
        click.echo(f"{entry.name:<{width}}  {entry.workspace_id}")


# ---------------------------------------------------------------------------
# State transfer
# ---------------------------------------------------------------------------


@main.command()
@click.argument("workspace_name")
@click.pass_obj
def pull(settings: TfcSettings, workspace_name: str) -> None:
    """Lock a workspace and pull its Terraform state file."""

    async def _pull() -> PullResult:
        async with create_client(settings) as client:
            return await pull_state(
                client,
                LocalWorkspaceStore(settings.registry_file),
                LocalStateFile(settings.state_file),
                workspace_name,
            )

    result = _run(_pull())
    click.echo(
        f"Successfully pulled Terraform state file for workspace {result.workspace_name} (ID {result.workspace_id})"
    )


@main.command()
@click.argument("workspace_name")
@click.pass_obj
def push(settings: TfcSettings, workspace_name: str) -> None:
    """Upload the Terraform state for a workspace by name and unlock it."""

    async def _push() -> PushResult:
        async with create_client(settings) as client:
            return await push_state(
                client,
                LocalWorkspaceStore(settings.registry_file),
                LocalStateFile(settings.state_file),
                workspace_name,
                unlock_reason=settings.unlock_reason,
            )

    result = _run(_push())
    click.echo("Terraform state uploaded successfully.")
    if not result.unlocked:
        click.echo(f"Warning: workspace is still locked: {result.unlock_error}", err=True)


@main.command()
@click.argument("workspace_name")
@click.pass_obj
def unlock(settings: TfcSettings, workspace_name: str) -> None:
    """Release a workspace lock left behind by an aborted pull or push."""

    async def _unlock() -> str:
        async with create_client(settings) as client:
            workspace_id = await resolve_workspace_id(LocalWorkspaceStore(settings.registry_file), workspace_name)
            await release_lock(client, workspace_id, reason=settings.unlock_reason)
            return workspace_id

    workspace_id = _run(_unlock())
    click.echo(f"Workspace {workspace_name} (ID {workspace_id}) unlocked.")


if __name__ == "__main__":
    main()
