import time
from pathlib import Path
from typing import Optional

import typer

from config import CatalogSettings
from errors import CatalogError
from file_ops import PathUtils
from log import logger
from models import Configuration
from store import DocumentStore
from view import ConfigurationView, DisplayItem
from watcher import CatalogWatcher

app = typer.Typer(help="Manage launch configurations and compounds.")

WorkspaceOption = typer.Option(
    None, "--workspace", "-w", help="Workspace root holding the launch document."
)


def _open_store(workspace: Optional[Path]) -> tuple[CatalogSettings, DocumentStore]:
    settings = CatalogSettings(workspace)
    return settings, DocumentStore(settings.launch_path)


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _render(items: list[DisplayItem]) -> None:
    if not items:
        typer.echo("No configurations found.")
        return
    for item in items:
        typer.echo(f"{item.label}\t{item.description}")


@app.command("list")
def list_command(workspace: Optional[Path] = WorkspaceOption) -> None:
    """Show configurations, then compounds."""
    settings, store = _open_store(workspace)
    view = ConfigurationView(store, settings.click_behavior)
    _render(view.get_children())
    view.dispose()


@app.command("add")
def add_command(
    name: str,
    type_: str = typer.Option("node", "--type", "-t", help="Debugger type."),
    request: str = typer.Option("launch", "--request", "-r", help="launch or attach."),
    unique: bool = typer.Option(
        False, "--unique", help="Add a ' - N' suffix instead of failing on a taken name."
    ),
    workspace: Optional[Path] = WorkspaceOption,
) -> None:
    """Add a configuration."""
    _, store = _open_store(workspace)
    try:
        if unique:
            name = store.generate_unique_name(name)
        store.add(Configuration(name=name, type=type_, request=request.lower()))
    except (CatalogError, ValueError) as e:
        _fail(f"Failed to add configuration: {e}")
    typer.echo(f'Configuration "{name}" added successfully!')


@app.command("rename")
def rename_command(
    old_name: str, new_name: str, workspace: Optional[Path] = WorkspaceOption
) -> None:
    """Rename a configuration or compound."""
    _, store = _open_store(workspace)
    if new_name == old_name:
        return
    try:
        entry = store.get(old_name)
        store.update(old_name, entry.renamed(new_name))
    except CatalogError as e:
        _fail(f"Failed to rename configuration: {e}")
    typer.echo(f'Configuration renamed to "{new_name}" successfully!')


@app.command("delete")
def delete_command(
    name: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    workspace: Optional[Path] = WorkspaceOption,
) -> None:
    """Delete a configuration or compound."""
    _, store = _open_store(workspace)
    if not yes and not typer.confirm(
        f'Are you sure you want to delete configuration "{name}"?'
    ):
        raise typer.Abort()
    try:
        store.delete(name)
    except CatalogError as e:
        _fail(f"Failed to delete configuration: {e}")
    typer.echo(f'Configuration "{name}" deleted successfully!')


@app.command("duplicate")
def duplicate_command(name: str, workspace: Optional[Path] = WorkspaceOption) -> None:
    """Copy an entry as "<name> Copy"."""
    _, store = _open_store(workspace)
    try:
        copy = store.duplicate(store.get(name))
    except CatalogError as e:
        _fail(f"Failed to duplicate configuration: {e}")
    typer.echo(f'Configuration "{name}" duplicated as "{copy.name}"!')


@app.command("unique-name")
def unique_name_command(base: str, workspace: Optional[Path] = WorkspaceOption) -> None:
    """Print the first free name derived from BASE."""
    _, store = _open_store(workspace)
    typer.echo(store.generate_unique_name(base))


@app.command("watch")
def watch_command(workspace: Optional[Path] = WorkspaceOption) -> None:
    """Re-render the list whenever the launch document changes."""
    settings, store = _open_store(workspace)
    view = ConfigurationView(store, settings.click_behavior, listener=_render)
    watcher = CatalogWatcher(
        settings.launch_path, store.notifier, settings.debounce_delay
    )

    try:
        if not watcher.start():
            _fail("Failed to start watcher")

        _render(view.get_children())
        relative = PathUtils.get_relative_path(settings.launch_path, settings.workspace_root)
        logger.info(f"Re-rendering on changes to {relative}. Press Ctrl+C to stop...")
        while True:
            time.sleep(1)

    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    finally:
        watcher.stop()
        view.dispose()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
