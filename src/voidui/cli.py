# Copyright (c) 2025 VoidUI Project
# 
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# 
#     http://www.apache.org/licenses/LICENSE-2.0
# 
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI interface for voidui component version tracking."""

import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from voidui import __version__
from voidui.changelog import create_snapshot, entries_between
from voidui.changelog.manager import component_paths
from voidui.config import config
from voidui.crypto import format_checksum, read_component_text
from voidui.errors import BaseUnavailableError, ChangelogError, CorruptStateError, InstallError, RegistryError
from voidui.locator import locate_component
from voidui.lockfile import DriftStatus, LockFileManager, get, is_tracked, verify_component, verify_project
from voidui.lockfile.store import remove as remove_record
from voidui.merge import format_merge_message
from voidui.models import ChangeType, ChangelogChange, LockStore, RegistryItem, is_semver
from voidui.reconcile import UpdateStrategy, reconcile_update, track_component
from voidui.registry import RegistryClient, extract_component_code, install_component
from voidui.registry.client import LOCAL_VERSION_DIRS
from voidui.reports import render_changelog, render_diff, render_summary, unified_diff

app = typer.Typer(
    name="voidui",
    help="Version tracking and safe updates for copy-pasted UI components",
    rich_markup_mode="markdown"
)
console = Console()
logger = logging.getLogger(__name__)

STATUS_STYLES = {
    DriftStatus.UNCHANGED: "[green]unchanged[/green]",
    DriftStatus.MODIFIED: "[yellow]modified[/yellow]",
    DriftStatus.MISSING: "[red]missing[/red]",
    DriftStatus.UNTRACKED: "[dim]untracked[/dim]",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"voidui version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging"
    )
):
    """
    Track installed voidui components, detect local edits and pull
    upstream updates without losing them.
    """
    _configure_logging(verbose)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]❌ {escape(message)}[/red]")
    raise typer.Exit(1)


def _load_store(manager: LockFileManager) -> Optional[LockStore]:
    try:
        return manager.load()
    except CorruptStateError as e:
        _fail(str(e))


def _fetch_versioned_item(client: RegistryClient, component: str) -> RegistryItem:
    try:
        item = client.fetch_item(component)
    except RegistryError as e:
        _fail(str(e))

    if item is None:
        _fail(f'Component "{component}" not found in registry.\n   Registry: {client.registry_url}')
    if item.versioning is None:
        _fail(f'Component "{component}" does not have version tracking.')
    return item


def _registry_dir(cwd: Path) -> Path:
    for directory in LOCAL_VERSION_DIRS:
        if (cwd / directory).exists():
            return cwd / directory
    return cwd / LOCAL_VERSION_DIRS[0]


@app.command()
def add(
    component: str = typer.Argument(..., help="Component name (e.g., button)"),
    scan: bool = typer.Option(
        False,
        "--scan",
        help="Start tracking an already installed component without reinstalling"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Reinstall or re-track a component that is already present"
    ),
    registry: Optional[str] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Registry URL"
    )
):
    """Install a component and record it in the lock file."""
    cwd = Path.cwd()
    registry_url = registry or config.registry_url
    manager = LockFileManager(cwd)
    store = _load_store(manager) or manager.load_or_create()

    location = locate_component(component, cwd)
    if location.exists and not scan and not force:
        console.print(f"[yellow]⚠️  {component} already exists at {location.path}[/yellow]")
        console.print(f"   Use [bold]voidui add {component} --scan[/bold] to start tracking it")
        console.print(f"   or [bold]voidui add {component} --force[/bold] to reinstall")
        raise typer.Exit(1)

    if scan and not location.exists:
        _fail(f"Component file not found: {location.path}")

    if is_tracked(store, component) and not force:
        record = get(store, component)
        console.print(f"[yellow]{component} is already tracked at v{record.installed_version}[/yellow]")
        return

    with RegistryClient(registry_url) as client:
        item = _fetch_versioned_item(client, component)
    current_version = item.versioning.current_version

    if not scan:
        console.print(f"[bold]Installing {component}@{current_version}...[/bold]")
        try:
            install_component(component, registry_url)
        except InstallError as e:
            _fail(str(e))
        location = locate_component(component, cwd)
        if not location.exists:
            _fail(f"Installation finished but {component} was not found at {location.path}")

    store = track_component(store, component, current_version, location.path.read_bytes(), registry_url)
    manager.save(store)

    verb = "Tracking" if scan else "Installed"
    console.print(f"[green]✓ {verb} {component}@{current_version}[/green]")
    console.print(f"  Location: {location.path}")
    console.print(f"  Lock file: {manager.lockfile_path}")


def _choose_strategy(component: str, path: Path, latest_content: str, latest_version: str) -> Optional[UpdateStrategy]:
    """Ask how to update a locally modified file. None means abort."""
    console.print("\nHow would you like to update?")
    console.print("  [bold]merge[/bold]      Keep your changes and merge upstream (recommended)")
    console.print("  [bold]overwrite[/bold]  Replace your file with the latest version")
    console.print("  [bold]diff[/bold]       Show the differences first")
    console.print("  [bold]abort[/bold]      Cancel the update")

    choice = Prompt.ask(
        "Choice",
        choices=["merge", "overwrite", "diff", "abort"],
        default="merge",
        console=console
    )

    if choice == "diff":
        local = read_component_text(path)
        console.print(render_diff(unified_diff(local, latest_content, "your version", f"v{latest_version}")))
        console.print(f"\nRun [bold]voidui update {component} --merge[/bold] or [bold]--force[/bold] to continue.")
        return None
    if choice == "abort":
        return None
    return UpdateStrategy(choice)


@app.command()
def update(
    component: str = typer.Argument(..., help="Component name"),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite local changes with the latest version"
    ),
    merge: bool = typer.Option(
        False,
        "--merge",
        help="Merge the latest version into local changes"
    ),
    registry: Optional[str] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Registry URL"
    )
):
    """Update a tracked component to the latest registry version."""
    if force and merge:
        _fail("Use either --force or --merge, not both.")

    cwd = Path.cwd()
    manager = LockFileManager(cwd)
    store = _load_store(manager)
    if store is None:
        _fail(f"No lock file found. Run: voidui add {component}")

    record = get(store, component)
    if record is None:
        _fail(f'Component "{component}" is not tracked in lock file.\n   Run: voidui add {component} --scan')

    location = locate_component(component, cwd)
    if not location.exists:
        _fail(f"Component file not found: {location.path}")

    registry_url = registry or record.registry_url or config.registry_url
    with RegistryClient(registry_url) as client:
        item = _fetch_versioned_item(client, component)
        latest_version = item.versioning.current_version
        modified = verify_component(store, component, location.path).is_modified

        if record.installed_version == latest_version:
            console.print(f"[green]✓ {component} is already on the latest version ({latest_version})[/green]")
            if modified:
                console.print("[dim]  Your local copy has modifications.[/dim]")
            return

        console.print(f"[bold]{component}[/bold]: {record.installed_version} → {latest_version}")
        latest_content = extract_component_code(item)

        strategy = UpdateStrategy.MERGE if merge else UpdateStrategy.OVERWRITE
        if modified:
            console.print("[yellow]⚠️  You have modified this component locally.[/yellow]")
            if not force and not merge:
                strategy = _choose_strategy(component, location.path, latest_content, latest_version)
                if strategy is None:
                    console.print("Update cancelled.")
                    return

        base_content = None
        if strategy == UpdateStrategy.MERGE and modified:
            console.print("Performing 3-way merge...")
            try:
                base_content = client.fetch_component_version(component, record.installed_version, item)
            except RegistryError as e:
                logger.warning(f"Could not fetch base version {record.installed_version}: {e}")

    try:
        outcome = reconcile_update(
            store, component, location.path, latest_version, latest_content, strategy, base_content
        )
    except BaseUnavailableError as e:
        console.print(f"[yellow]⚠️  {escape(str(e))}[/yellow]")
        if not typer.confirm("Overwrite your local changes with the latest version?", default=False):
            console.print("Update cancelled.")
            return
        outcome = reconcile_update(
            store, component, location.path, latest_version, latest_content, UpdateStrategy.OVERWRITE
        )

    manager.save(outcome.store)

    if outcome.merged:
        console.print(format_merge_message(outcome.merge_result, location.path, component))
    elif outcome.was_modified:
        console.print("[yellow]Local changes were overwritten.[/yellow]")

    if outcome.success:
        console.print(f"[green]✓ Updated {component} from {outcome.from_version} to {outcome.to_version}[/green]")
    else:
        console.print(f"[yellow]Updated {component} to {outcome.to_version} with {outcome.conflicts} conflict(s)[/yellow]")


@app.command()
def diff(
    component: str = typer.Argument(..., help="Component name"),
    from_version: Optional[str] = typer.Argument(None, help="Older version to compare"),
    to_version: Optional[str] = typer.Argument(None, help="Newer version to compare"),
    code: bool = typer.Option(
        False,
        "--code",
        help="Show a code diff instead of the changelog"
    ),
    registry: Optional[str] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Registry URL"
    )
):
    """
    Show what changed for a component.

    Without versions, compares your local copy to the latest release.
    With two versions, compares those registry versions.
    """
    if from_version and not to_version:
        _fail("Provide both versions to compare, e.g. voidui diff button 1.0.0 1.2.0")

    registry_url = registry or config.registry_url
    if from_version and to_version:
        _diff_versions(component, from_version, to_version, code, registry_url)
    else:
        _diff_local(component, code, registry_url)


def _diff_versions(component: str, from_version: str, to_version: str, code: bool, registry_url: str) -> None:
    with RegistryClient(registry_url) as client:
        item = _fetch_versioned_item(client, component)
        versioning = item.versioning
        known = versioning.available_versions or [entry.version for entry in versioning.changelog.entries]
        for version in (from_version, to_version):
            if version not in known:
                _fail(f"Version {version} not found for {component}. Available: {', '.join(known)}")

        if code:
            old = client.fetch_component_version(component, from_version, item)
            new = client.fetch_component_version(component, to_version, item)
            if old is None or new is None:
                _fail("Source for historical versions is only available from a local registry.")
            console.print(render_diff(unified_diff(old, new, f"v{from_version}", f"v{to_version}")))
            return

    console.print(f"[bold]Changes in {component} from {from_version} to {to_version}:[/bold]\n")
    entries = entries_between(versioning.changelog.entries, from_version, to_version)
    if entries:
        console.print(render_changelog(entries))
    else:
        console.print("No changes found between these versions.")


def _diff_local(component: str, code: bool, registry_url: str) -> None:
    cwd = Path.cwd()
    location = locate_component(component, cwd)
    if not location.exists:
        _fail(f"Component file not found: {location.path}")

    manager = LockFileManager(cwd)
    try:
        store = manager.load()
    except CorruptStateError as e:
        console.print(f"[yellow]⚠️  {escape(str(e))}[/yellow]")
        console.print("[yellow]Continuing without version tracking.[/yellow]")
        store = None

    record = get(store, component) if store else None
    report = verify_component(store, component, location.path) if store else None

    with RegistryClient(registry_url) as client:
        item = _fetch_versioned_item(client, component)
    versioning = item.versioning
    latest_version = versioning.current_version

    if record:
        suffix = " [yellow](modified)[/yellow]" if report and report.is_modified else ""
        console.print(f"Your version: [bold]{record.installed_version}[/bold]{suffix}")
    else:
        console.print("Your version: [dim]not tracked[/dim]")
    console.print(f"Latest version: [bold]{latest_version}[/bold]\n")

    if code:
        local = read_component_text(location.path)
        diff_text = unified_diff(local, extract_component_code(item), "your version", f"v{latest_version}")
        if diff_text:
            console.print(render_diff(diff_text))
        else:
            console.print("[green]Your copy matches the latest version.[/green]")
        return

    if record is None:
        latest = versioning.changelog.entries[0]
        console.print(f"[bold]Latest changes ({latest.version}):[/bold]")
        console.print(render_summary(latest))
        console.print(f"\nRun [bold]voidui add {component} --scan[/bold] to start tracking.")
        return

    if record.installed_version == latest_version:
        console.print("[green]✓ You are on the latest version.[/green]")
        return

    console.print(f"[bold]Changes from {record.installed_version} to {latest_version}:[/bold]")
    entries = entries_between(versioning.changelog.entries, record.installed_version, latest_version)
    if not entries:
        console.print("No changelog entries found.")
    for entry in entries:
        console.print(f"\n[bold]{entry.version}[/bold]")
        console.print(render_summary(entry))
    console.print(f"\nRun [bold]voidui update {component}[/bold] to update.")


def _prompt_changes() -> List[ChangelogChange]:
    changes = []
    types = [change_type.value for change_type in ChangeType]
    while True:
        change_type = Prompt.ask("Change type", choices=types, default="changed", console=console)
        description = ""
        while not description.strip():
            description = typer.prompt("Description")
        changes.append(ChangelogChange(type=change_type, description=description.strip()))
        if not typer.confirm("Add another change?", default=False):
            return changes


@app.command()
def snapshot(
    component: str = typer.Argument(..., help="Component name"),
    version: str = typer.Argument(..., help="Version to release (e.g., 1.1.0)"),
    registry_dir: Optional[Path] = typer.Option(
        None,
        "--registry-dir",
        help="Directory holding registry component sources"
    )
):
    """Freeze the current source of a registry component as a new version."""
    directory = registry_dir or _registry_dir(Path.cwd())
    component_file, _, versions_dir = component_paths(directory, component)

    if not component_file.exists():
        _fail(f'Component "{component}" not found (expected {component_file})')
    if not is_semver(version):
        _fail("Version must be in semver format (e.g., 1.0.0)")
    if (versions_dir / f"{version}{config.component_extension}").exists():
        _fail(f"Version {version} already exists for {component}")

    console.print(f"[bold]Creating snapshot {component}@{version}[/bold]")
    changes = _prompt_changes()
    breaking = typer.confirm("Is this a breaking change?", default=False)

    try:
        result = create_snapshot(directory, component, version, changes, breaking)
    except (ChangelogError, CorruptStateError) as e:
        _fail(str(e))

    console.print(f"[green]✓ Created {result.version_file}[/green]")
    console.print(f"[green]✓ Updated {result.changelog_file}[/green]")


@app.command("list")
def list_components():
    """List tracked components and whether they were modified locally."""
    cwd = Path.cwd()
    manager = LockFileManager(cwd)
    store = _load_store(manager)

    if store is None or not store.components:
        console.print("[yellow]No tracked components[/yellow]")
        return

    table = Table(title="Tracked Components")
    table.add_column("Component", style="cyan")
    table.add_column("Version")
    table.add_column("Installed")
    table.add_column("Checksum", style="dim")
    table.add_column("Status")

    for report in verify_project(store, cwd):
        record = store.components[report.component]
        table.add_row(
            report.component,
            record.installed_version,
            record.installed_at[:10],
            format_checksum(record.checksum),
            STATUS_STYLES[report.status]
        )

    console.print(table)


@app.command()
def remove(
    component: str = typer.Argument(..., help="Component name")
):
    """Stop tracking a component. The component file is left in place."""
    manager = LockFileManager(Path.cwd())
    store = _load_store(manager)

    if store is None or not is_tracked(store, component):
        _fail(f'Component "{component}" is not tracked in lock file.')

    manager.save(remove_record(store, component))
    console.print(f"[green]✓ Stopped tracking {component}[/green]")


if __name__ == "__main__":
    app()
