"""Label Catalog CLI - Admin commands."""
import json
import shlex
from typing import Any

import typer
from rich.console import Console
from rich.table import Table
from rich.prompt import Confirm, Prompt

from catalog.cli.auth import get_current_user

app = typer.Typer()
console = Console()

PANEL_HELP = """\
Commands:
  tab album|track|standalone_track   switch entity
  album <id>                         select the album whose tracks you manage
  list                               list entries for the current tab
  new                                open a blank form
  edit <id>                          open a stored entry
  set <field> <value>                set a form field (JSON values allowed)
  show                               show the open form and its errors
  save                               validate and write the open form
  cancel                             discard the open form
  delete <id>                        delete an entry
  help | quit"""


@app.command("albums")
def list_albums():
    """List all albums, including non-public ones."""
    user, db = get_current_user(require_admin=True)
    try:
        from catalog.services.catalog import CatalogService
        from catalog.utils import format_catalog_number

        rows = CatalogService(db).list_albums()

        table = Table(title=f"All albums ({len(rows)})")
        table.add_column("ID", style="dim")
        table.add_column("Catalog #", style="magenta")
        table.add_column("Album", style="cyan")
        table.add_column("Artist")
        table.add_column("Status")
        table.add_column("Visibility")

        for a in rows:
            table.add_row(
                str(a.id),
                format_catalog_number(a.catalog_number),
                a.album_name,
                a.album_artist,
                a.status.value,
                a.visibility.value,
            )

        console.print(table)
    finally:
        db.close()


@app.command("delete-album")
def delete_album(
    album_id: int = typer.Argument(..., help="Album ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Delete an album and all of its tracks."""
    user, db = get_current_user(require_admin=True)
    try:
        from catalog.errors import CatalogError
        from catalog.services.catalog import CatalogService

        service = CatalogService(db)
        try:
            album = service.require_album(album_id)
            if not force:
                if not Confirm.ask(f"Delete '{album.album_name}' and its tracks?"):
                    console.print("Cancelled")
                    return
            service.delete_album(album_id)
        except CatalogError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

        console.print(f"[green]Album {album_id} deleted[/green]")
    finally:
        db.close()


@app.command("grant")
def grant(
    username: str = typer.Argument(..., help="User to grant the role to"),
    role: str = typer.Option("admin", "--role", "-r", help="admin or user"),
):
    """Grant a role to a user."""
    _change_role(username, role, revoke=False)


@app.command("revoke")
def revoke(
    username: str = typer.Argument(..., help="User to revoke the role from"),
    role: str = typer.Option("admin", "--role", "-r", help="admin or user"),
):
    """Revoke a role from a user."""
    _change_role(username, role, revoke=True)


def _change_role(username: str, role: str, revoke: bool):
    user, db = get_current_user(require_admin=True)
    try:
        from catalog.errors import CatalogError
        from catalog.models.enums import AppRole
        from catalog.services.auth import AuthService
        from catalog.services.roles import RoleService

        try:
            app_role = AppRole(role)
        except ValueError:
            console.print(f"[red]Unknown role '{role}'[/red]")
            raise typer.Exit(1)

        target = AuthService(db).get_user_by_username(username)
        if not target:
            console.print(f"[red]User '{username}' not found[/red]")
            raise typer.Exit(1)

        roles = RoleService(db)
        try:
            if revoke:
                roles.revoke(target.id, app_role)
            else:
                roles.grant(target.id, app_role)
        except CatalogError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

        action = "revoked from" if revoke else "granted to"
        console.print(f"[green]Role '{app_role.value}' {action} {username}[/green]")
    finally:
        db.close()


@app.command("panel")
def panel():
    """Interactive admin panel for albums, tracks and standalone tracks."""
    user, db = get_current_user(require_admin=True)
    try:
        from catalog.workflow import AdminWorkflow

        workflow = AdminWorkflow(db)
        console.print(f"[cyan]Admin panel[/cyan] - signed in as {user.username}. Type 'help'.")
        while True:
            line = Prompt.ask(_prompt(workflow), default="quit")
            if not run_panel_command(workflow, line):
                break
    finally:
        db.close()


def _prompt(workflow) -> str:
    state = workflow.state
    album = f" album={state.album_id}" if state.album_id else ""
    return f"({state.entity.value}/{state.mode.value}{album})"


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def run_panel_command(workflow, line: str) -> bool:
    """Run one panel command. Returns False when the panel should exit."""
    from catalog.errors import CatalogError
    from catalog.forms import EntityKind

    try:
        parts = shlex.split(line)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]
    try:
        if command in ("quit", "exit"):
            return False
        elif command == "help":
            console.print(PANEL_HELP)
        elif command == "tab" and args:
            workflow.select_tab(EntityKind(args[0]))
        elif command == "album" and args:
            workflow.select_album(int(args[0]))
        elif command == "list":
            _print_entries(workflow)
        elif command == "new":
            workflow.start_create()
            _print_form(workflow)
        elif command == "edit" and args:
            workflow.start_edit(int(args[0]))
            _print_form(workflow)
        elif command == "set" and len(args) >= 2:
            workflow.update_field(args[0], _parse_value(" ".join(args[1:])))
        elif command == "show":
            _print_form(workflow)
        elif command == "save":
            row = workflow.submit()
            if row is None:
                console.print("[yellow]Not saved. Fix these fields:[/yellow]")
                for field, message in workflow.state.form.errors.items():
                    console.print(f"  {field}: {message}", markup=False)
            else:
                console.print("[green]Saved[/green]")
        elif command == "cancel":
            workflow.cancel()
        elif command == "delete" and args:
            workflow.delete(int(args[0]))
            console.print("[green]Deleted[/green]")
        else:
            console.print("[yellow]Unknown command. Type 'help'.[/yellow]")
    except (CatalogError, ValueError, RuntimeError) as e:
        console.print(f"[red]{e}[/red]")
    return True


def _print_entries(workflow):
    from catalog.forms import EntityKind
    from catalog.utils import format_catalog_number, interval_to_duration

    entity = workflow.state.entity
    rows = workflow.list_entries()
    table = Table(title=f"{entity.value} ({len(rows)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Detail")
    table.add_column("Visibility")

    for row in rows:
        if entity == EntityKind.ALBUM:
            table.add_row(
                str(row.id),
                row.album_name,
                format_catalog_number(row.catalog_number),
                row.visibility.value,
            )
        else:
            detail = interval_to_duration(row.duration)
            if entity == EntityKind.TRACK:
                detail = f"#{row.track_number}  {detail}"
            table.add_row(str(row.track_id), row.track_name, detail, row.visibility.value)

    console.print(table)


def _print_form(workflow):
    form = workflow.state.form
    if form is None:
        console.print("No form is open")
        return
    if form.notice:
        console.print(f"[yellow]{form.notice}[/yellow]")

    table = Table(show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_column("Error", style="red")

    for name, value in form.values.items():
        errors = [msg for field, msg in form.errors.items() if field == name or field.startswith(name + ".")]
        table.add_row(name, json.dumps(value) if not isinstance(value, str) else value, "; ".join(errors))

    shown = tuple(form.values)
    for field, msg in form.errors.items():
        if field.split(".", 1)[0] not in shown:
            table.add_row(field, "", msg)

    console.print(table)
