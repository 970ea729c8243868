"""Label Catalog CLI - Authentication commands."""
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from catalog.config import settings

app = typer.Typer()
console = Console()


def token_file() -> Path:
    """Token storage location."""
    return Path(settings.state_dir) / "token.json"


def bootstrap_flag_file() -> Path:
    """Last user id the admin bootstrap was attempted for."""
    return Path(settings.state_dir) / "bootstrap.json"


def get_db_session():
    """Get a database session."""
    from catalog.database import SessionLocal
    return SessionLocal()


def save_token(token: str, username: str):
    """Save token to file."""
    path = token_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"token": token, "username": username}))
    path.chmod(0o600)


def load_token() -> Optional[dict]:
    """Load token from file."""
    path = token_file()
    if path.exists():
        try:
            return json.loads(path.read_text())
        except ValueError:
            return None
    return None


def clear_token():
    """Remove stored token."""
    path = token_file()
    if path.exists():
        path.unlink()


@app.command()
def login(
    username: str = typer.Argument(..., help="Username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
):
    """Login, attempt the first-admin bootstrap, and store the token."""
    db = get_db_session()
    try:
        from catalog.bootstrap import FileFlagStore, RoleBootstrap
        from catalog.services.auth import AuthService

        auth_service = AuthService(db)
        user = auth_service.authenticate(username, password)

        if not user:
            console.print("[red]Invalid credentials[/red]")
            raise typer.Exit(1)

        if RoleBootstrap(db, FileFlagStore(bootstrap_flag_file())).attempt(user.id):
            db.refresh(user)
            console.print("[cyan]No admin existed: you are now the catalog admin[/cyan]")

        token = auth_service.create_token(user.id)
        save_token(token, user.username)

        console.print(f"[green]Logged in as {user.username}[/green]")
        if user.is_admin:
            console.print("[cyan]Admin privileges enabled[/cyan]")
    finally:
        db.close()


@app.command()
def register(
    username: str = typer.Argument(..., help="Username"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
):
    """Create an account with the regular user role."""
    if len(password) < 6:
        console.print("[red]Password must be at least 6 characters[/red]")
        raise typer.Exit(1)

    db = get_db_session()
    try:
        from catalog.errors import CatalogError
        from catalog.services.auth import AuthService

        try:
            AuthService(db).create_user(username, password)
        except CatalogError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

        console.print(f"[green]User '{username}' created. Run 'label-catalog auth login {username}'.[/green]")
    finally:
        db.close()


@app.command()
def logout():
    """Clear stored authentication token."""
    clear_token()
    console.print("[green]Logged out successfully[/green]")


@app.command()
def whoami():
    """Show current authenticated user."""
    user, db = get_current_user()
    try:
        table = Table(title="Current User")
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Username", user.username)
        table.add_row("Roles", ", ".join(sorted(r.role.value for r in user.roles)))
        table.add_row("Admin", "Yes" if user.is_admin else "No")
        table.add_row("Created", str(user.created_at))

        console.print(table)
    finally:
        db.close()


def get_current_user(require_admin: bool = False):
    """Get current user from stored token. Raises Exit if not authenticated."""
    token_data = load_token()

    if not token_data:
        console.print("[red]Not logged in. Run 'label-catalog auth login' first.[/red]")
        raise typer.Exit(1)

    db = get_db_session()
    from catalog.services.auth import AuthService

    auth_service = AuthService(db)
    user_id = auth_service.decode_token(token_data.get("token", ""))

    if not user_id:
        console.print("[red]Token expired. Please login again.[/red]")
        clear_token()
        db.close()
        raise typer.Exit(1)

    user = auth_service.get_user_by_id(user_id)
    if not user:
        console.print("[red]User not found. Please login again.[/red]")
        clear_token()
        db.close()
        raise typer.Exit(1)

    if require_admin and not user.is_admin:
        console.print("[red]Admin access required[/red]")
        db.close()
        raise typer.Exit(1)

    return user, db
