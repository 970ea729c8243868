"""Label Catalog CLI - Main entry point."""
import typer
from rich.console import Console
from rich.table import Table

from catalog.cli import auth, catalog, admin

app = typer.Typer(
    name="label-catalog",
    help="Label Catalog - Music label catalog manager",
    add_completion=True,
)

console = Console()

# Add subcommands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(catalog.app, name="catalog", help="Public catalog browsing")
app.add_typer(admin.app, name="admin", help="Admin commands")


@app.command()
def version():
    """Show version information."""
    from catalog import __version__
    console.print(f"Label Catalog v{__version__}")


@app.command()
def status():
    """Check system status."""
    from pathlib import Path
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError
    from catalog.config import settings
    from catalog.database import engine

    table = Table(title="Label Catalog Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")

    # Check database
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        table.add_row("Database", "Connected")
    except SQLAlchemyError as e:
        table.add_row("Database", f"[red]Error: {e}[/red]")

    # Check paths
    for name, path in [
        ("Artwork", settings.artwork_dir),
        ("CLI state", settings.state_dir),
    ]:
        p = Path(path)
        if p.exists():
            table.add_row(name, f"OK ({path})")
        else:
            table.add_row(name, f"[yellow]Missing ({path})[/yellow]")

    table.add_row("Environment", settings.environment)
    console.print(table)


if __name__ == "__main__":
    app()
