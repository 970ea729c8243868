"""Label Catalog CLI - Public catalog browsing."""
import typer
from rich.console import Console
from rich.table import Table

from catalog.cli.auth import get_db_session

app = typer.Typer()
console = Console()


@app.command()
def albums(
    search: str = typer.Option(None, "--search", "-s", help="Match name, artist or catalog number"),
):
    """List public albums, newest release first."""
    from catalog.errors import CatalogError
    from catalog.services.catalog import CatalogService
    from catalog.utils import format_catalog_number

    db = get_db_session()
    try:
        try:
            rows = CatalogService(db).list_public_albums(search=search)
        except CatalogError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

        table = Table(title=f"Albums ({len(rows)})")
        table.add_column("ID", style="dim")
        table.add_column("Catalog #", style="magenta")
        table.add_column("Album", style="cyan")
        table.add_column("Artist")
        table.add_column("Type")
        table.add_column("Released")

        for a in rows:
            table.add_row(
                str(a.id),
                format_catalog_number(a.catalog_number),
                a.album_name,
                a.album_artist,
                a.album_type.value,
                str(a.release_date or ""),
            )

        console.print(table)
    finally:
        db.close()


@app.command()
def album(album_id: int = typer.Argument(..., help="Album ID")):
    """Show a public album."""
    from catalog.schemas.album import AlbumResponse
    from catalog.services.catalog import CatalogService

    db = get_db_session()
    try:
        row = CatalogService(db).get_public_album(album_id)
        if not row:
            console.print(f"[red]Album {album_id} not found[/red]")
            raise typer.Exit(1)

        info = AlbumResponse.from_model(row)
        table = Table(title=info.album_name, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Artist", info.album_artist)
        table.add_row("Catalog #", info.catalog_number_display)
        table.add_row("Type", info.album_type.value)
        table.add_row("Status", info.status.value)
        table.add_row("Released", str(info.release_date or ""))
        table.add_row("Duration", info.album_duration or "")
        table.add_row("Label", info.label or "")
        if info.producers:
            table.add_row("Producers", ", ".join(info.producers))
        for platform, url in info.streaming_links.items():
            table.add_row(platform, url)

        console.print(table)
    finally:
        db.close()


@app.command()
def tracks(album_id: int = typer.Argument(..., help="Album ID")):
    """List the public tracks of a public album."""
    from catalog.services.catalog import CatalogService
    from catalog.utils import interval_to_duration

    db = get_db_session()
    try:
        service = CatalogService(db)
        row = service.get_public_album(album_id)
        if not row:
            console.print(f"[red]Album {album_id} not found[/red]")
            raise typer.Exit(1)

        table = Table(title=f"{row.album_name} - {row.album_artist}")
        table.add_column("#", justify="right")
        table.add_column("Title", style="cyan")
        table.add_column("Duration", justify="right")
        table.add_column("Status")

        for t in service.list_tracks(album_id, public_only=True):
            table.add_row(
                str(t.track_number),
                t.track_name,
                interval_to_duration(t.duration),
                t.track_status.value,
            )

        console.print(table)
    finally:
        db.close()
