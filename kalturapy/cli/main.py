"""Kaltura CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="kalturapy",
    help="Kaltura API CLI",
    add_completion=False
)
console = Console()

DEFAULT_ENDPOINT = "https://www.kaltura.com"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def make_client(endpoint: str, ks: Optional[str], chunk_size: Optional[int] = None, sequential: bool = False):
    from kalturapy import KalturaClient

    config = KalturaClient.create_config(
        endpoint=endpoint,
        chunk_size=chunk_size,
        sequential=sequential
    )
    return KalturaClient(config, ks=ks)


def require_ks(ks: Optional[str]) -> str:
    if not ks:
        console.print("[red]Missing session. Pass --ks or set KALTURA_KS.[/red]")
        raise typer.Exit(1)
    return ks


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Kaltura API command line client."""
    if verbose:
        from kalturapy import setup_logging
        logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
        setup_logging(logging.DEBUG)


@app.command()
def ping(
    endpoint: str = typer.Option(DEFAULT_ENDPOINT, "--endpoint", "-e", envvar="KALTURA_ENDPOINT", help="Service URL"),
    ks: str = typer.Option(None, "--ks", envvar="KALTURA_KS", help="Kaltura session"),
):
    """Check that the service answers."""
    from kalturapy.types import SystemPingAction

    async def do_ping():
        async with make_client(endpoint, ks) as client:
            try:
                result = await client.request(SystemPingAction())
            except Exception as e:
                console.print(f"[red]Ping failed: {e}[/red]")
                raise typer.Exit(1)

        if result:
            console.print(f"[green]{endpoint} is up[/green]")
        else:
            console.print(f"[yellow]{endpoint} answered but did not confirm[/yellow]")

    run_async(do_ping())


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True),
    endpoint: str = typer.Option(DEFAULT_ENDPOINT, "--endpoint", "-e", envvar="KALTURA_ENDPOINT", help="Service URL"),
    ks: str = typer.Option(None, "--ks", envvar="KALTURA_KS", help="Kaltura session"),
    chunk_size: int = typer.Option(None, "--chunk-size", "-c", help="Chunk size in bytes"),
    sequential: bool = typer.Option(False, "--sequential", "-s", help="Upload chunks one after the other"),
    entry_name: str = typer.Option(None, "--entry-name", "-n", help="Create a media entry with this name"),
):
    """Upload a file, optionally attaching it to a new media entry."""
    from kalturapy.core.requests import KalturaMultiRequest
    from kalturapy.core.upload import UploadProgress
    from kalturapy.types import (
        KalturaMediaEntry,
        KalturaUploadedFileTokenResource,
        MediaAddAction,
        MediaAddContentAction,
        MediaType
    )

    require_ks(ks)

    async def do_upload():
        async with make_client(endpoint, ks, chunk_size, sequential) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)

                def on_progress(uploaded: int, total: int):
                    p = UploadProgress(total_bytes=total, uploaded_bytes=uploaded)
                    progress.update(task, completed=p.percentage)

                try:
                    token = await client.upload_file(file_path, progress_callback=on_progress)
                except Exception as e:
                    console.print(f"[red]Upload failed: {e}[/red]")
                    raise typer.Exit(1)

            console.print(f"[green]Uploaded:[/green] {token.file_name}")
            console.print(f"Token: {token.id}")
            console.print(f"Size: {file_path.stat().st_size:,} bytes")

            if not entry_name:
                return

            batch = KalturaMultiRequest(
                MediaAddAction(entry=KalturaMediaEntry(name=entry_name, media_type=MediaType.VIDEO)),
                MediaAddContentAction(
                    resource=KalturaUploadedFileTokenResource(token=token.id)
                ).set_dependency(('entryId', 0, 'id'))
            )
            responses = await client.multi_request(batch)
            error = responses.get_first_error()
            if error is not None:
                console.print(f"[red]Failed to create entry: {error}[/red]")
                raise typer.Exit(1)

            console.print(f"[green]Entry created:[/green] {responses[1].result.id}")

    run_async(do_upload())


@app.command()
def info(
    entry_id: str = typer.Argument(..., help="Media entry id"),
    endpoint: str = typer.Option(DEFAULT_ENDPOINT, "--endpoint", "-e", envvar="KALTURA_ENDPOINT", help="Service URL"),
    ks: str = typer.Option(None, "--ks", envvar="KALTURA_KS", help="Kaltura session"),
):
    """Show media entry details."""
    from kalturapy.types import MediaGetAction

    require_ks(ks)

    async def show_info():
        async with make_client(endpoint, ks) as client:
            try:
                entry = await client.request(MediaGetAction(entry_id=entry_id))
            except Exception as e:
                console.print(f"[red]Failed to get entry: {e}[/red]")
                raise typer.Exit(1)

        console.print(f"[bold]Name:[/bold] {entry.name}")
        console.print(f"[bold]Id:[/bold] {entry.id}")
        console.print(f"[bold]Status:[/bold] {entry.status}")
        console.print(f"[bold]Media type:[/bold] {entry.media_type}")
        if entry.duration:
            console.print(f"[bold]Duration:[/bold] {entry.duration}s")
        if entry.created_at:
            console.print(f"[bold]Created:[/bold] {entry.created_at.isoformat()}")

    run_async(show_info())


@app.command(name="list")
def list_entries(
    endpoint: str = typer.Option(DEFAULT_ENDPOINT, "--endpoint", "-e", envvar="KALTURA_ENDPOINT", help="Service URL"),
    ks: str = typer.Option(None, "--ks", envvar="KALTURA_KS", help="Kaltura session"),
    page_size: int = typer.Option(30, "--page-size", help="Entries per page"),
    page: int = typer.Option(1, "--page", help="Page index (1-based)"),
):
    """List media entries."""
    from kalturapy.types import KalturaFilterPager, KalturaMediaEntryFilter, MediaEntryOrderBy, MediaListAction

    require_ks(ks)

    async def do_list():
        async with make_client(endpoint, ks) as client:
            try:
                response = await client.request(MediaListAction(
                    filter=KalturaMediaEntryFilter(order_by=MediaEntryOrderBy.CREATED_AT_DESC),
                    pager=KalturaFilterPager(page_size=page_size, page_index=page)
                ))
            except Exception as e:
                console.print(f"[red]Failed to list entries: {e}[/red]")
                raise typer.Exit(1)

        table = Table()
        table.add_column("Id", style="cyan")
        table.add_column("Name")
        table.add_column("Status", justify="right")
        table.add_column("Created", style="dim")

        for entry in response.objects or []:
            created = entry.created_at.strftime("%Y-%m-%d %H:%M") if entry.created_at else "-"
            table.add_row(entry.id, entry.name or "", str(entry.status), created)

        console.print(table)
        console.print(f"{response.total_count} entries")

    run_async(do_list())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
