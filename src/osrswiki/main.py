# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Composition root: owns the search/feed services and tile stores it opens

import json as jsonlib
from pathlib import Path

import asyncclick as click
from rich.console import Console

from osrswiki.config import get_config
from osrswiki.feed import FeedError, FeedService
from osrswiki.maps import MapFloorLocator, TileStore, TileStoreOpenError, game_to_geographic
from osrswiki.search import SearchError, SearchService
from osrswiki.utils.logging import LoggingMode, configure_logging, get_logging_status, with_operation_context
from osrswiki.utils.retry import wiki_retry
from osrswiki.utils.rich_tables import (
    create_feed_tables,
    create_key_value_table,
    create_logging_status_table,
    create_search_results_table,
    create_tile_metadata_table,
    print_rich_table,
)

console = Console()


def _print_json(data) -> None:
    click.echo(jsonlib.dumps(data, indent=2, default=str))


@click.command()
@click.argument("query")
@click.option("--limit", "-n", type=int, default=None, help="Results per page (default: configured page size)")
@click.option("--offset", type=int, default=0, help="Index of the first result")
@click.option("--retries", type=int, default=3, help="Attempts on transient network failures")
@click.pass_context
async def search(ctx, query: str, limit: int | None, offset: int, retries: int):
    """
    🔍 Search the wiki.
    """
    json_output = ctx.obj["json_output"]

    async with SearchService() as service:
        run_search = wiki_retry(max_attempts=max(retries, 1))(service.search)
        try:
            response = await run_search(query, limit=limit, offset=offset)
        except SearchError as e:
            console.print(f"[red]❌ Search failed ({type(e).__name__}): {e}[/red]")
            raise click.exceptions.Exit(1) from e

    if json_output:
        _print_json(response.model_dump())
        return

    if not response.results:
        console.print("[yellow]No results.[/yellow]")
        return

    print_rich_table(console, create_search_results_table(query.strip(), response))


@click.command()
@click.option("--retries", type=int, default=3, help="Attempts on transient network failures")
@click.pass_context
async def feed(ctx, retries: int):
    """
    📰 Show the wiki homepage feed.
    """
    json_output = ctx.obj["json_output"]

    async with FeedService() as service:
        try:
            wiki_feed = await wiki_retry(max_attempts=max(retries, 1))(service.fetch_feed)()
        except FeedError as e:
            console.print(f"[red]❌ Feed failed ({type(e).__name__}): {e}[/red]")
            raise click.exceptions.Exit(1) from e

    if json_output:
        _print_json(wiki_feed.model_dump())
        return

    tables = create_feed_tables(wiki_feed)
    if not tables:
        console.print("[yellow]The homepage had no recognisable feed sections.[/yellow]")
    for table in tables:
        print_rich_table(console, table)


def _open_store(path: Path) -> TileStore:
    try:
        return TileStore.open(path)
    except TileStoreOpenError as e:
        console.print(f"[red]❌ Offline maps unavailable: {e}[/red]")
        raise click.exceptions.Exit(1) from e


@click.command(name="tile-info")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def tile_info(ctx, path: Path):
    """
    🧱 Show metadata of an .mbtiles tile store.
    """
    with _open_store(path) as store:
        metadata = store.get_metadata()
        raw = store.get_raw_metadata()

    if ctx.obj["json_output"]:
        _print_json({"metadata": metadata.model_dump(), "raw": raw})
        return

    print_rich_table(console, create_tile_metadata_table(str(path), metadata, raw))


@click.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("zoom", type=int)
@click.argument("column", type=int)
@click.argument("row", type=int)
@click.option("--out", "-o", type=click.Path(path_type=Path), help="Write the tile bytes to this file")
@click.pass_context
def tile(ctx, path: Path, zoom: int, column: int, row: int, out: Path | None):
    """
    🗺️ Look up one tile by XYZ address.
    """
    with with_operation_context("tile_lookup", zoom=zoom, column=column, row=row) as logger:
        with _open_store(path) as store:
            data = store.get_tile(zoom, column, row)

        logger.info("Tile lookup complete", found=data is not None)

    if data is None:
        console.print(f"[yellow]No tile at {zoom}/{column}/{row}[/yellow]")
        raise click.exceptions.Exit(1)

    if out:
        out.write_bytes(data)

    if ctx.obj["json_output"]:
        _print_json({"zoom": zoom, "column": column, "row": row, "bytes": len(data), "written_to": out})
        return

    console.print(f"✅ Tile {zoom}/{column}/{row}: [bold green]{len(data):,} bytes[/bold green]")
    if out:
        console.print(f"💾 Written to {out}")


@click.command()
@click.option("--map-dir", type=click.Path(path_type=Path), help="Directory checked before the bundled maps")
@click.pass_context
def floors(ctx, map_dir: Path | None):
    """
    🏰 List the map floors that have a tile store available.
    """
    locator = MapFloorLocator(map_directory=map_dir)
    found = {floor: locator.locate_floor(floor) for floor in locator.available_floors()}

    if ctx.obj["json_output"]:
        _print_json({str(floor): str(path) for floor, path in found.items()})
        return

    if not found:
        searched = ", ".join(str(p) for p in locator.search_paths)
        console.print(f"[yellow]No map floors found in {searched}[/yellow]")
        return

    print_rich_table(
        console,
        create_key_value_table(
            title="🏰 Map floors", data={f"Floor {floor}": str(path) for floor, path in found.items()}
        ),
    )


@click.command(name="game-to-geo")
@click.argument("gx", type=float)
@click.argument("gy", type=float)
@click.pass_context
def game_to_geo(ctx, gx: float, gy: float):
    """
    🧭 Convert in-game coordinates to latitude/longitude.
    """
    lat, lon = game_to_geographic(gx, gy)

    if ctx.obj["json_output"]:
        _print_json({"gx": gx, "gy": gy, "lat": lat, "lon": lon})
        return

    print_rich_table(
        console,
        create_key_value_table(
            title="🧭 Game -> Geographic",
            data={"Game": f"({gx:g}, {gy:g})", "Latitude": f"{lat:.6f}", "Longitude": f"{lon:.6f}"},
        ),
    )


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    # --json always wants machine-readable logs; otherwise OSRSWIKI_LOG_MODE decides
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🧙 OSRS Wiki - search, homepage feed and offline map tiles

    Command-line access to the Old School RuneScape wiki core services.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(search)
app.add_command(feed)
app.add_command(tile_info)
app.add_command(tile)
app.add_command(floors)
app.add_command(game_to_geo)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
