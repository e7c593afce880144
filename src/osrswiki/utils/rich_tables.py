# ABOUTME: Rich table utilities for the command line
# ABOUTME: Pre-configured tables for search results, feed sections, tile store metadata and logging status

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from osrswiki.feed.models import WikiFeed
from osrswiki.maps.models import TileStoreMetadata
from osrswiki.search.models import SearchResponse


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key-value table.

    Args:
        title: Table title
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def create_search_results_table(query: str, response: SearchResponse) -> Table:
    def _truncate(text: str | None, length: int) -> str:
        if not text:
            return ""
        return text[:length] + "..." if len(text) > length else text

    rows = [
        [
            str(result.rank),
            result.display_title,
            result.namespace_name,
            _truncate(result.description, 80),
            "🖼️" if result.thumbnail_url else "",
        ]
        for result in response.results
    ]

    more = " (more available)" if response.has_more else ""
    return create_multi_column_table(
        title=f"🔍 {query!r}: {response.total_count:,} results{more}",
        columns=[
            ("#", "cyan"),
            ("Title", "bold white"),
            ("Namespace", "magenta"),
            ("Snippet", "dim white"),
            ("Image", "green"),
        ],
        rows=rows,
    )


def create_feed_tables(feed: WikiFeed) -> list[Table]:
    """Create one table per non-empty feed section."""
    tables = []

    if feed.recent_updates:
        tables.append(
            create_multi_column_table(
                title="📰 Recent updates",
                columns=[("Title", "bold white"), ("Summary", "white"), ("Link", "blue")],
                rows=[[u.title, u.snippet, u.article_url] for u in feed.recent_updates],
            )
        )

    if feed.announcements:
        tables.append(
            create_multi_column_table(
                title="📣 Wiki news",
                columns=[("Date", "cyan"), ("Announcement", "white")],
                rows=[[a.date, a.content] for a in feed.announcements],
            )
        )

    if feed.on_this_day:
        tables.append(
            create_multi_column_table(
                title=f"📅 {feed.on_this_day.title}",
                columns=[("Event", "white")],
                rows=[[event] for event in feed.on_this_day.events],
            )
        )

    if feed.popular_pages:
        tables.append(
            create_multi_column_table(
                title="⭐ Popular pages",
                columns=[("Page", "bold white"), ("Link", "blue")],
                rows=[[p.title, p.page_url] for p in feed.popular_pages],
            )
        )

    return tables


def create_tile_metadata_table(path: str, metadata: TileStoreMetadata, raw: dict[str, str]) -> Table:
    bounds = metadata.bounding_box
    data = {
        "📁 File": path,
        "🔎 Zoom range": (
            f"{metadata.min_zoom} - {metadata.max_zoom}" if metadata.min_zoom is not None else "Unknown"
        ),
        "🗺️ Bounds": (
            f"lat {bounds.min_lat:.4f}..{bounds.max_lat:.4f}, lon {bounds.min_lon:.4f}..{bounds.max_lon:.4f}"
            if bounds
            else "Unknown"
        ),
    }
    for key in sorted(set(raw) - {"bounds", "minzoom", "maxzoom"}):
        data[key] = raw[key]

    return create_key_value_table(
        title="🧱 Tile store",
        data=data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
