"""Command-line interface for bookshelf.

Built with Typer for commands and Rich for beautiful output.
"""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .api import GoogleBooksClient
from .collection import (
    BookCard,
    CollectionEngine,
    DetailRecord,
    NoSelection,
    OperationResult,
    SearchFailed,
)
from .config import get_config
from .db import StoreError, get_db
from .db.schemas import CollectionName, LibraryFilter, ReadingStatus, SaveTarget, SortOrder

# Create the main app
app = typer.Typer(
    name="bookshelf",
    help="Search for books and keep a reading library and wishlist.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def format_card_table(cards: list[BookCard], title: str = "Books") -> Table:
    """Create a rich table for displaying book cards."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Authors", style="green", max_width=25)
    table.add_column("Status", style="yellow")
    table.add_column("Progress", justify="center")

    for i, card in enumerate(cards, 1):
        table.add_row(
            str(i),
            card.id,
            card.title or "-",
            card.authors,
            card.badge or "-",
            f"{card.progress}%" if card.progress is not None else "-",
        )

    return table


def show_detail(record: DetailRecord) -> None:
    """Display the detail panel for the selected book."""
    lines = [
        f"[bold]{record.title}[/bold]",
        f"by {record.authors}",
        f"Category: {record.category}",
        record.pages,
    ]
    if record.published_date:
        lines.append(f"Published: {record.published_date}")
    lines.append("")
    lines.append(record.description)
    lines.append("")
    lines.append(f"Cover: {record.thumbnail_url}")
    if record.preview_url:
        lines.append(f"Preview: {record.preview_url}")

    console.print(Panel("\n".join(lines), title=f"Book Details ({record.id})"))


def warn_unsaved(result: OperationResult) -> None:
    """Warn when an operation could not be written to disk."""
    if result.persist_error is not None:
        print_warning(f"Changes were not saved to disk: {result.persist_error}")


def report(result: OperationResult, message: str) -> None:
    """Print the outcome of a mutating operation."""
    print_success(message)
    warn_unsaved(result)


def build_engine() -> CollectionEngine:
    """Wire up the engine from configuration and restore saved collections."""
    config = get_config()
    db = get_db(str(config.db_path))
    client = GoogleBooksClient(
        api_key=config.google_books_api_key,
        timeout=config.search_timeout,
    )
    engine = CollectionEngine(db, client)
    try:
        engine.restore()
    except StoreError as e:
        print_error(f"Could not read saved collections: {e}")
        raise typer.Exit(1)
    return engine


def run_search(
    engine: CollectionEngine, query: str, category: str, sort: SortOrder
) -> list[BookCard]:
    """Run a search, exiting on an empty query or a provider failure."""
    if not query.strip():
        print_error("Search query must not be empty")
        raise typer.Exit(1)

    print_info(f"Searching Google Books for: {query}...")
    try:
        asyncio.run(engine.search(query, category=category, sort=sort))
    except SearchFailed as e:
        print_error(str(e))
        raise typer.Exit(1)
    return engine.search_view()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Search for books and keep a reading library and wishlist."""
    config = get_config()
    logging.basicConfig(
        level="DEBUG" if verbose else config.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )

    errors = config.validate()
    for error in errors:
        print_warning(error)


# ============================================================================
# Search Commands
# ============================================================================


@app.command()
def search(
    query: str = typer.Argument(..., help="Search terms"),
    category: str = typer.Option("all", "--category", "-c", help="Subject filter"),
    sort: SortOrder = typer.Option(SortOrder.RELEVANCE, "--sort", "-s", help="Result order"),
) -> None:
    """Search the Google Books catalog."""
    engine = build_engine()
    cards = run_search(engine, query, category, sort)

    if not cards:
        console.print(f"[dim]No books found matching: {query}[/dim]")
        return

    console.print(format_card_table(cards, title=f"Results for '{query}'"))


@app.command()
def add(
    query: str = typer.Argument(..., help="Book title to search for"),
    pick: Optional[int] = typer.Option(None, "--pick", "-p", help="Result number to add"),
    status: SaveTarget = typer.Option(SaveTarget.WISHLIST, "--status", "-s", help="Where to save"),
    progress: int = typer.Option(0, "--progress", min=0, max=100, help="Starting progress (%)"),
    category: str = typer.Option("all", "--category", "-c", help="Subject filter"),
    sort: SortOrder = typer.Option(SortOrder.RELEVANCE, "--sort", help="Result order"),
) -> None:
    """Add a book by searching Google Books.

    Search for a book, pick one of the results, and save it to your library
    or wishlist.
    """
    engine = build_engine()
    cards = run_search(engine, query, category, sort)

    if not cards:
        print_error(f"No books found matching: {query}")
        raise typer.Exit(1)

    if pick is None:
        console.print(format_card_table(cards, title=f"Results for '{query}'"))
        pick = typer.prompt("\nSelect book number (0 to cancel)", type=int, default=1)

    if pick <= 0 or pick > len(cards):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    engine.select_for_detail(cards[pick - 1].id)
    record = engine.detail_view()
    if record is not None:
        show_detail(record)

    try:
        result = engine.save_selected(status, start_progress=progress)
    except NoSelection as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not result.changed:
        print_warning(f"Already in your {'wishlist' if status == SaveTarget.WISHLIST else 'library'}")
    report(result, f"Saved: {record.title if record else cards[pick - 1].title} ({status.value})")


@app.command()
def details(
    item_id: str = typer.Argument(..., help="Book ID"),
    query: Optional[str] = typer.Option(
        None, "--query", "-q", help="Search first so fresh results take precedence"
    ),
) -> None:
    """Show details for a saved (or searched) book."""
    engine = build_engine()
    if query:
        run_search(engine, query, "all", SortOrder.RELEVANCE)

    engine.select_for_detail(item_id)
    record = engine.detail_view()
    if record is None:
        print_error(f"No book found with ID: {item_id}")
        raise typer.Exit(1)

    show_detail(record)


# ============================================================================
# Collection Commands
# ============================================================================


@app.command()
def remove(
    item_id: str = typer.Argument(..., help="Book ID"),
    from_: CollectionName = typer.Option(
        CollectionName.LIBRARY, "--from", "-f", help="Collection to remove from"
    ),
) -> None:
    """Remove a book from your library or wishlist."""
    engine = build_engine()
    result = engine.remove_item(item_id, from_)
    if not result.changed:
        print_info(f"{item_id} was not in your {from_.value}")
        warn_unsaved(result)
        return
    report(result, f"Removed {item_id} from {from_.value}")


@app.command()
def progress(
    item_id: str = typer.Argument(..., help="Book ID"),
    value: int = typer.Argument(..., min=0, max=100, help="Progress (%)"),
) -> None:
    """Update reading progress for a library book."""
    engine = build_engine()
    try:
        result = engine.update_progress(item_id, value)
    except KeyError:
        print_error(f"No library book with ID: {item_id}")
        raise typer.Exit(1)
    report(result, f"Progress for {item_id} set to {value}%")


@app.command()
def status(
    item_id: str = typer.Argument(..., help="Book ID"),
    new_status: ReadingStatus = typer.Argument(..., help="reading or completed"),
) -> None:
    """Change the status of a library book."""
    engine = build_engine()
    try:
        result = engine.set_status(item_id, new_status)
    except KeyError:
        print_error(f"No library book with ID: {item_id}")
        raise typer.Exit(1)
    report(result, f"{item_id} marked as {new_status.value}")


@app.command()
def library(
    filter: LibraryFilter = typer.Option(LibraryFilter.ALL, "--filter", "-f", help="Filter by status"),
) -> None:
    """List books in your library."""
    engine = build_engine()
    cards = engine.library_view(filter)

    if not cards:
        console.print("[dim]No books found.[/dim]")
        return

    console.print(format_card_table(cards, title="Library"))


@app.command()
def wishlist() -> None:
    """List books on your wishlist."""
    engine = build_engine()
    cards = engine.wishlist_view()

    if not cards:
        console.print("[dim]Your wishlist is empty.[/dim]")
        return

    console.print(format_card_table(cards, title="Wishlist"))


@app.command()
def stats() -> None:
    """Show collection statistics."""
    engine = build_engine()
    summary = engine.stats()

    table = Table(title="Bookshelf Overview", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Total books", str(summary.total_library))
    table.add_row("Currently reading", str(summary.currently_reading))
    table.add_row("Wishlist", str(summary.wishlist_count))

    console.print(table)


# ============================================================================
# Version Command
# ============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"bookshelf version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
