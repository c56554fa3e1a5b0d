"""Feed subscription commands."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from .context import format_date, reader_context

console = Console()
feeds_app = typer.Typer(help="Manage feed subscriptions")


@feeds_app.command("list")
def feeds_list(ctx: typer.Context) -> None:
    """List subscribed feeds."""
    with reader_context(ctx) as reader:
        feeds = reader.stores.feeds.find_by_user_id(reader.user_id)

    if not feeds.ok:
        console.print(f"[red]There was a problem getting your subscriptions: {feeds.message}[/red]")
        raise typer.Exit(1)

    if not feeds.value:
        console.print("[yellow]No subscriptions yet. Add one with 'feedshelf feeds add URL'.[/yellow]")
        return

    table = Table(title="Subscribed Feeds")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Slug", style="magenta")
    table.add_column("URL", style="blue")

    for feed in feeds.value:
        table.add_row(str(feed.id), feed.title or "-", feed.slug, feed.feed_link)

    console.print(table)


@feeds_app.command("add")
def feeds_add(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Feed URL"),
) -> None:
    """Subscribe to a feed."""
    with reader_context(ctx) as reader:
        result = asyncio.run(reader.subscriptions.subscribe(reader.user_id, url))

    if not result.ok:
        console.print(f"[red]❌ There was an error subscribing to the feed at {url}[/red]")
        console.print(f"[dim]{result.message}[/dim]")
        raise typer.Exit(1)

    feed = result.value
    console.print(f"[green]✅ You have successfully subscribed to {feed.title or feed.feed_link}[/green]")
    if feed.entries:
        console.print(f"  Stored {len(feed.entries)} entries")


@feeds_app.command("remove")
def feeds_remove(
    ctx: typer.Context,
    feed_id: int = typer.Argument(..., help="Feed ID (see 'feedshelf feeds list')"),
) -> None:
    """Unsubscribe from a feed. The feed and its entries stay stored."""
    with reader_context(ctx) as reader:
        result = reader.subscriptions.unsubscribe(reader.user_id, feed_id)

    if not result.ok:
        console.print(f"[red]❌ Could not unsubscribe: {result.message}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Unsubscribed from feed {feed_id}[/green]")


@feeds_app.command("show")
def feeds_show(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Feed slug"),
) -> None:
    """Show a feed page: its entries, newest first."""
    with reader_context(ctx) as reader:
        result = reader.reader.feed_page(reader.user_id, slug)

    if not result.ok:
        console.print(f"[red]There was an error getting the feed: {result.message}[/red]")
        raise typer.Exit(1)

    feed = result.value
    table = Table(title=feed.title or feed.feed_link)
    table.add_column("", style="yellow")
    table.add_column("Date", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("ID", style="cyan")

    for entry in feed.entries:
        table.add_row(
            "" if entry.read else "●",
            format_date(entry.published_at),
            entry.title or "(untitled)",
            entry.id,
        )

    console.print(table)
