"""Post list and read-state commands."""

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .context import format_date, reader_context

console = Console()


def posts_command(
    ctx: typer.Context,
    refresh: bool = typer.Option(
        True,
        "--refresh/--no-refresh",
        help="Fetch subscribed feeds before listing",
    ),
    unread: bool = typer.Option(False, "--unread", help="Only list unread posts"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum posts to list", min=1),
) -> None:
    """List posts from all subscribed feeds, newest first."""
    with reader_context(ctx) as reader:
        report = asyncio.run(reader.reader.refresh_all(reader.user_id, fetch=refresh))

    for notice in report.notices:
        console.print(f"[yellow]⚠️  {notice}[/yellow]")

    posts = [post for post in report.posts if not (unread and post.read)]
    if not posts:
        console.print("[yellow]No posts to show.[/yellow]")
        return

    table = Table(title="All Posts")
    table.add_column("", style="yellow")
    table.add_column("Date", style="dim")
    table.add_column("Feed", style="magenta")
    table.add_column("Title", style="bold")
    table.add_column("ID", style="cyan")

    for post in posts[:limit]:
        table.add_row(
            "" if post.read else "●",
            format_date(post.published_at),
            post.feed_title or "-",
            post.title or "(untitled)",
            post.id,
        )

    console.print(table)


def show_command(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry ID"),
) -> None:
    """Show one post."""
    with reader_context(ctx) as reader:
        result = reader.reader.get_entry(reader.user_id, entry_id)

    if not result.ok:
        console.print(f"[red]Could not find item: {result.message}[/red]")
        raise typer.Exit(1)

    entry = result.value
    lines = [
        f"[bold]{entry.title or '(untitled)'}[/bold]",
        f"{entry.feed_title or ''} • {format_date(entry.published_at)}",
    ]
    if entry.authors:
        lines.append("By " + ", ".join(a.name or a.email or "?" for a in entry.authors))
    if entry.links:
        lines.append(f"[blue]{entry.links[0]}[/blue]")
    if entry.featured_image:
        lines.append(f"Image: {entry.featured_image}")
    if entry.summary:
        lines.append("")
        lines.append(entry.summary)
    if entry.categories:
        lines.append("")
        lines.append("[dim]" + ", ".join(entry.categories) + "[/dim]")

    console.print(Panel("\n".join(lines), style="dim" if entry.read else "none"))


def read_command(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry ID"),
) -> None:
    """Mark a post as read."""
    with reader_context(ctx) as reader:
        result = reader.reader.mark_read(reader.user_id, entry_id)

    if not result.ok:
        console.print(f"[red]❌ Could not mark as read: {result.message}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Marked as read: {result.value.title or entry_id}[/green]")


def unread_command(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry ID"),
) -> None:
    """Mark a post as unread."""
    with reader_context(ctx) as reader:
        result = reader.reader.mark_unread(reader.user_id, entry_id)

    if not result.ok:
        console.print(f"[red]❌ Could not mark as unread: {result.message}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Marked as unread: {result.value.title or entry_id}[/green]")
