"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, default_config_path, save_config
from ..db import get_connection, init_database, validate_connection
from .context import get_state

console = Console()


def init_command(
    ctx: typer.Context,
    db_path: Optional[Path] = typer.Option(
        None,
        "--db-path",
        "-d",
        help="SQLite database file",
    ),
    user_id: int = typer.Option(1, "--user-id", "-u", help="User the CLI acts as", min=1),
    timeout: float = typer.Option(20.0, "--timeout", help="Per-feed fetch timeout in seconds"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
) -> None:
    """Create the configuration file and the database schema."""
    console.print(Panel.fit("feedshelf - Initialization", style="bold blue"))

    config_path = get_state(ctx).config_path or default_config_path()
    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path} (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    config = ConfigModel(
        database={"path": str(db_path)} if db_path else {},
        reader={"user_id": user_id},
        fetch={"timeout": timeout},
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    database_path = Path(config.database.path).expanduser()
    try:
        with get_connection(database_path) as conn:
            if not validate_connection(conn):
                console.print("[red]❌ Database connection failed![/red]")
                raise typer.Exit(1)
            init_database(conn)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"✅ Database schema initialized: {database_path}")
    console.print(
        Panel(
            f"[green]✅ feedshelf initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Database: {database_path}\n\n"
            f"Next steps:\n"
            f"1. Subscribe: [bold]feedshelf feeds add https://example.com/feed.xml[/bold]\n"
            f"2. Read: [bold]feedshelf posts[/bold]",
            style="green",
        )
    )
