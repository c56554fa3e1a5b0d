"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .context import CliState
from .feeds import feeds_app
from .init import init_command
from .posts import posts_command, read_command, show_command, unread_command

app = typer.Typer(
    name="feedshelf",
    help="feedshelf - a personal RSS/Atom reader",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: $FEEDSHELF_CONFIG or ~/.config/feedshelf/config.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    ctx.obj = CliState(config_path=config, verbose=verbose)


# Register commands
app.command("init")(init_command)
app.command("posts")(posts_command)
app.command("show")(show_command)
app.command("read")(read_command)
app.command("unread")(unread_command)
app.add_typer(feeds_app, name="feeds", help="Manage feed subscriptions")


if __name__ == "__main__":
    app()
