"""Shared setup for commands that work on the reader database."""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, Optional

import pendulum
import typer
from rich.console import Console

from ..config import Config, ConfigModel
from ..db import Stores, get_connection, init_database
from ..ingestion import RSSFetcher
from ..logging_config import setup_logging
from ..pipeline import ReaderOrchestrator, SubscriptionService

console = Console()


@dataclass
class CliState:
    """Options given before the command name."""

    config_path: Optional[Path] = None
    verbose: bool = False


@dataclass
class ReaderContext:
    """Everything a command needs, built from one open connection."""

    config: ConfigModel
    stores: Stores
    reader: ReaderOrchestrator
    subscriptions: SubscriptionService

    @property
    def user_id(self) -> int:
        return self.config.reader.user_id


def get_state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


@contextmanager
def reader_context(ctx: typer.Context) -> Generator[ReaderContext, None, None]:
    """Load config, open the database and wire up the services."""
    state = get_state(ctx)
    config = Config(state.config_path)

    try:
        settings = config.config
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'feedshelf init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    setup_logging(
        level="DEBUG" if state.verbose else settings.logging.level,
        log_dir=config.log_dir,
        retention_days=settings.logging.retention_days,
    )

    fetcher = RSSFetcher(timeout=settings.fetch.timeout, user_agent=settings.fetch.user_agent)
    read_collection = settings.reader.read_collection

    with get_connection(config.database_path) as conn:
        init_database(conn)
        stores = Stores.from_connection(conn)
        yield ReaderContext(
            config=settings,
            stores=stores,
            reader=ReaderOrchestrator(stores, fetcher, read_collection),
            subscriptions=SubscriptionService(stores, fetcher, read_collection),
        )


def format_date(value) -> str:
    """Long display form of a timestamp, e.g. "Monday, March 4, 2024"."""
    if value is None:
        return "-"
    return pendulum.instance(value).format("dddd, MMMM D, YYYY")
