"""Main CLI entry point."""

import asyncio
import sys
from pathlib import Path
from typing import Any, Coroutine, Optional

import click

from .. import __version__
from ..config import ConfigManager
from ..core.models import DetailStatus
from ..core.services import AppController, WatchlistStore, WindowTitle
from ..infrastructure import Container, setup_logging
from ..utils import ConfigurationError, PopcornError
from .display import render_detail, render_search, render_summary, render_watched

BROWSE_HELP = """\
Type at least three characters to search. Commands:
  :open N     show details of result N
  :rate N     rate the shown movie (1-10)
  :add        add the shown movie to the watched list
  :back       close the details (same as :esc)
  :del ID     remove a movie from the watched list
  :watched    show the watched list
  :blur       leave the search box
  :enter      press Enter (focus search and clear it)
  :esc        press Escape
  :quit       leave"""


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="popcorn")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Popcorn Watchlist - search OMDb and keep track of what you watched."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Set OMDB_API_KEY in your environment or a .env file next to it.")

    except Exception as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration and watched list status."""
    config = ctx.obj["config"]
    container = ctx.obj["container"]

    click.echo("Popcorn Watchlist Status")
    click.echo("=" * 40)
    click.echo(f"OMDb URL: {config.omdb.base_url}")
    click.echo(f"OMDb Key Configured: {'✓' if config.omdb.api_key else '✗'}")
    click.echo(f"Store: {config.storage.path}")
    click.echo(f"Minimum Query Length: {config.search.min_query_length}")

    watchlist = container.get(WatchlistStore)
    click.echo(f"Watched Movies: {len(watchlist.list())}")


@cli.command()
@click.argument("query")
@click.pass_context
def search(ctx: click.Context, query: str) -> None:
    """Search OMDb for movies matching QUERY."""
    _run(_search(ctx.obj["container"], query))


@cli.command()
@click.argument("imdb_id")
@click.pass_context
def details(ctx: click.Context, imdb_id: str) -> None:
    """Show details of the movie IMDB_ID."""
    _run(_details(ctx.obj["container"], imdb_id))


@cli.command()
@click.argument("imdb_id")
@click.argument("rating", type=click.IntRange(1, 10))
@click.pass_context
def rate(ctx: click.Context, imdb_id: str, rating: int) -> None:
    """Rate the movie IMDB_ID and add it to the watched list."""
    _run(_rate(ctx.obj["container"], imdb_id, rating))


@cli.command()
@click.pass_context
def watched(ctx: click.Context) -> None:
    """List watched movies with summary statistics."""
    watchlist = ctx.obj["container"].get(WatchlistStore)
    render_summary(watchlist.summary())
    render_watched(watchlist.list())


@cli.command()
@click.argument("imdb_id")
@click.pass_context
def remove(ctx: click.Context, imdb_id: str) -> None:
    """Remove IMDB_ID from the watched list."""
    watchlist = ctx.obj["container"].get(WatchlistStore)
    try:
        removed = watchlist.remove(imdb_id)
    except PopcornError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Removed {removed} entr{'y' if removed == 1 else 'ies'}")


@cli.command()
@click.pass_context
def browse(ctx: click.Context) -> None:
    """Interactive search and watchlist session."""
    _run(_browse(ctx.obj["container"]))


def _run(coro: Coroutine[Any, Any, None]) -> None:
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except PopcornError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


async def _search(container: Container, query: str) -> None:
    """Run a single search and print the results."""
    try:
        controller = container.get(AppController)
        controller.set_query(query)
        render_search(await controller.search.wait())
    finally:
        await container.aclose()


async def _details(container: Container, imdb_id: str) -> None:
    """Fetch and print the details of one movie."""
    try:
        controller = container.get(AppController)
        controller.select_movie(imdb_id)
        state = await controller.details.wait()
        if state.status is not DetailStatus.READY:
            raise PopcornError(f"Could not load details for {imdb_id}")
        render_detail(state, controller.watchlist.user_rating_for(imdb_id))
    finally:
        await container.aclose()


async def _rate(container: Container, imdb_id: str, rating: int) -> None:
    """Fetch a movie, rate it once and commit it to the watched list."""
    try:
        controller = container.get(AppController)
        if controller.watchlist.is_watched(imdb_id):
            raise PopcornError(f"{imdb_id} is already on the watched list")

        controller.select_movie(imdb_id)
        state = await controller.details.wait()
        if state.status is not DetailStatus.READY:
            raise PopcornError(f"Could not load details for {imdb_id}")

        controller.rate(rating)
        entry = controller.add_to_watched()
        if entry is None:
            raise PopcornError(f"Could not add {imdb_id} to the watched list")
        click.echo(f"Added {entry.title} ({entry.year}) with rating {entry.user_rating}")
    finally:
        await container.aclose()


async def _browse(container: Container) -> None:
    """Interactive loop standing in for the search page."""
    window_title = container.get(WindowTitle)
    window_title.on_change = lambda title: click.echo(f"\x1b]0;{title}\x07", nl=False)

    try:
        controller = container.get(AppController)
        controller.focus_search()
        click.echo(BROWSE_HELP)

        while True:
            line = await asyncio.to_thread(
                click.prompt, window_title.current, default="", show_default=False
            )
            if not await _handle_browse_line(controller, line):
                break
    finally:
        await container.aclose()


async def _handle_browse_line(controller: AppController, line: str) -> bool:
    """Apply one line of browse input.

    Returns:
        False when the user asked to quit.
    """
    if not line.startswith(":"):
        controller.set_query(line)
        render_search(await controller.search.wait())
        return True

    command, _, argument = line[1:].partition(" ")
    argument = argument.strip()

    if command in ("quit", "q"):
        return False
    if command == "blur":
        controller.blur_search()
    elif command == "enter":
        controller.press_key("Enter")
        render_search(controller.search.state)
    elif command in ("esc", "back"):
        controller.press_key("Escape")
        render_summary(controller.watchlist.summary())
    elif command == "open":
        results = controller.search.state.results
        if not argument.isdigit() or not 1 <= int(argument) <= len(results):
            click.echo(f"Pick a result between 1 and {len(results)}")
            return True
        imdb_id = results[int(argument) - 1].imdb_id
        controller.select_movie(imdb_id)
        state = await controller.details.wait()
        render_detail(state, controller.watchlist.user_rating_for(imdb_id))
    elif command == "rate":
        if not argument.isdigit() or not 1 <= int(argument) <= 10:
            click.echo("Rating must be between 1 and 10")
        elif not controller.rate(int(argument)):
            click.echo("Nothing to rate")
        else:
            render_detail(controller.details.state)
    elif command == "add":
        entry = controller.add_to_watched()
        if entry is None:
            click.echo("Open an unwatched movie and rate it first")
        else:
            click.echo(f"Added {entry.title}")
            render_summary(controller.watchlist.summary())
    elif command == "del":
        controller.delete_watched(argument)
        render_watched(controller.watchlist.list())
    elif command == "watched":
        render_summary(controller.watchlist.summary())
        render_watched(controller.watchlist.list())
    else:
        click.echo(BROWSE_HELP)
    return True


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
