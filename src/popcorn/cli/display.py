"""Terminal rendering of session state."""

from typing import List, Optional

import click

from ..core.models import (
    DetailState,
    DetailStatus,
    SearchState,
    SearchStatus,
    WatchedEntry,
    WatchlistSummary,
)


def _fmt_optional(value: Optional[object], suffix: str = "") -> str:
    return f"{value}{suffix}" if value is not None else "-"


def render_search(state: SearchState) -> None:
    """Print the search box state."""
    if state.status is SearchStatus.LOADING:
        click.echo("LOADING...")
        return
    if state.status is SearchStatus.ERROR:
        click.secho(f"🛑 {state.error_message}", fg="red")
        return

    click.echo(f"Found {len(state.results)} results")
    for index, result in enumerate(state.results, start=1):
        click.echo(f"  {index:>2}. {result.title} ({result.year})  [{result.imdb_id}]")


def render_detail(state: DetailState, watched_rating: Optional[int] = None) -> None:
    """Print the details view."""
    if state.status is DetailStatus.IDLE:
        return
    if state.status is DetailStatus.LOADING or state.detail is None:
        click.echo("LOADING...")
        return

    detail = state.detail
    click.secho(detail.title, bold=True)
    released = detail.release_date.strftime("%d %b %Y") if detail.release_date else "-"
    click.echo(f"{released} • {detail.runtime or '-'}")
    click.echo(detail.genre or "-")
    click.echo(f"⭐ {_fmt_optional(detail.imdb_rating)} IMDb rating")
    click.echo("")
    if watched_rating is not None:
        click.echo(f"You rated this movie {watched_rating} ⭐")
    elif state.user_rating is not None:
        click.echo(f"Your rating: {state.user_rating} (changed {state.rating_change_count}x)")
    if detail.plot:
        click.echo(click.style(detail.plot, italic=True))
    click.echo(f"Starring {detail.actors or '-'}")
    click.echo(f"Directed by {detail.director or '-'}")


def render_summary(summary: WatchlistSummary) -> None:
    """Print watched list statistics."""
    click.secho("Movies you watched", bold=True)
    click.echo(
        f"#️⃣ {summary.count} movies  "
        f"⭐️ {summary.avg_imdb_rating:.1f}  "
        f"🌟 {summary.avg_user_rating:.1f}  "
        f"⏳ {summary.avg_runtime:.0f} min"
    )


def render_watched(entries: List[WatchedEntry]) -> None:
    """Print the watched list."""
    for entry in entries:
        click.echo(
            f"  {entry.title} ({entry.year})  [{entry.imdb_id}]  "
            f"⭐️ {_fmt_optional(entry.imdb_rating)}  "
            f"🌟 {entry.user_rating}  "
            f"⏳ {_fmt_optional(entry.runtime_minutes, ' min')}"
        )
