"""postertag search command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from postertag.cli.exit_codes import ExitCode
from postertag.cli.output import error_exit
from postertag.config.models import AppConfig
from postertag.tmdb import TmdbClient, TmdbError, guess_search_query


@click.command("search")
@click.argument("query", required=False)
@click.option(
    "--file",
    "movie",
    type=click.Path(path_type=Path),
    default=None,
    help="Guess the query from this movie file name.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON.",
)
@click.pass_context
def search_command(
    ctx: click.Context,
    query: str | None,
    movie: Path | None,
    json_output: bool,
) -> None:
    """Search TMDB for movies and list their poster paths.

    QUERY defaults to a title guessed from --file, e.g.
    "The.Matrix.1999.1080p.mkv" searches for "The Matrix".
    """
    if query is None:
        if movie is None:
            raise click.UsageError("Specify a QUERY or --file.")
        query = guess_search_query(movie)

    config: AppConfig = ctx.obj["config"]
    if not config.tmdb.has_token:
        error_exit(
            "TMDB API token is not configured "
            "(set POSTERTAG_TMDB_TOKEN or [tmdb] api_token)",
            ExitCode.CONFIG_ERROR,
            json_output,
        )

    try:
        with TmdbClient(config.tmdb) as client:
            results = client.search_movies(query)
    except TmdbError as e:
        error_exit(e.message, ExitCode.PROVIDER_ERROR, json_output)

    if json_output:
        data = {
            "query": query,
            "results": [
                {
                    "id": r.id,
                    "title": r.title,
                    "year": r.year,
                    "poster_path": r.poster_path,
                }
                for r in results
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not results:
        click.echo(f"No movies found for '{query}'.")
        return

    click.echo(f"Results for '{query}':")
    for r in results:
        poster = r.poster_path if r.has_poster else "(no poster)"
        click.echo(f"  {r.id:>8}  {r.display_title}  {poster}")
