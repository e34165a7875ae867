"""CLI commands for streamscout.

This module implements all user-facing CLI commands: the listing commands
(top, popular, shows, search, actor), genre listing, config management and
version.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich via ConsoleManager, so ``--no-rich``
  produces plain text.
- Listing commands share one flow: resolve options, load genres, run the
  ItemProcessor over a page fetcher, enrich and render each accepted item,
  then print a summary.

Design:
- Every command runs its async work with a single ``asyncio.run`` call.
- Fatal setup problems (missing API key, invalid settings, failed search)
  print a red error and exit with ExitCode.ERROR; per-page and per-item
  problems are absorbed by the processor.
"""

import asyncio
import os
from collections.abc import Callable
from enum import Enum
from typing import Annotated, Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from streamscout.cli.console import NO_RICH_ENV, ConsoleManager
from streamscout.cli.options import (
    GENRE,
    LANGUAGE,
    MIN_RATING,
    MIN_VOTES,
    PROVIDERS,
    REGION,
    TIMEOUT,
    FilterOptions,
)
from streamscout.cli.renderer import (
    render_genres,
    render_item,
    render_people,
    render_results_summary,
    render_search_complete,
    render_search_no_results,
    render_search_start,
    render_separator,
)
from streamscout.core.details import DetailsFetcher
from streamscout.core.filters import (
    build_genre_map,
    meets_rating_criteria,
    parse_providers,
)
from streamscout.core.processor import (
    MAX_RESULTS_TO_DISPLAY,
    FetchPage,
    ItemProcessor,
)
from streamscout.metadata.clients.tmdb import TMDBClient
from streamscout.metadata.models import (
    Genre,
    MediaItem,
    MediaKind,
    PageResponse,
    Person,
)
from streamscout.metadata.settings import MissingAPIKeyError, Settings
from streamscout.models.core import FilterCriteria
from streamscout.utils.config import (
    UnknownConfigKeyError,
    get_config_file,
    set_config_value,
)
from streamscout.utils.debug import debug, enable_debug

MAX_PEOPLE_TO_DISPLAY = 15
DEFAULT_SEARCH_RESULTS = 20

app = typer.Typer(
    name="streamscout",
    help="Find well-rated movies and TV shows on your streaming services.",
    add_completion=True,
    no_args_is_help=True,
)
config_app = typer.Typer(help="Inspect or change persisted defaults.")
app.add_typer(config_app, name="config")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


PageFetcherFactory = Callable[[TMDBClient, FilterOptions], FetchPage]


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the STREAMSCOUT_NO_RICH environment variable."
        ),
    ),
    debug_output: bool = typer.Option(
        False, "--debug", help="Log raw API responses and pipeline decisions."
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich:
        os.environ[NO_RICH_ENV] = "1"
    if debug_output:
        enable_debug()


# ---------------------------------------------------------------------------
# Shared plumbing
# ---------------------------------------------------------------------------
def _setup(
    console: Console, **flags: object
) -> tuple[FilterOptions, TMDBClient] | None:
    """Resolve settings and flags and build the client, or report why not."""
    try:
        settings = Settings()
        options = FilterOptions.resolve(settings, **flags)  # type: ignore[arg-type]
        client = TMDBClient(settings, timeout=options.timeout)
    except (MissingAPIKeyError, ValidationError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return None
    if settings.DEBUG:
        enable_debug()
    return options, client


async def _load_genres(
    client: TMDBClient, language: str, kind: MediaKind
) -> list[Genre]:
    """Fetch the genre list; genre features are skipped when it is unavailable."""
    try:
        return await client.genres(language, kind)
    except (httpx.HTTPError, ValueError) as e:
        debug(f"Genre list unavailable: {e}")
        return []


def _criteria(options: FilterOptions, genres: list[Genre]) -> FilterCriteria:
    return FilterCriteria(
        min_rating=options.min_rating,
        min_votes=options.min_votes,
        region=options.region,
        genre=options.genre,
        desired_providers=frozenset(parse_providers(options.providers)),
        genre_list=tuple(genres),
        genre_map=build_genre_map(genres),
    )


async def _process_listing(
    console: Console,
    client: TMDBClient,
    options: FilterOptions,
    fetch_page: FetchPage,
    *,
    kind: MediaKind,
    regional: bool,
    max_results: int = MAX_RESULTS_TO_DISPLAY,
) -> int:
    """Run the processor over *fetch_page*, rendering each accepted item."""
    genres = await _load_genres(client, options.language, kind)
    processor = ItemProcessor(
        client, _criteria(options, genres), kind=kind, max_results=max_results
    )
    fetcher = DetailsFetcher(client, options.region, kind)
    shown = 0

    async def on_match(item: MediaItem, providers: list[str], genre_names: list[str]) -> None:
        nonlocal shown
        shown += 1
        record = await fetcher.build_record(
            shown, item, providers, genre_names, regional=regional
        )
        render_item(record, console)

    return await processor.process(fetch_page, on_match)


def _listing_command(
    heading: str,
    summary_noun: str,
    kind: MediaKind,
    fetcher_factory: PageFetcherFactory,
    *,
    regional: bool,
    **flags: object,
) -> None:
    """Shared body of the top/popular/shows commands."""
    exit_code = ExitCode.SUCCESS
    with ConsoleManager() as console:
        setup = _setup(console, **flags)
        if setup is None:
            exit_code = ExitCode.ERROR
        else:
            options, client = setup
            render_search_start(
                console,
                heading,
                options.min_rating,
                options.min_votes,
                options.providers,
                options.region,
            )
            found = asyncio.run(
                _process_listing(
                    console,
                    client,
                    options,
                    fetcher_factory(client, options),
                    kind=kind,
                    regional=regional,
                )
            )
            render_results_summary(console, summary_noun, found)
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


# ---------------------------------------------------------------------------
# Listing commands
# ---------------------------------------------------------------------------
@app.command()
def top(
    providers: PROVIDERS = None,
    region: REGION = None,
    min_rating: MIN_RATING = None,
    min_votes: MIN_VOTES = None,
    timeout: TIMEOUT = None,
    genre: GENRE = "",
    language: LANGUAGE = None,
) -> None:
    """Find top-rated movies available on your streaming providers."""
    _listing_command(
        "Searching TMDb's Top Rated Movies...",
        "top-rated movies",
        MediaKind.MOVIE,
        lambda client, opts: (
            lambda page: client.top_rated(MediaKind.MOVIE, page, opts.language)
        ),
        regional=True,
        providers=providers,
        region=region,
        min_rating=min_rating,
        min_votes=min_votes,
        timeout=timeout,
        genre=genre,
        language=language,
    )


@app.command()
def popular(
    providers: PROVIDERS = None,
    region: REGION = None,
    min_rating: MIN_RATING = None,
    min_votes: MIN_VOTES = None,
    timeout: TIMEOUT = None,
    genre: GENRE = "",
    language: LANGUAGE = None,
) -> None:
    """Find popular movies available on your streaming providers."""
    _listing_command(
        "Searching TMDb's Popular Movies...",
        "popular movies",
        MediaKind.MOVIE,
        lambda client, opts: (lambda page: client.popular_movies(page, opts.language)),
        regional=True,
        providers=providers,
        region=region,
        min_rating=min_rating,
        min_votes=min_votes,
        timeout=timeout,
        genre=genre,
        language=language,
    )


@app.command()
def shows(
    providers: PROVIDERS = None,
    region: REGION = None,
    min_rating: MIN_RATING = None,
    min_votes: MIN_VOTES = None,
    timeout: TIMEOUT = None,
    genre: GENRE = "",
    language: LANGUAGE = None,
) -> None:
    """Find top-rated TV shows available on your streaming providers."""
    _listing_command(
        "Searching TMDb's Top Rated TV Shows...",
        "top-rated TV shows",
        MediaKind.TV,
        lambda client, opts: (
            lambda page: client.top_rated(MediaKind.TV, page, opts.language)
        ),
        regional=False,
        providers=providers,
        region=region,
        min_rating=min_rating,
        min_votes=min_votes,
        timeout=timeout,
        genre=genre,
        language=language,
    )


QUERY = Annotated[
    list[str],
    typer.Argument(help="Movie title to search for (multiple words are joined)."),
]

MAX_RESULTS = Annotated[
    int,
    typer.Option("--max", min=0, help="Maximum results to display."),
]


async def _search_flow(
    console: Console,
    client: TMDBClient,
    options: FilterOptions,
    text: str,
    max_results: int,
) -> ExitCode:
    checked = 0
    fetched = 0
    last_error: Exception | None = None

    async def fetch_page(page: int) -> PageResponse:
        nonlocal checked, fetched, last_error
        try:
            response = await client.search_movies(
                text, page, options.language, options.region
            )
        except (httpx.HTTPError, ValueError) as e:
            last_error = e
            raise
        fetched += 1
        checked += len(response.results)
        return response

    found = await _process_listing(
        console,
        client,
        options,
        fetch_page,
        kind=MediaKind.MOVIE,
        regional=False,
        max_results=max_results,
    )
    if fetched == 0 and last_error is not None:
        console.print(f"[red]Error searching: {escape(str(last_error))}[/red]")
        return ExitCode.ERROR
    if checked == 0:
        console.print(f'No movies found for "{escape(text)}"')
    elif found == 0:
        render_search_no_results(
            console, text, checked, options.min_rating, options.min_votes
        )
    else:
        render_search_complete(console, found, checked)
    return ExitCode.SUCCESS


@app.command()
def search(
    query: QUERY,
    providers: PROVIDERS = None,
    region: REGION = None,
    min_rating: MIN_RATING = None,
    min_votes: MIN_VOTES = None,
    timeout: TIMEOUT = None,
    genre: GENRE = "",
    language: LANGUAGE = None,
    max_results: MAX_RESULTS = DEFAULT_SEARCH_RESULTS,
) -> None:
    """Search for movies by title and show ratings and streaming availability."""
    text = " ".join(query)
    exit_code = ExitCode.ERROR
    with ConsoleManager() as console:
        setup = _setup(
            console,
            providers=providers,
            region=region,
            min_rating=min_rating,
            min_votes=min_votes,
            timeout=timeout,
            genre=genre,
            language=language,
        )
        if setup is not None:
            options, client = setup
            render_search_start(
                console,
                f'Searching for: "{text}"',
                options.min_rating,
                options.min_votes,
                options.providers,
                options.region,
            )
            if max_results == 0:
                console.print("Nothing to display: --max is 0.")
                exit_code = ExitCode.SUCCESS
            else:
                exit_code = asyncio.run(
                    _search_flow(console, client, options, text, max_results)
                )
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


# ---------------------------------------------------------------------------
# Actor
# ---------------------------------------------------------------------------
ACTOR_NAME = Annotated[
    Optional[str],
    typer.Argument(help="Actor name. Omit to list popular actors."),
]

ACTOR_INDEX = Annotated[
    Optional[int],
    typer.Argument(min=1, help="1-based position in the match list to select."),
]

LIST_ONLY = Annotated[
    bool,
    typer.Option("--list", help="List matching actors instead of a filmography."),
]


def _by_popularity(people: list[Person]) -> list[Person]:
    return sorted(people, key=lambda person: person.popularity, reverse=True)


async def _actor_flow(
    console: Console,
    client: TMDBClient,
    options: FilterOptions,
    name: Optional[str],
    index: Optional[int],
    list_only: bool,
) -> ExitCode:
    if not name:
        console.print("Fetching popular actors...")
        try:
            popular_people = await client.popular_people(options.language)
        except (httpx.HTTPError, ValueError) as e:
            console.print(f"[red]Error fetching popular actors: {escape(str(e))}[/red]")
            return ExitCode.ERROR
        if not popular_people.results:
            console.print("No popular actors found.")
            return ExitCode.SUCCESS
        people = _by_popularity(popular_people.results)[:MAX_PEOPLE_TO_DISPLAY]
        render_people(people, console, "Popular actors")
        console.print(f"Showing top {len(people)} popular actors")
        return ExitCode.SUCCESS

    console.print(f"Searching for actor: {escape(name)}\n")
    try:
        found = await client.search_people(name, options.language)
    except (httpx.HTTPError, ValueError) as e:
        console.print(f"[red]Error searching: {escape(str(e))}[/red]")
        return ExitCode.ERROR

    matches = _by_popularity(found.results)
    if not matches:
        console.print(f"No actors found matching '{escape(name)}'")
        return ExitCode.SUCCESS

    if index is not None:
        if index > len(matches):
            console.print(
                f"Invalid actor index: {index}. Found only {len(matches)} actors "
                f"matching '{escape(name)}' (use 1-{len(matches)})"
            )
            render_people(matches[:MAX_PEOPLE_TO_DISPLAY], console, "Matching actors")
            return ExitCode.ERROR
        return await _filmography(console, client, options, matches[index - 1])

    if list_only:
        render_people(matches[:MAX_PEOPLE_TO_DISPLAY], console, "Matching actors")
        return ExitCode.SUCCESS

    if len(matches) > 1:
        console.print(
            f"Found {len(matches)} actors matching '{escape(name)}'. "
            "Did you mean one of these?\n"
        )
        render_people(matches[:MAX_PEOPLE_TO_DISPLAY], console, "Matching actors")
        console.print(
            f'\nTo view filmography, use:\n  streamscout actor "{escape(name)}" 1\n'
        )
        return ExitCode.SUCCESS

    return await _filmography(console, client, options, matches[0])


async def _filmography(
    console: Console, client: TMDBClient, options: FilterOptions, person: Person
) -> ExitCode:
    console.print(f"Found: [bold]{escape(person.name)}[/bold] (TMDb ID: {person.id})")
    console.print("Fetching filmography...\n")
    try:
        credits = await client.person_movie_credits(person.id, options.language)
    except (httpx.HTTPError, ValueError) as e:
        console.print(f"[red]Error fetching filmography: {escape(str(e))}[/red]")
        return ExitCode.ERROR

    if not credits.cast:
        console.print("No movie credits found.")
        return ExitCode.SUCCESS

    console.print(
        f"Filtering with Min Rating: {options.min_rating:.1f} | "
        f"Min Votes: {options.min_votes}"
    )
    console.print(
        f"Checking \\[{escape(options.providers)}] in region "
        f"\\[{escape(options.region.upper())}]\n"
    )

    # The credits list is not paginated; present it as a single page.
    single_page = PageResponse(
        page=1,
        results=credits.cast,
        total_pages=1,
        total_results=len(credits.cast),
    )

    async def fetch_page(page: int) -> PageResponse:
        return single_page

    found = await _process_listing(
        console, client, options, fetch_page, kind=MediaKind.MOVIE, regional=True
    )

    render_separator(console)
    if found == 0:
        checked = sum(
            1
            for movie in credits.cast
            if meets_rating_criteria(
                movie.vote_average,
                movie.vote_count,
                options.min_rating,
                options.min_votes,
            )
        )
        console.print(f"No movies found for {escape(person.name)}.")
        console.print(f"(Checked {checked} movies meeting criteria)")
    else:
        console.print(f"Found {found} movies starring {escape(person.name)}.")
    return ExitCode.SUCCESS


@app.command()
def actor(
    name: ACTOR_NAME = None,
    index: ACTOR_INDEX = None,
    list_only: LIST_ONLY = False,
    providers: PROVIDERS = None,
    region: REGION = None,
    min_rating: MIN_RATING = None,
    min_votes: MIN_VOTES = None,
    timeout: TIMEOUT = None,
    genre: GENRE = "",
    language: LANGUAGE = None,
) -> None:
    """Find an actor's filmography with streaming availability.

    Without a name, lists popular actors. With several matches, lists them
    by popularity; pass INDEX to pick one.
    """
    exit_code = ExitCode.ERROR
    with ConsoleManager() as console:
        setup = _setup(
            console,
            providers=providers,
            region=region,
            min_rating=min_rating,
            min_votes=min_votes,
            timeout=timeout,
            genre=genre,
            language=language,
        )
        if setup is not None:
            options, client = setup
            exit_code = asyncio.run(
                _actor_flow(console, client, options, name, index, list_only)
            )
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


# ---------------------------------------------------------------------------
# Genres
# ---------------------------------------------------------------------------
TV_GENRES = Annotated[
    bool,
    typer.Option("--tv", help="List TV genres instead of movie genres."),
]


@app.command()
def genres(language: LANGUAGE = None, tv: TV_GENRES = False) -> None:
    """List all available genres (use names or IDs with --genre)."""
    kind = MediaKind.TV if tv else MediaKind.MOVIE
    exit_code = ExitCode.SUCCESS
    with ConsoleManager() as console:
        setup = _setup(console, language=language)
        if setup is None:
            exit_code = ExitCode.ERROR
        else:
            options, client = setup
            label = "TV" if tv else "Movie"
            console.print(f"Fetching {label.lower()} genres...\n")
            try:
                genre_list = asyncio.run(client.genres(options.language, kind))
            except (httpx.HTTPError, ValueError) as e:
                console.print(f"[red]Error fetching genres: {escape(str(e))}[/red]")
                exit_code = ExitCode.ERROR
            else:
                if not genre_list:
                    console.print("No genres found.")
                else:
                    render_genres(genre_list, console, f"Available {label} Genres")
                    console.print("\nUsage examples:")
                    console.print("   streamscout top --genre Action")
                    console.print(
                        '   streamscout search "star" --genre "Science Fiction"'
                    )
                    console.print('   streamscout actor "Tom Hanks" --genre Drama')
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
@config_app.command("show")
def config_show() -> None:
    """Show the effective settings and where the config file lives."""
    exit_code = ExitCode.SUCCESS
    with ConsoleManager() as console:
        try:
            settings = Settings()
        except ValidationError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            exit_code = ExitCode.ERROR
        else:
            table = Table(title="streamscout settings")
            table.add_column("Key", style="cyan")
            table.add_column("Value", style="green")
            for key, value in settings.model_dump().items():
                if key == "TMDB_API_KEY":
                    value = "********" if value else "(not set)"
                table.add_row(key.lower(), escape(str(value)))
            console.print(table)
            console.print(f"Config file: {escape(str(get_config_file()))}")
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. region.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Persist a default in the config file."""
    exit_code = ExitCode.SUCCESS
    with ConsoleManager() as console:
        try:
            stored = set_config_value(key, value)
        except UnknownConfigKeyError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            exit_code = ExitCode.ERROR
        except ValueError as e:
            console.print(f"[red]Error: invalid value for {escape(key)}: {e}[/red]")
            exit_code = ExitCode.ERROR
        else:
            console.print(f"Set [bold]{escape(key.lower())}[/bold] = {escape(str(stored))}")
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


@config_app.command("path")
def config_path() -> None:
    """Print the location of the config file."""
    with ConsoleManager() as console:
        console.print(str(get_config_file()))


@app.command()
def version() -> None:
    """Show the version of streamscout."""
    from streamscout.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"streamscout version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
