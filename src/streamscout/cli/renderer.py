"""Renderer for CLI output.

This module prints result records, search banners, summaries and listings
(genres, people) to a Rich console.
- Colours follow one palette across commands: bright bold titles, grey
  italic alternate titles, yellow ratings, blue providers.
- Text that comes from TMDB or the user is escaped before it reaches Rich
  markup, so brackets in titles are printed literally.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from streamscout.metadata.models import Genre, Person
from streamscout.models.core import ItemRecord

SEPARATOR_WIDTH = 60
OVERVIEW_LENGTH = 100

TITLE_STYLE = "bold #FAFAFA"
ORIGINAL_TITLE_STYLE = "italic #888888"
RATING_STYLE = "bold #FCE043"
SEPARATOR_STYLE = "#555555"
PROVIDER_STYLE = "bold #00BFFF"
PERSON_NAME_STYLE = "bold #FFD700"
POPULARITY_STYLE = "#00FF00"


def truncate(text: str, max_length: int = OVERVIEW_LENGTH) -> str:
    """Cut *text* to *max_length* characters, marking the cut with "..."."""
    if len(text) > max_length:
        return text[:max_length].strip() + "..."
    return text


def render_separator(console: Console) -> None:
    console.print("=" * SEPARATOR_WIDTH, style=SEPARATOR_STYLE)


def render_item(record: ItemRecord, console: Console) -> None:
    """Render one enriched result as a numbered block.

    Args:
        record: The record to print.
        console: Console to print to.
    """
    render_separator(console)

    english = ""
    if record.english_title and record.english_title != record.title:
        english = (
            f" [{ORIGINAL_TITLE_STYLE}]({escape(record.english_title)})"
            f"[/{ORIGINAL_TITLE_STYLE}]"
        )
    heading = f"{record.number}. [{TITLE_STYLE}]{escape(record.title)}[/{TITLE_STYLE}]"
    console.print(f"{heading}{english} {record.year}".rstrip())
    console.print(
        f"   Rating: [{RATING_STYLE}]{record.rating:.1f}[/{RATING_STYLE}]/10 "
        f"(Votes: {record.votes})"
    )

    if record.character:
        console.print(f"   Character: {escape(record.character)}")
    if record.genres:
        console.print(f"   Genres: {escape(', '.join(record.genres))}")

    providers = ", ".join(
        f"[{PROVIDER_STYLE}]{escape(name)}[/{PROVIDER_STYLE}]"
        for name in record.providers
    )
    console.print(f"   STREAMING on: {providers}")

    console.print(f"   TMDb Details: {record.tmdb_url}")
    if record.imdb_url:
        console.print(f"   IMDb Details: {record.imdb_url}")
    if record.tvdb_url:
        console.print(f"   TVDB Details: {record.tvdb_url}")

    console.print(f"   Overview: {escape(truncate(record.overview))}")


def render_search_start(
    console: Console,
    heading: str,
    min_rating: float,
    min_votes: int,
    providers: str,
    region: str,
) -> None:
    """Print the banner that opens a listing command."""
    console.print(escape(heading))
    console.print(f"Criteria: Min Rating: {min_rating:.1f} | Min Votes: {min_votes}")
    console.print(
        f"Filtering for \\[{escape(providers)}] in region \\[{escape(region.upper())}]\n"
    )


def render_results_summary(console: Console, search_type: str, found: int) -> None:
    render_separator(console)
    if found == 0:
        console.print(f"No {search_type} found matching criteria.")
    else:
        console.print(f"Displayed {found} {search_type}.")


def render_search_no_results(
    console: Console, query: str, checked: int, min_rating: float, min_votes: int
) -> None:
    """Explain an empty title search and suggest looser filters."""
    render_separator(console)
    console.print(
        f'No movies found for "{escape(query)}" that meet criteria and are '
        "available on your providers."
    )
    console.print(f"(Checked {checked} movies from search results)")
    console.print("\nTry:")
    console.print(f"  - Lowering --min-rating (current: {min_rating:.1f})")
    console.print(f"  - Lowering --min-votes (current: {min_votes})")
    console.print("  - Adding more --providers")


def render_search_complete(console: Console, found: int, checked: int) -> None:
    render_separator(console)
    console.print(
        f"Search complete: Displayed {found} movies (out of {checked} checked)."
    )


def render_genres(genres: list[Genre], console: Console, title: str) -> None:
    """Render genres sorted by name as a two-column-pair table."""
    ordered = sorted(genres, key=lambda genre: genre.name)
    table = Table(title=f"{title} ({len(ordered)} total)")
    table.add_column("Genre", style=PROVIDER_STYLE)
    table.add_column("ID", justify="right")
    table.add_column("Genre", style=PROVIDER_STYLE)
    table.add_column("ID", justify="right")

    # Reason: two genre columns keep the full list on one screen.
    half = (len(ordered) + 1) // 2
    for left, right in zip(ordered[:half], ordered[half:] + [None]):
        row = [escape(left.name), str(left.id)]
        if right is not None:
            row += [escape(right.name), str(right.id)]
        else:
            row += ["", ""]
        table.add_row(*row)

    console.print(table)


def render_people(people: list[Person], console: Console, title: str) -> None:
    """Render a numbered people table (name, popularity, TMDb id)."""
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Name", style=PERSON_NAME_STYLE)
    table.add_column("Popularity", style=POPULARITY_STYLE, justify="right")
    table.add_column("TMDb ID", justify="right")
    for number, person in enumerate(people, start=1):
        table.add_row(
            str(number),
            escape(person.name),
            f"{person.popularity:.1f}",
            str(person.id),
        )
    console.print(table)
