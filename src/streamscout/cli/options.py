"""Shared CLI options for the listing commands.

Every listing command accepts the same filter flags. Each flag defaults to
``None`` so that an omitted flag falls back to the resolved Settings value
(environment, .env, config file, built-in default) rather than shadowing it.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

import typer

from streamscout.metadata.settings import Settings

PROVIDERS = Annotated[
    Optional[str],
    typer.Option(
        "--providers",
        "-p",
        help="Comma-separated streaming providers, e.g. 'Netflix,AmazonPrime'.",
    ),
]

REGION = Annotated[
    Optional[str],
    typer.Option("--region", "-r", help="Watch region (ISO 3166-1 code, e.g. DE)."),
]

MIN_RATING = Annotated[
    Optional[float],
    typer.Option("--min-rating", help="Minimum average rating (0-10, inclusive)."),
]

MIN_VOTES = Annotated[
    Optional[int],
    typer.Option("--min-votes", help="Minimum number of votes (inclusive)."),
]

TIMEOUT = Annotated[
    Optional[int],
    typer.Option("--timeout", "-T", help="HTTP timeout in seconds."),
]

GENRE = Annotated[
    str,
    typer.Option("--genre", help="Filter by genre (name or ID)."),
]

LANGUAGE = Annotated[
    Optional[str],
    typer.Option("--language", "-l", help="Language for listings, e.g. de-DE."),
]


@dataclass
class FilterOptions:
    """Filter values after applying command-line overrides to the settings."""

    region: str
    providers: str
    min_rating: float
    min_votes: int
    timeout: int
    language: str
    genre: str = ""

    @classmethod
    def resolve(
        cls,
        settings: Settings,
        *,
        providers: Optional[str] = None,
        region: Optional[str] = None,
        min_rating: Optional[float] = None,
        min_votes: Optional[int] = None,
        timeout: Optional[int] = None,
        language: Optional[str] = None,
        genre: str = "",
    ) -> "FilterOptions":
        """Combine *settings* with the flags the user actually passed."""
        return cls(
            region=region if region is not None else settings.REGION,
            providers=providers if providers is not None else settings.PROVIDERS,
            min_rating=min_rating if min_rating is not None else settings.MIN_RATING,
            min_votes=min_votes if min_votes is not None else settings.MIN_VOTES,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS,
            language=language if language is not None else settings.LANGUAGE,
            genre=genre,
        )
