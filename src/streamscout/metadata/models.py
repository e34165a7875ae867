"""Data models for TMDB responses.

This module defines the pydantic models streamscout decodes TMDB JSON into.
- Listing entries for movies and TV shows share one model (MediaItem) so the
  filter pipeline can treat every listing the same way.
- Unknown response fields are ignored; ``null`` strings become empty strings so
  callers never have to guard against ``None`` titles or dates.

Design:
- MediaKind selects the endpoint family (``/movie`` or ``/tv``).
- PageResponse wraps any paginated listing (top rated, popular, search,
  filmography presented as a single page).
- RegionProviders carries the three availability tiers; only ``flatrate``
  counts as "streaming" for filtering.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

YEAR_LENGTH = 4  # Minimum length for a valid year string


class MediaKind(str, Enum):
    """TMDB endpoint family for an item."""

    MOVIE = "movie"
    TV = "tv"


class Genre(BaseModel):
    """A genre id/name pair."""

    id: int
    name: str = ""


class GenreListResponse(BaseModel):
    genres: list[Genre] = Field(default_factory=list)


class MediaItem(BaseModel):
    """A movie or TV show listing entry (the unit the filters operate on)."""

    id: int
    title: str = ""
    """Movie title (localised to the request language)."""
    name: str = ""
    """TV show name; used as the title fallback."""
    original_title: str = ""
    original_name: str = ""
    overview: str = ""
    release_date: str = ""
    """Release date (YYYY-MM-DD) for movies, may be empty."""
    first_air_date: str = ""
    """First air date (YYYY-MM-DD) for shows, may be empty."""
    vote_average: float = 0.0
    """Average user rating (0-10 scale)."""
    vote_count: int = 0
    genre_ids: list[int] = Field(default_factory=list)
    genres: list[Genre] = Field(default_factory=list)
    """Embedded genre objects (present on detail-style payloads)."""
    character: str = ""
    """Role played, only set for actor filmography entries."""

    @field_validator(
        "title",
        "name",
        "original_title",
        "original_name",
        "overview",
        "release_date",
        "first_air_date",
        "character",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("vote_average", "vote_count", mode="before")
    @classmethod
    def _none_to_zero(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("genre_ids", "genres", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def display_title(self) -> str:
        """Title for display: ``title`` or, for shows, ``name``."""
        return self.title or self.name

    @property
    def original_display_title(self) -> str:
        return self.original_title or self.original_name

    @property
    def year_label(self) -> str:
        """Return ``"(YYYY)"`` from the release or first-air date, or ``""``."""
        date = self.release_date or self.first_air_date
        if len(date) >= YEAR_LENGTH:
            return f"({date[:YEAR_LENGTH]})"
        return ""

    def genre_names(self) -> list[str]:
        return [genre.name for genre in self.genres]


class PageResponse(BaseModel):
    """One page of a paginated TMDB listing."""

    page: int = 1
    results: list[MediaItem] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class Provider(BaseModel):
    provider_name: str
    provider_id: int | None = None


class RegionProviders(BaseModel):
    """Watch providers for one region, split by availability tier."""

    link: str | None = None
    flatrate: list[Provider] = Field(default_factory=list)
    """Subscription streaming; the only tier the filters look at."""
    rent: list[Provider] = Field(default_factory=list)
    buy: list[Provider] = Field(default_factory=list)


class WatchProviderResponse(BaseModel):
    id: int
    results: dict[str, RegionProviders] = Field(default_factory=dict)


class ExternalIDs(BaseModel):
    """External IDs for a movie or show.

    ``tvdb_id`` is only populated for TV shows.
    """

    id: int | None = None
    imdb_id: str | None = None
    tvdb_id: int | None = None


class Person(BaseModel):
    """An actor/person search result."""

    id: int
    name: str
    popularity: float = 0.0
    profile_path: str | None = None
    known_for: list[MediaItem] = Field(default_factory=list)


class PersonSearchResponse(BaseModel):
    page: int = 1
    results: list[Person] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class PersonCredits(BaseModel):
    id: int | None = None
    cast: list[MediaItem] = Field(default_factory=list)
