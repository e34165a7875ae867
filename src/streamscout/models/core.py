"""Core domain models for streamscout.

This module defines the structures that flow between the CLI, the item
processor and the renderer.
- FilterCriteria is built once per command from options and settings and is
  read-only for the duration of a processor run.
- ItemRecord is the fully enriched, display-ready form of an accepted item.

Design:
- Both models are frozen so a run cannot mutate its own configuration or a
  record after it has been handed to the renderer.
"""

from pydantic import BaseModel, ConfigDict, Field

from streamscout.metadata.models import Genre, MediaKind


class FilterCriteria(BaseModel):
    """Filter configuration for one processor run."""

    model_config = ConfigDict(frozen=True)

    min_rating: float
    """Minimum average rating (inclusive)."""
    min_votes: int
    """Minimum vote count (inclusive)."""
    region: str
    """Watch region used for provider lookups."""
    genre: str = ""
    """Genre selector: empty for no filter, a numeric id, or a genre name."""
    desired_providers: frozenset[str] = Field(default_factory=frozenset)
    """Lowercased provider tokens (see filters.parse_providers)."""
    genre_list: tuple[Genre, ...] = ()
    """Genres known for the listing, used to name an item's genre ids."""
    genre_map: dict[str, int] = Field(default_factory=dict)
    """Lowercased genre name to id (see filters.build_genre_map)."""


class ItemRecord(BaseModel):
    """A single enriched result, ready to render."""

    model_config = ConfigDict(frozen=True)

    number: int
    kind: MediaKind = MediaKind.MOVIE
    title: str
    english_title: str = ""
    year: str = ""
    rating: float = 0.0
    votes: int = 0
    providers: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    tmdb_id: int
    imdb_id: str | None = None
    tvdb_id: int | None = None
    overview: str = ""
    character: str = ""

    @property
    def tmdb_url(self) -> str:
        return f"https://www.themoviedb.org/{self.kind.value}/{self.tmdb_id}"

    @property
    def imdb_url(self) -> str | None:
        if not self.imdb_id:
            return None
        return f"https://www.imdb.com/title/{self.imdb_id}/"

    @property
    def tvdb_url(self) -> str | None:
        if not self.tvdb_id:
            return None
        return f"https://thetvdb.com/?tab=series&id={self.tvdb_id}"
