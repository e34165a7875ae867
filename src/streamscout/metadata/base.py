"""Base abstraction for watch-provider lookups.

Defines the single-method interface the filter pipeline depends on to learn
where an item streams. TMDBClient implements it against the live API; tests
inject their own subclasses instead of a network client.
"""

from abc import ABC, abstractmethod

from streamscout.metadata.models import MediaKind, RegionProviders


class RegionNotAvailableError(LookupError):
    """Raised when TMDB has no watch-provider data for the requested region."""

    def __init__(self, item_id: int, region: str) -> None:
        super().__init__(f"No provider data for item {item_id} in region {region}")
        self.item_id = item_id
        self.region = region


class ProviderLookup(ABC):
    """Abstract base class for watch-provider availability sources.

    Used for dependency injection and testability of the item processor.
    """

    @abstractmethod
    async def watch_providers(
        self, item_id: int, region: str, kind: MediaKind = MediaKind.MOVIE
    ) -> RegionProviders:
        """Return the watch providers of one item in one region.

        Args:
            item_id: The TMDB id of the movie or show.
            region: ISO 3166-1 region code, e.g. ``"DE"``.
            kind: Whether *item_id* refers to a movie or a TV show.

        Returns:
            The providers for *region*, split by availability tier.

        Raises:
            RegionNotAvailableError: If no data exists for *region*.
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError
