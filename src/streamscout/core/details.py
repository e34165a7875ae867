"""Per-item enrichment for accepted results.

Turns an accepted MediaItem into an ItemRecord by fetching the extra pieces a
listing entry lacks: external IDs (IMDb, TVDB), the English title and,
optionally, the title localised to the watch region. Each lookup is
independent; a failed lookup leaves its field empty (or falls back to the
listing data) instead of dropping the record.
"""

import httpx

from streamscout.metadata.clients.tmdb import TMDBClient
from streamscout.metadata.models import ExternalIDs, MediaItem, MediaKind
from streamscout.models.core import ItemRecord
from streamscout.utils.debug import debug

# Lookup failures the enrichment step tolerates (pydantic's ValidationError is
# a ValueError, as is a JSON decode error).
_LOOKUP_ERRORS = (httpx.HTTPError, ValueError)


def regional_language(region: str) -> str:
    """Return the TMDB language code for a region, e.g. ``"DE"`` -> ``"de-DE"``."""
    return f"{region.lower()}-{region.upper()}"


class DetailsFetcher:
    """Builds display records for accepted items of one listing."""

    def __init__(
        self, client: TMDBClient, region: str, kind: MediaKind = MediaKind.MOVIE
    ) -> None:
        self.client = client
        self.region = region
        self.kind = kind

    async def build_record(
        self,
        number: int,
        item: MediaItem,
        providers: list[str],
        genres: list[str],
        *,
        regional: bool = False,
    ) -> ItemRecord:
        """Fetch external IDs and titles for *item* and assemble its record.

        Args:
            number: 1-based position of the record in the output.
            item: The accepted listing entry.
            providers: Matched streaming providers.
            genres: Resolved genre names.
            regional: Also look up the title in the region's language and
                prefer it over the listing title.
        """
        external = await self._external_ids(item.id)

        english_title = await self._title(item.id, None)
        if not english_title:
            english_title = item.original_display_title

        title = ""
        if regional:
            title = await self._title(item.id, regional_language(self.region))
        if not title:
            title = item.display_title

        return ItemRecord(
            number=number,
            kind=self.kind,
            title=title,
            english_title=english_title,
            year=item.year_label,
            rating=item.vote_average,
            votes=item.vote_count,
            providers=providers,
            genres=genres,
            tmdb_id=item.id,
            imdb_id=external.imdb_id,
            tvdb_id=external.tvdb_id,
            overview=item.overview,
            character=item.character,
        )

    async def _external_ids(self, item_id: int) -> ExternalIDs:
        try:
            return await self.client.external_ids(item_id, self.kind)
        except _LOOKUP_ERRORS as exc:
            debug(f"External IDs unavailable for {item_id}: {exc}")
            return ExternalIDs()

    async def _title(self, item_id: int, language: str | None) -> str:
        """English title when *language* is None, otherwise the localised one."""
        try:
            if language is None:
                return await self.client.english_title(item_id, self.kind)
            return await self.client.regional_title(item_id, language, self.kind)
        except _LOOKUP_ERRORS as exc:
            debug(f"Title lookup failed for {item_id} ({language or 'en-US'}): {exc}")
            return ""
