# WARNING: API key loading from .env is for LOCAL DEVELOPMENT ONLY.
# Never commit your .env file or distribute your API keys.

"""TMDB API client.

Wraps the TMDB v3 endpoints streamscout needs: listings (top rated, popular,
search), per-item lookups (watch providers, external IDs, localised titles),
genre lists and people. Every request is awaited on its own; nothing is
batched, cached or retried.
"""

import json
from typing import Any

import httpx

from streamscout.metadata.base import ProviderLookup, RegionNotAvailableError
from streamscout.metadata.models import (
    ExternalIDs,
    Genre,
    GenreListResponse,
    MediaKind,
    PageResponse,
    PersonCredits,
    PersonSearchResponse,
    RegionProviders,
    WatchProviderResponse,
)
from streamscout.metadata.settings import Settings
from streamscout.utils.debug import debug, is_debug

BASE_URL = "https://api.themoviedb.org/3"
ENGLISH = "en-US"
MAX_PERSON_SEARCH_PAGES = 5


class TMDBClient(ProviderLookup):
    """Client for The Movie Database (TMDB) API.

    Loads the API key and request timeout from Settings unless explicit
    settings are passed in.

    Raises:
        MissingAPIKeyError: If no TMDB_API_KEY is configured.
    """

    def __init__(
        self, settings: Settings | None = None, *, timeout: float | None = None
    ) -> None:
        """Initialize TMDBClient and validate the API key."""
        self.settings = settings or Settings()
        self.settings.require_keys()
        self.api_key = self.settings.TMDB_API_KEY
        self.timeout = (
            timeout if timeout is not None else self.settings.API_TIMEOUT_SECONDS
        )

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``BASE_URL + path`` and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On any non-2xx response.
            httpx.HTTPError: On transport failures and timeouts.
        """
        query = {"api_key": self.api_key, **(params or {})}
        async with httpx.AsyncClient(
            timeout=self.timeout, headers={"Accept": "application/json"}
        ) as client:
            resp = await client.get(f"{BASE_URL}{path}", params=query)
        if is_debug():
            _log_body(path, resp)
        resp.raise_for_status()
        return resp.json()

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    async def top_rated(
        self, kind: MediaKind, page: int, language: str
    ) -> PageResponse:
        """Fetch one page of the top-rated movies or TV shows."""
        data = await self._get(
            f"/{kind.value}/top_rated", {"page": page, "language": language}
        )
        return PageResponse.model_validate(data)

    async def popular_movies(self, page: int, language: str) -> PageResponse:
        data = await self._get("/movie/popular", {"page": page, "language": language})
        return PageResponse.model_validate(data)

    async def search_movies(
        self, query: str, page: int, language: str, region: str
    ) -> PageResponse:
        """Fetch one page of movie title search results."""
        data = await self._get(
            "/search/movie",
            {"query": query, "page": page, "language": language, "region": region},
        )
        return PageResponse.model_validate(data)

    # ------------------------------------------------------------------
    # Per-item lookups
    # ------------------------------------------------------------------
    async def watch_providers(
        self, item_id: int, region: str, kind: MediaKind = MediaKind.MOVIE
    ) -> RegionProviders:
        data = await self._get(f"/{kind.value}/{item_id}/watch/providers")
        response = WatchProviderResponse.model_validate(data)
        if region not in response.results:
            raise RegionNotAvailableError(item_id, region)
        return response.results[region]

    async def external_ids(
        self, item_id: int, kind: MediaKind = MediaKind.MOVIE
    ) -> ExternalIDs:
        data = await self._get(f"/{kind.value}/{item_id}/external_ids")
        return ExternalIDs.model_validate(data)

    async def english_title(
        self, item_id: int, kind: MediaKind = MediaKind.MOVIE
    ) -> str:
        """Return the en-US title (movies) or name (shows) of an item."""
        return await self.regional_title(item_id, ENGLISH, kind)

    async def regional_title(
        self, item_id: int, language: str, kind: MediaKind = MediaKind.MOVIE
    ) -> str:
        """Return the title of an item localised to *language* (e.g. ``de-DE``)."""
        data = await self._get(f"/{kind.value}/{item_id}", {"language": language})
        field = "title" if kind == MediaKind.MOVIE else "name"
        return data.get(field) or ""

    # ------------------------------------------------------------------
    # Genres & people
    # ------------------------------------------------------------------
    async def genres(
        self, language: str, kind: MediaKind = MediaKind.MOVIE
    ) -> list[Genre]:
        data = await self._get(f"/genre/{kind.value}/list", {"language": language})
        return GenreListResponse.model_validate(data).genres

    async def search_people(self, name: str, language: str) -> PersonSearchResponse:
        """Search people by name, merging up to MAX_PERSON_SEARCH_PAGES pages."""
        params: dict[str, Any] = {"query": name, "language": language}
        data = await self._get("/search/person", params)
        response = PersonSearchResponse.model_validate(data)

        last_page = min(MAX_PERSON_SEARCH_PAGES, response.total_pages)
        for page in range(2, last_page + 1):
            data = await self._get("/search/person", {**params, "page": page})
            response.results.extend(PersonSearchResponse.model_validate(data).results)
        return response

    async def person_movie_credits(self, person_id: int, language: str) -> PersonCredits:
        data = await self._get(
            f"/person/{person_id}/movie_credits", {"language": language}
        )
        return PersonCredits.model_validate(data)

    async def popular_people(self, language: str, page: int = 1) -> PersonSearchResponse:
        data = await self._get("/person/popular", {"language": language, "page": page})
        return PersonSearchResponse.model_validate(data)


def _log_body(path: str, resp: httpx.Response) -> None:
    """Log the raw response body, pretty-printed when it is JSON."""
    try:
        body = json.dumps(resp.json(), indent=2)
    except ValueError:
        body = resp.text
    debug(f"TMDB {path} -> {resp.status_code}\n{body}")
