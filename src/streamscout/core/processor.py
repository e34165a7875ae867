"""Paginated fetch-filter-enrich processor.

Walks a paginated TMDB listing one page at a time, runs every entry through
the filter predicates (rating/votes, then genre, then streaming
availability) and hands each accepted entry to a caller-supplied consumer.

Work is bounded by ``max_pages`` and ``max_results``; upstream exhaustion
(``page >= total_pages``) also ends the run. Failures are absorbed:
- a page that cannot be fetched is logged and skipped,
- an item whose providers cannot be looked up is rejected,
- a consumer error is logged and the run continues.
``process`` therefore never raises; transient upstream problems only mean
fewer results.
"""

from collections.abc import Awaitable, Callable

from streamscout.core.filters import (
    check_availability,
    filter_by_genre,
    meets_rating_criteria,
    resolve_genre_names,
)
from streamscout.metadata.base import ProviderLookup
from streamscout.metadata.models import MediaItem, MediaKind, PageResponse
from streamscout.models.core import FilterCriteria
from streamscout.utils.debug import debug, info, warn

MAX_PAGES_TO_SEARCH = 5
MAX_RESULTS_TO_DISPLAY = 40

FetchPage = Callable[[int], Awaitable[PageResponse]]
"""Fetch one listing page by 1-based page number."""

OnMatch = Callable[[MediaItem, list[str], list[str]], Awaitable[None]]
"""Consume an accepted item with its matched providers and genre names."""


class ItemProcessor:
    """Fetch, filter and dispatch listing entries page by page.

    One instance may run ``process`` several times, but runs must not overlap:
    counters live in the call, configuration is shared.
    """

    def __init__(
        self,
        providers: ProviderLookup,
        criteria: FilterCriteria,
        *,
        kind: MediaKind = MediaKind.MOVIE,
        max_pages: int = MAX_PAGES_TO_SEARCH,
        max_results: int = MAX_RESULTS_TO_DISPLAY,
    ) -> None:
        self.providers = providers
        self.criteria = criteria
        self.kind = kind
        self.max_pages = max_pages
        self.max_results = max_results

    async def process(self, fetch_page: FetchPage, on_match: OnMatch) -> int:
        """Run the page loop and return how many items were accepted.

        Args:
            fetch_page: Async callable returning the listing page for a page
                number. Any exception it raises skips that page.
            on_match: Async callable invoked once per accepted item, in page
                order then list order.

        Returns:
            The number of accepted items (never more than ``max_results``).
        """
        results_found = 0
        page = 1

        while page <= self.max_pages and results_found < self.max_results:
            info(f"Fetching page {page}...")
            try:
                response = await fetch_page(page)
            except Exception as exc:
                warn(f"Failed to fetch page {page}: {exc}")
                page += 1
                continue

            for item in response.results:
                if results_found >= self.max_results:
                    break
                providers = await self._accept(item)
                if providers is None:
                    continue

                results_found += 1
                genre_names = resolve_genre_names(
                    item.genre_ids, self.criteria.genre_list
                )
                try:
                    await on_match(item, providers, genre_names)
                except Exception as exc:
                    warn(f"Failed to process item {item.id}: {exc}")

            if page >= response.total_pages:
                break
            page += 1

        return results_found

    async def _accept(self, item: MediaItem) -> list[str] | None:
        """Return the matched providers if *item* passes every filter, else None."""
        criteria = self.criteria
        if not meets_rating_criteria(
            item.vote_average, item.vote_count, criteria.min_rating, criteria.min_votes
        ):
            return None

        if criteria.genre and not filter_by_genre(
            item, criteria.genre, criteria.genre_map
        ):
            return None

        try:
            region_providers = await self.providers.watch_providers(
                item.id, criteria.region, self.kind
            )
        except Exception as exc:
            debug(f"No provider data for item {item.id}: {exc}")
            return None

        available, is_available = check_availability(
            region_providers, criteria.desired_providers
        )
        if not is_available:
            return None
        return available
