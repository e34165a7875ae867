"""Filter predicates for TMDB listing entries.

Pure helpers answering yes/no (or lookup) questions about a single MediaItem:
rating and vote thresholds, genre selection, and subscription-streaming
availability against the user's desired providers. None of them perform I/O
or raise; a mismatch simply yields ``False`` or an empty result.
"""

import re
from collections.abc import Iterable, Mapping, Set

from streamscout.metadata.models import Genre, MediaItem, RegionProviders

# Desired-provider tokens that match any "Amazon Prime Video" variant by substring.
AMAZON_ALIASES = frozenset({"amazon", "amazonprime"})
AMAZON_PRIME_VIDEO = "amazon prime video"

_GENRE_ID_RE = re.compile(r"[+-]?[0-9]+")


def meets_rating_criteria(
    vote_average: float, vote_count: int, min_rating: float, min_votes: int
) -> bool:
    """Return True when both the rating and the vote count reach their minimum."""
    return vote_average >= min_rating and vote_count >= min_votes


def parse_providers(raw: str) -> set[str]:
    """Parse a comma-separated provider list into lowercase, trimmed tokens.

    Empty tokens are dropped, so ``""`` and ``"Netflix,,"`` never contribute an
    empty-string entry.
    """
    tokens = (part.strip().lower() for part in raw.split(","))
    return {token for token in tokens if token}


def matches_desired_provider(provider_name: str, desired: Set[str]) -> bool:
    """Return True if *provider_name* satisfies any token in *desired*.

    ``amazon``/``amazonprime`` match any name containing "amazon prime video";
    every other token requires exact (case-insensitive) equality.
    """
    provider_lower = provider_name.lower()
    for token in desired:
        if token in AMAZON_ALIASES:
            if AMAZON_PRIME_VIDEO in provider_lower:
                return True
        elif token == provider_lower:
            return True
    return False


def check_availability(
    region_providers: RegionProviders, desired: Set[str]
) -> tuple[list[str], bool]:
    """Collect the subscription (flatrate) providers that the user wants.

    Rent and buy tiers are never considered. Order follows the flatrate list.
    """
    available = [
        provider.provider_name
        for provider in region_providers.flatrate
        if matches_desired_provider(provider.provider_name, desired)
    ]
    return available, len(available) > 0


def filter_by_genre(item: MediaItem, selector: str, genre_map: Mapping[str, int]) -> bool:
    """Return True if *item* belongs to the genre named or numbered by *selector*.

    An empty selector always passes. A numeric selector is matched against the
    item's genre ids and embedded genres. A name is matched case-insensitively
    against embedded genre names, then through *genre_map* against genre ids.
    """
    if not selector:
        return True

    wanted = selector.strip().lower()

    if _GENRE_ID_RE.fullmatch(wanted):
        genre_id = int(wanted)
        if genre_id in item.genre_ids:
            return True
        return any(genre.id == genre_id for genre in item.genres)

    if wanted in (name.lower() for name in item.genre_names()):
        return True

    mapped_id = genre_map.get(wanted)
    return mapped_id is not None and mapped_id in item.genre_ids


def build_genre_map(genres: Iterable[Genre]) -> dict[str, int]:
    """Map lowercase genre names to ids; later duplicates overwrite earlier ones."""
    return {genre.name.lower(): genre.id for genre in genres}


def resolve_genre_names(genre_ids: Iterable[int], genres: Iterable[Genre]) -> list[str]:
    """Translate genre ids to names, keeping order and skipping unknown ids."""
    id_to_name = {genre.id: genre.name for genre in genres}
    return [id_to_name[genre_id] for genre_id in genre_ids if genre_id in id_to_name]
