"""Tests for streamscout.core.filters.

Covers rating thresholds, provider parsing and matching (including the Amazon
alias rule), flatrate-only availability and genre selection/resolution.
"""

import pytest

from streamscout.core.filters import (
    build_genre_map,
    check_availability,
    filter_by_genre,
    matches_desired_provider,
    meets_rating_criteria,
    parse_providers,
    resolve_genre_names,
)
from streamscout.metadata.models import Genre, MediaItem, Provider, RegionProviders


def _item(genre_ids: list[int] | None = None, genres: list[Genre] | None = None) -> MediaItem:
    return MediaItem(id=1, title="Item", genre_ids=genre_ids or [], genres=genres or [])


def _providers(*names: str) -> list[Provider]:
    return [Provider(provider_name=name) for name in names]


class TestMeetsRatingCriteria:
    @pytest.mark.parametrize(
        ("rating", "votes", "expected"),
        [
            (7.5, 1000, True),  # both exactly at the threshold
            (8.0, 2000, True),
            (7.49, 5000, False),
            (9.0, 999, False),
            (0.0, 0, False),
        ],
    )
    def test_inclusive_thresholds(self, rating: float, votes: int, expected: bool) -> None:
        assert meets_rating_criteria(rating, votes, 7.5, 1000) is expected

    def test_zero_thresholds_accept_everything(self) -> None:
        assert meets_rating_criteria(0.0, 0, 0.0, 0)


class TestParseProviders:
    def test_trims_and_lowercases(self) -> None:
        assert parse_providers("Netflix, Amazon") == {"netflix", "amazon"}

    def test_duplicates_collapse(self) -> None:
        assert parse_providers("Netflix,NETFLIX , netflix") == {"netflix"}

    def test_empty_input_yields_empty_set(self) -> None:
        """Edge: an empty list never produces an empty-string token."""
        assert parse_providers("") == set()

    def test_blank_tokens_are_dropped(self) -> None:
        assert parse_providers("Netflix,, ,") == {"netflix"}


class TestMatchesDesiredProvider:
    def test_amazon_alias_matches_prime_video(self) -> None:
        assert matches_desired_provider("Amazon Prime Video", {"amazon"})

    def test_amazonprime_alias_matches_prime_video(self) -> None:
        assert matches_desired_provider("Amazon Prime Video", {"amazonprime"})

    def test_amazon_alias_is_substring_match(self) -> None:
        assert matches_desired_provider("Amazon Prime Video with Ads", {"amazon"})

    def test_amazon_alias_does_not_match_other_providers(self) -> None:
        assert not matches_desired_provider("Netflix", {"amazon"})
        assert not matches_desired_provider("Amazon Video", {"amazon"})

    def test_other_tokens_need_exact_match(self) -> None:
        assert matches_desired_provider("Netflix", {"netflix"})
        assert not matches_desired_provider("Netflix basic with Ads", {"netflix"})

    def test_any_token_is_enough(self) -> None:
        assert matches_desired_provider("Disney Plus", {"netflix", "disney plus"})

    def test_empty_desired_set_matches_nothing(self) -> None:
        assert not matches_desired_provider("Netflix", set())


class TestCheckAvailability:
    def test_rent_and_buy_tiers_are_ignored(self) -> None:
        region = RegionProviders(
            flatrate=_providers("Netflix"),
            rent=_providers("Amazon Prime Video"),
            buy=[],
        )
        assert check_availability(region, {"amazon"}) == ([], False)

    def test_collects_matches_in_flatrate_order(self) -> None:
        region = RegionProviders(
            flatrate=_providers("WOW", "Netflix", "Amazon Prime Video", "Joyn")
        )
        names, available = check_availability(region, {"netflix", "amazon", "wow"})
        assert names == ["WOW", "Netflix", "Amazon Prime Video"]
        assert available

    def test_no_flatrate_data(self) -> None:
        assert check_availability(RegionProviders(), {"netflix"}) == ([], False)


class TestFilterByGenre:
    GENRE_MAP = {"action": 28}

    def test_empty_selector_always_passes(self) -> None:
        assert filter_by_genre(_item(), "", self.GENRE_MAP)
        assert filter_by_genre(_item([12]), "", {})

    def test_numeric_selector_matches_genre_ids(self) -> None:
        assert filter_by_genre(_item([28]), "28", self.GENRE_MAP)
        assert not filter_by_genre(_item([12]), "28", self.GENRE_MAP)

    def test_numeric_selector_matches_embedded_genres(self) -> None:
        item = _item(genres=[Genre(id=28, name="Action")])
        assert filter_by_genre(item, "28", {})

    def test_name_selector_uses_genre_map(self) -> None:
        assert filter_by_genre(_item([28]), "Action", self.GENRE_MAP)
        assert not filter_by_genre(_item([12]), "Action", self.GENRE_MAP)

    def test_name_selector_is_case_insensitive(self) -> None:
        assert filter_by_genre(_item([28]), "ACTION", self.GENRE_MAP)

    def test_name_selector_matches_embedded_genre_names(self) -> None:
        item = _item(genres=[Genre(id=878, name="Science Fiction")])
        assert filter_by_genre(item, "science fiction", {})

    def test_unknown_name_rejects(self) -> None:
        assert not filter_by_genre(_item([28]), "Western", self.GENRE_MAP)


class TestGenreLookups:
    def test_build_genre_map_lowercases_names(self) -> None:
        genres = [Genre(id=28, name="Action"), Genre(id=35, name="Comedy")]
        assert build_genre_map(genres) == {"action": 28, "comedy": 35}

    def test_build_genre_map_last_write_wins(self) -> None:
        genres = [Genre(id=1, name="Drama"), Genre(id=2, name="DRAMA")]
        assert build_genre_map(genres) == {"drama": 2}

    def test_resolve_genre_names_skips_unknown_ids(self) -> None:
        assert resolve_genre_names([28, 99], [Genre(id=28, name="Action")]) == ["Action"]

    def test_resolve_genre_names_keeps_order_and_duplicates(self) -> None:
        genres = [Genre(id=28, name="Action"), Genre(id=18, name="Drama")]
        assert resolve_genre_names([18, 28, 18], genres) == ["Drama", "Action", "Drama"]
