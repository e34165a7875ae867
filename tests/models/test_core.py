"""Tests for FilterCriteria and ItemRecord."""

import pytest
from pydantic import ValidationError

from streamscout.metadata.models import MediaKind
from streamscout.models.core import FilterCriteria, ItemRecord


def test_filter_criteria_is_frozen() -> None:
    criteria = FilterCriteria(min_rating=7.5, min_votes=1000, region="DE")
    assert criteria.genre == ""
    assert criteria.desired_providers == frozenset()
    with pytest.raises(ValidationError):
        criteria.min_rating = 1.0  # type: ignore[misc]


def test_item_record_links() -> None:
    movie = ItemRecord(number=1, title="Inception", tmdb_id=27205, imdb_id="tt1375666")
    assert movie.tmdb_url == "https://www.themoviedb.org/movie/27205"
    assert movie.imdb_url == "https://www.imdb.com/title/tt1375666/"
    assert movie.tvdb_url is None

    show = ItemRecord(number=1, kind=MediaKind.TV, title="Breaking Bad", tmdb_id=1396, tvdb_id=81189)
    assert show.tmdb_url == "https://www.themoviedb.org/tv/1396"
    assert show.imdb_url is None
    assert show.tvdb_url == "https://thetvdb.com/?tab=series&id=81189"
