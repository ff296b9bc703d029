"""
Tests for the lenient MovieRecord model.
"""

from __future__ import annotations

from reelchat.models import MovieRecord


class TestMovieRecord:

    def test_snake_and_camel_year(self):
        assert MovieRecord.model_validate({"title": "A", "release_year": 1999}).release_year == 1999
        assert MovieRecord.model_validate({"title": "A", "releaseYear": "1999"}).release_year == "1999"

    def test_float_year(self):
        assert MovieRecord.model_validate({"release_year": 2010.0}).release_year == 2010

    def test_genres_coercion(self):
        assert MovieRecord.model_validate({"genres": "Drama"}).genres == ["Drama"]
        assert MovieRecord.model_validate({"genres": None}).genres == []
        assert MovieRecord.model_validate({"genres": ["Drama", None, 3]}).genres == ["Drama", "3"]

    def test_scalar_title(self):
        assert MovieRecord.model_validate({"title": 1917}).title == "1917"
        assert MovieRecord.model_validate({"title": {"en": "x"}}).title is None

    def test_extra_keys_kept(self):
        movie = MovieRecord.model_validate({"title": "A", "rating": 8.1})
        assert movie.model_extra == {"rating": 8.1}

    def test_from_raw_non_object(self):
        assert MovieRecord.from_raw(7) == MovieRecord()
        assert MovieRecord.from_raw(["x"]).title is None
