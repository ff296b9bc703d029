"""
Tests for the payload interpreter.
"""

from __future__ import annotations

import pytest

from reelchat.interpreter import JsonKind, extract_recommendations, is_movie_list, json_kind


class TestJsonKind:

    def test_scalars(self):
        assert json_kind(None) is JsonKind.NULL
        assert json_kind(True) is JsonKind.BOOLEAN
        assert json_kind(3) is JsonKind.NUMBER
        assert json_kind(2.5) is JsonKind.NUMBER
        assert json_kind("x") is JsonKind.STRING

    def test_containers(self):
        assert json_kind([]) is JsonKind.ARRAY
        assert json_kind({}) is JsonKind.OBJECT

    def test_rejects_non_json(self):
        with pytest.raises(TypeError):
            json_kind(object())


class TestIsMovieList:

    def test_head_with_title(self):
        assert is_movie_list([{"title": "Heat"}])

    def test_empty_title_does_not_count(self):
        assert not is_movie_list([{"title": ""}])
        assert not is_movie_list([{"title": None}])

    def test_head_not_an_object(self):
        assert not is_movie_list(["Heat"])
        assert not is_movie_list([[{"title": "Heat"}]])


class TestExtractRecommendations:

    @pytest.mark.parametrize("value", [None, 42, "movies", True, [], {}])
    def test_no_match(self, value):
        assert extract_recommendations(value) is None

    def test_tail_not_validated(self):
        payload = [{"title": "A"}, {"no_title": 1}]
        assert extract_recommendations(payload) == [{"title": "A"}, {"no_title": 1}]

    def test_returns_same_list(self):
        movies = [{"title": "A"}]
        assert extract_recommendations({"movies": movies}) is movies

    def test_nested_objects(self):
        assert extract_recommendations({"a": {"b": [{"title": "X"}]}}) == [{"title": "X"}]

    def test_empty_array_skipped(self):
        assert extract_recommendations({"a": [], "b": [{"title": "Y"}]}) == [{"title": "Y"}]

    def test_first_match_wins(self):
        payload = {
            "results": [{"title": "First"}],
            "related": [{"title": "Second"}],
        }
        assert extract_recommendations(payload) == [{"title": "First"}]

    def test_preorder_prefers_outer_array(self):
        # the outer array qualifies before its nested one is visited
        payload = [{"title": "Outer", "similar": [{"title": "Inner"}]}]
        assert extract_recommendations(payload)[0]["title"] == "Outer"

    def test_depth_first_before_siblings(self):
        payload = {
            "a": {"deep": {"deeper": [{"title": "Deep"}]}},
            "b": [{"title": "Shallow"}],
        }
        assert extract_recommendations(payload) == [{"title": "Deep"}]

    def test_array_elements_left_to_right(self):
        payload = [1, "x", {"none": []}, {"hit": [{"title": "L"}]}, [{"title": "R"}]]
        assert extract_recommendations(payload) == [{"title": "L"}]

    def test_webhook_envelope(self):
        payload = [{"output": {"data": {"movies": [{"title": "Inception", "release_year": 2010}]}}}]
        assert extract_recommendations(payload) == [{"title": "Inception", "release_year": 2010}]

    def test_idempotent(self):
        payload = {"x": [{"y": [{"title": "Z", "genres": ["Drama"]}]}]}
        first = extract_recommendations(payload)
        second = extract_recommendations(payload)
        assert first == second
        assert payload == {"x": [{"y": [{"title": "Z", "genres": ["Drama"]}]}]}


class TestScanLimits:

    @staticmethod
    def _nest(depth, leaf):
        value = leaf
        for _ in range(depth):
            value = [value]
        return value

    def test_hostile_nesting_does_not_blow_up(self):
        assert extract_recommendations(self._nest(10_000, 1)) is None

    def test_match_within_depth_cap(self):
        payload = self._nest(50, {"movies": [{"title": "Found"}]})
        assert extract_recommendations(payload, max_depth=256) == [{"title": "Found"}]

    def test_match_beyond_depth_cap_is_skipped(self):
        payload = self._nest(10, {"movies": [{"title": "Too deep"}]})
        assert extract_recommendations(payload, max_depth=5) is None

    def test_container_beyond_cap_still_checked(self):
        # the candidate sits exactly at the cap: checked, not descended into
        payload = {"a": [{"title": "Edge"}]}
        assert extract_recommendations(payload, max_depth=1) == [{"title": "Edge"}]

    def test_node_cap(self):
        payload = {"fillers": [{"n": i} for i in range(100)], "movies": [{"title": "Late"}]}
        assert extract_recommendations(payload, max_nodes=10) is None
        assert extract_recommendations(payload, max_nodes=1000) == [{"title": "Late"}]
