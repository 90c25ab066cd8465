"""Unit tests for query string construction."""

import pytest

from fbauth.domain.auth.util.query import build_query


class TestBuildQuery:
    def test_empty_params(self):
        assert build_query({}) == ""

    def test_only_key_skipped(self):
        assert build_query({"a": "1"}, "a") == ""

    def test_keeps_insertion_order(self):
        assert build_query({"b": "2", "a": "1", "c": "3"}) == "b=2&a=1&c=3"

    def test_skips_key_in_the_middle(self):
        assert build_query({"b": "2", "a": "1", "c": "3"}, skip="a") == "b=2&c=3"

    def test_no_trailing_separator_when_last_key_skipped(self):
        assert build_query({"a": "1", "b": "2"}, skip="b") == "a=1"

    def test_skip_of_absent_key_changes_nothing(self):
        assert build_query({"a": "1"}, skip="zzz") == "a=1"

    def test_values_are_not_escaped(self):
        """Values go out verbatim; callers supply URL-safe values."""
        query = build_query({"redirect_uri": "https://app.test/cb", "scope": "email,public_profile"})

        assert query == "redirect_uri=https://app.test/cb&scope=email,public_profile"

    @pytest.mark.parametrize(
        ("params", "skip"),
        [
            ({"client_id": "1", "client_secret": "s", "state": "x"}, "client_secret"),
            ({"client_id": "1", "client_secret": "s", "state": "x"}, None),
            ({"input_token": "T", "access_token": "1|s"}, "input_token"),
            ({"k": ""}, None),
        ],
    )
    def test_each_pair_appears_once_in_order(self, params, skip):
        query = build_query(params, skip)

        expected = [f"{k}={v}" for k, v in params.items() if k != skip]
        assert query.split("&") == expected
        assert not query.startswith("&")
        assert not query.endswith("&")
