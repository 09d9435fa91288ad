"""Unit tests for query parsing and continuation rewriting."""

import pytest

from .errors import ValidationError
from .query import (
    build_query,
    is_valid_duration,
    parse_query,
    scroll_duration,
    to_continuation_query,
)


def describe_parse_query():
    def it_splits_path_and_params_in_order():
        path, params = parse_query("/idx/_search?scroll=30s&size=10&q=foo")
        assert path == "/idx/_search"
        assert list(params.items()) == [("scroll", "30s"), ("size", "10"), ("q", "foo")]

    def it_handles_a_bare_path():
        assert parse_query("/_search") == ("/_search", {})

    def it_keeps_bare_flags():
        _, params = parse_query("/_search?pretty&scroll=1m")
        assert params == {"pretty": "", "scroll": "1m"}

    def it_decodes_encoded_commas():
        _, params = parse_query("/_search?filter_path=hits.total%2Chits.hits")
        assert params["filter_path"] == "hits.total,hits.hits"


def describe_build_query():
    def it_returns_the_path_without_params():
        assert build_query("/_search/scroll", {}) == "/_search/scroll"

    def it_leaves_commas_readable():
        assert build_query("/_search", {"filter_path": "a,b"}) == "/_search?filter_path=a,b"


def describe_is_valid_duration():
    @pytest.mark.parametrize("value", ["30s", "1m", "2h", "1d", "500ms", "10micros", "7nanos"])
    def it_accepts_known_units(value):
        assert is_valid_duration(value)

    @pytest.mark.parametrize("value", ["", "30", "0s", "-1m", "1.5m", "1w", "s", "10 s"])
    def it_rejects_everything_else(value):
        assert not is_valid_duration(value)


def describe_scroll_duration():
    def it_finds_the_duration_anywhere():
        assert scroll_duration("/idx/_search?size=5&scroll=2m&q=x") == "2m"

    def it_fails_when_missing():
        with pytest.raises(ValidationError, match="no scroll parameter"):
            scroll_duration("/idx/_search?size=5")

    def it_fails_on_a_bad_unit():
        with pytest.raises(ValidationError, match="invalid scroll duration"):
            scroll_duration("/idx/_search?scroll=5w")


def describe_to_continuation_query():
    def it_rewrites_path_and_drops_initial_only_params():
        query = "/idx/_search?scroll=30s&filter_path=hits.total,hits.hits._source&size=10"
        assert to_continuation_query(query) == "/_search/scroll?scroll=30s"

    def it_does_not_depend_on_parameter_order():
        a = to_continuation_query("/idx/_search?size=10&scroll=30s&_source=false")
        b = to_continuation_query("/idx/_search?_source=false&scroll=30s&size=10")
        assert a == b == "/_search/scroll?scroll=30s"

    def it_keeps_the_total_hits_format_flag():
        query = "/idx/_search?rest_total_hits_as_int=true&scroll=1m&size=100"
        assert to_continuation_query(query) == "/_search/scroll?scroll=1m&rest_total_hits_as_int=true"

    def it_is_stable_under_repeated_application():
        once = to_continuation_query("/a,b/_search?filter_path=hits&scroll=5m&rest_total_hits_as_int=true")
        assert to_continuation_query(once) == once
        assert to_continuation_query(to_continuation_query(once)) == once

    def it_fails_without_a_duration():
        with pytest.raises(ValidationError):
            to_continuation_query("/idx/_search?size=10")
