"""
Tests for the query parameter codec.

These tests verify:
- Range parsing ("n", "n-m", garbage, partial garbage, clamping)
- Open-ended ranges (inf token, overflow values)
- Omit-if-default encoding
- Round trip of in-domain values
- Boolean parsing and canonical encoding
"""

import math

import pytest

from shelfsort.filtering.query_params import (
    QueryParams,
    clamp,
    encode_boolean,
    encode_range,
    format_number,
    maybe_set_query_param,
    parse_boolean,
    parse_range,
)


class TestClamp:
    def test_clamps_below(self) -> None:
        assert clamp(-3, 0, 10) == 0

    def test_clamps_above(self) -> None:
        assert clamp(12, 0, 10) == 10

    def test_inside_unchanged(self) -> None:
        assert clamp(4.5, 0, 10) == 4.5

    @pytest.mark.parametrize("value", [-100, -1, 0, 3.3, 10, 11, math.inf])
    def test_idempotent(self, value: float) -> None:
        once = clamp(value, 1, 10)
        assert clamp(once, 1, 10) == once


class TestParseRange:
    def test_missing_returns_default(self) -> None:
        assert parse_range(None, 1, 10, (1, 10)) == (1, 10)
        assert parse_range("", 1, 10, (1, 10)) == (1, 10)

    def test_pair(self) -> None:
        assert parse_range("7-9", 1, 10, (1, 10)) == (7, 9)

    def test_single_value(self) -> None:
        assert parse_range("3", 1, 10, (1, 10)) == (3, 3)

    def test_garbage_returns_default(self) -> None:
        assert parse_range("foo", 1, 10, (1, 10)) == (1, 10)

    def test_partial_garbage_uses_default_bound(self) -> None:
        assert parse_range("foo-8", 1, 10, (1, 10)) == (1, 8)
        assert parse_range("4-bar", 1, 10, (1, 10)) == (4, 10)

    def test_nan_is_not_a_number(self) -> None:
        assert parse_range("nan-nan", 1, 10, (1, 10)) == (1, 10)

    def test_clamps_into_domain(self) -> None:
        assert parse_range("0-50", 1, 10, (1, 10)) == (1, 10)

    def test_reversed_pair_is_reordered(self) -> None:
        assert parse_range("9-7", 1, 10, (1, 10)) == (7, 9)

    def test_rounds_to_precision(self) -> None:
        assert parse_range("7.34-8.96", 1, 10, (1, 10), decimals=1) == (7.3, 9.0)

    def test_continuous_kept_exact(self) -> None:
        assert parse_range("2.346-5", 1, 5, (1, 5), decimals=None) == (2.346, 5)

    def test_infinity_token(self) -> None:
        assert parse_range("2-inf", 1, 10, (1, math.inf), allow_infinity=True) == (2, math.inf)

    def test_overflow_becomes_infinity(self) -> None:
        assert parse_range("2-11", 1, 10, (1, math.inf), allow_infinity=True) == (2, math.inf)

    def test_overflow_clamped_without_infinity(self) -> None:
        assert parse_range("2-inf", 1, 5, (1, 5)) == (2, 5)

    def test_missing_max_falls_back_to_open_default(self) -> None:
        assert parse_range("3-", 1, 10, (1, math.inf), allow_infinity=True) == (3, math.inf)


class TestEncodeRange:
    def test_default_is_omitted(self) -> None:
        assert encode_range((1, 10), (1, 10)) is None
        assert encode_range((1.0, math.inf), (1, math.inf)) is None

    def test_pair(self) -> None:
        assert encode_range((7, 9), (1, 10)) == "7-9"

    def test_single_value(self) -> None:
        assert encode_range((3, 3), (1, math.inf)) == "3"

    def test_infinity(self) -> None:
        assert encode_range((3, math.inf), (1, math.inf)) == "3-inf"

    def test_decimals(self) -> None:
        assert encode_range((7.5, 9), (1, 10), decimals=1) == "7.5-9"


class TestFormatNumber:
    def test_integer_without_decimal_point(self) -> None:
        assert format_number(7.0, 1) == "7"

    def test_trailing_zeros_stripped(self) -> None:
        assert format_number(2.50, 2) == "2.5"

    def test_continuous_is_exact(self) -> None:
        assert format_number(2.346, None) == "2.346"
        assert format_number(29.6, None) == "29.6"
        assert format_number(30.0, None) == "30"

    def test_continuous_never_uses_exponent(self) -> None:
        assert format_number(1e-05, None) == "0.00001"


class TestRangeRoundTrip:
    @pytest.mark.parametrize(
        "value",
        [(1, 10), (7, 9), (2.5, 2.5), (1, 1), (9.9, 10)],
    )
    def test_ratings_round_trip(self, value: tuple[float, float]) -> None:
        encoded = encode_range(value, (1, 10), decimals=1)
        assert parse_range(encoded, 1, 10, (1, 10), decimals=1) == value

    @pytest.mark.parametrize(
        "value",
        [(2.346, 5), (1.0001, 4.9999), (1 + 1 / 3, math.e), (3.3, 3.3)],
    )
    def test_complexity_round_trip(self, value: tuple[float, float]) -> None:
        encoded = encode_range(value, (1, 5), decimals=None)
        assert parse_range(encoded, 1, 5, (1, 5), decimals=None) == value

    @pytest.mark.parametrize("value", [(0, 29.6), (12.25, math.inf), (0.00001, 240)])
    def test_playtime_round_trip(self, value: tuple[float, float]) -> None:
        encoded = encode_range(value, (0, math.inf), decimals=None)
        decoded = parse_range(encoded, 0, 240, (0, math.inf), decimals=None, allow_infinity=True)
        assert decoded == value

    @pytest.mark.parametrize("value", [(1, math.inf), (3, 3), (2, 6), (10, math.inf)])
    def test_player_count_round_trip(self, value: tuple[float, float]) -> None:
        encoded = encode_range(value, (1, math.inf))
        assert parse_range(encoded, 1, 10, (1, math.inf), allow_infinity=True) == value


class TestBoolean:
    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes", "on", ""])
    def test_true_spellings(self, raw: str) -> None:
        assert parse_boolean(raw) is True

    @pytest.mark.parametrize("raw", [None, "false", "0", "no", "maybe"])
    def test_false_spellings(self, raw: str | None) -> None:
        assert parse_boolean(raw) is False

    def test_default_is_omitted(self) -> None:
        assert encode_boolean(False) is None

    def test_true_is_canonical(self) -> None:
        assert encode_boolean(True) == "true"

    def test_round_trip(self) -> None:
        for value in (True, False):
            assert parse_boolean(encode_boolean(value)) is value


class TestQueryParams:
    def test_parses_query_string(self) -> None:
        store = QueryParams.from_query_string("?username=alice&ratings=7-9")
        assert store.get("username") == "alice"
        assert store.get("ratings") == "7-9"

    def test_first_value_wins(self) -> None:
        store = QueryParams.from_query_string("ratings=7-9&ratings=2-3")
        assert store.get("ratings") == "7-9"

    def test_bare_key_is_kept(self) -> None:
        store = QueryParams.from_query_string("debug")
        assert "debug" in store
        assert store.get("debug") == ""

    def test_serializes_in_insertion_order(self) -> None:
        store = QueryParams()
        store.set("username", "alice")
        store.set("ratings", "7-9")
        assert store.to_query_string() == "username=alice&ratings=7-9"

    def test_copy_is_independent(self) -> None:
        store = QueryParams({"a": "1"})
        copied = store.copy()
        copied.set("a", "2")
        assert store.get("a") == "1"

    def test_maybe_set_deletes_on_none(self) -> None:
        store = QueryParams({"ratings": "7-9"})
        maybe_set_query_param(store, "ratings", None)
        assert "ratings" not in store

    def test_maybe_set_writes_value(self) -> None:
        store = QueryParams()
        maybe_set_query_param(store, "ratings", "7-9")
        assert store.get("ratings") == "7-9"
