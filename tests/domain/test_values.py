"""Tests for front-matter value coercion and formatting."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from postctl.domain.values import (
    coerce_value,
    format_timestamp,
    format_value,
    naive_utc,
    parse_list,
    parse_timestamp,
    unquote,
)


class TestCoerceValue:
    def test_plain_string(self) -> None:
        assert coerce_value("post") == "post"

    def test_string_is_trimmed(self) -> None:
        assert coerce_value("  post  ") == "post"

    def test_double_quoted(self) -> None:
        assert coerce_value('"Hello"') == "Hello"

    def test_single_quoted(self) -> None:
        assert coerce_value("'It''s here'") == "It's here"

    def test_quoted_boolean_stays_string(self) -> None:
        assert coerce_value('"true"') == "true"

    def test_escaped_quotes(self) -> None:
        assert coerce_value(r'"Say \"hi\""') == 'Say "hi"'

    @pytest.mark.parametrize(
        ("raw", "expected"), [("true", True), ("false", False), ("TRUE", True)]
    )
    def test_booleans(self, raw: str, expected: bool) -> None:
        assert coerce_value(raw) is expected

    def test_flow_list(self) -> None:
        assert coerce_value("[Ruby, Rails , PostgreSQL]") == ["Ruby", "Rails", "PostgreSQL"]

    def test_empty_list(self) -> None:
        assert coerce_value("[]") == []

    def test_list_items_stay_strings(self) -> None:
        assert coerce_value("[true, 2020-01-01]") == ["true", "2020-01-01"]

    def test_unterminated_list(self) -> None:
        with pytest.raises(ValueError, match="unterminated"):
            coerce_value("[Ruby, Rails")

    def test_timestamp(self) -> None:
        assert coerce_value("2020-01-01 10:00") == datetime(2020, 1, 1, 10, 0)

    def test_colon_in_string(self) -> None:
        assert coerce_value("Rails: the good parts") == "Rails: the good parts"


class TestParseList:
    def test_drops_empty_items(self) -> None:
        assert parse_list("a, , b,") == ["a", "b"]

    def test_unquotes_items(self) -> None:
        assert parse_list('"Ember.js", \'JS\'') == ["Ember.js", "JS"]


class TestParseTimestamp:
    def test_date_only(self) -> None:
        assert parse_timestamp("2020-02-01") == datetime(2020, 2, 1)

    def test_minutes(self) -> None:
        assert parse_timestamp("2020-01-01 10:00") == datetime(2020, 1, 1, 10, 0)

    def test_seconds_and_t_separator(self) -> None:
        assert parse_timestamp("2020-01-01T10:00:30") == datetime(2020, 1, 1, 10, 0, 30)

    def test_fraction(self) -> None:
        assert parse_timestamp("2020-01-01 10:00:30.5") == datetime(2020, 1, 1, 10, 0, 30, 500000)

    def test_utc_suffix(self) -> None:
        assert parse_timestamp("2020-01-01T10:00Z") == datetime(2020, 1, 1, 10, 0, tzinfo=UTC)

    def test_offset(self) -> None:
        parsed = parse_timestamp("2020-01-01 10:00 +0200")
        assert parsed is not None
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_negative_offset_with_colon(self) -> None:
        parsed = parse_timestamp("2020-01-01 10:00:00 -05:30")
        assert parsed is not None
        assert parsed.utcoffset() == -timedelta(hours=5, minutes=30)

    @pytest.mark.parametrize("raw", ["2020-13-01", "2020-01-01 25:00", "yesterday", "2020-1-1"])
    def test_not_timestamps(self, raw: str) -> None:
        assert parse_timestamp(raw) is None

    @pytest.mark.parametrize("raw", ["2020-01-01 10:00 +25:00", "2020-01-01 10:00 -2400"])
    def test_offset_of_a_day_or_more(self, raw: str) -> None:
        assert parse_timestamp(raw) is None
        assert coerce_value(raw) == raw


class TestFormatTimestamp:
    def test_minutes_only(self) -> None:
        assert format_timestamp(datetime(2020, 1, 1, 10, 0)) == "2020-01-01 10:00"

    def test_seconds_when_present(self) -> None:
        assert format_timestamp(datetime(2020, 1, 1, 10, 0, 5)) == "2020-01-01 10:00:05"

    def test_offset(self) -> None:
        moment = datetime(2020, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert format_timestamp(moment) == "2020-01-01 10:00 -03:00"

    def test_years_before_1000_are_padded(self) -> None:
        moment = datetime(999, 1, 2, 3, 4)
        assert format_timestamp(moment) == "0999-01-02 03:04"
        assert coerce_value(format_timestamp(moment)) == moment


class TestNaiveUtc:
    def test_naive_unchanged(self) -> None:
        moment = datetime(2020, 1, 1, 10, 0)
        assert naive_utc(moment) == moment

    def test_aware_converted(self) -> None:
        moment = datetime(2020, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert naive_utc(moment) == datetime(2020, 1, 1, 10, 0)


class TestFormatValue:
    def test_bare_string(self) -> None:
        assert format_value("post") == "post"

    @pytest.mark.parametrize("value", ["true", "2020-01-01", "[x]", " padded", "", '"quoted'])
    def test_ambiguous_strings_are_quoted(self, value: str) -> None:
        rendered = format_value(value)
        assert rendered.startswith('"')
        assert coerce_value(rendered) == value

    def test_bool(self) -> None:
        assert format_value(True) == "true"

    def test_list(self) -> None:
        assert format_value(["A", "B"]) == "[A, B]"

    def test_list_item_with_comma_rejected(self) -> None:
        with pytest.raises(ValueError, match="cannot be represented"):
            format_value(["a,b"])

    def test_multiline_string_rejected(self) -> None:
        with pytest.raises(ValueError, match="span lines"):
            format_value("one\ntwo")

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            format_value(42)  # type: ignore[arg-type]


def test_unquote_leaves_unbalanced_text() -> None:
    assert unquote('"abc') == '"abc'
