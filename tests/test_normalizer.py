"""Tests for rss_batch.normalizer module."""

from datetime import datetime, timezone

from rss_batch.normalizer import (
    OBJECT_PLACEHOLDER,
    format_iso,
    strip_html,
    to_safe_iso_date,
    to_safe_string,
)


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no text form")


class TestToSafeString:
    def test_none_is_empty(self) -> None:
        assert to_safe_string(None) == ""

    def test_string_passes_through(self) -> None:
        assert to_safe_string("<b>hi</b>") == "<b>hi</b>"

    def test_idempotent_on_strings(self) -> None:
        for value in ["", "plain", "  spaced  ", "ünïcode"]:
            assert to_safe_string(to_safe_string(value)) == to_safe_string(value)

    def test_numbers(self) -> None:
        assert to_safe_string(42) == "42"
        assert to_safe_string(1.5) == "1.5"

    def test_integral_float_has_no_fraction(self) -> None:
        assert to_safe_string(1.0) == "1"
        assert to_safe_string(-3.0) == "-3"

    def test_booleans_are_lowercase(self) -> None:
        assert to_safe_string(True) == "true"
        assert to_safe_string(False) == "false"

    def test_dict_serialized_compactly(self) -> None:
        assert to_safe_string({"name": "Jane", "n": 1}) == '{"name":"Jane","n":1}'

    def test_list_serialized(self) -> None:
        assert to_safe_string(["a", 1]) == '["a",1]'

    def test_unserializable_object_uses_placeholder(self) -> None:
        assert to_safe_string({"when": object()}) == OBJECT_PLACEHOLDER

    def test_other_values_use_str(self) -> None:
        dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert to_safe_string(dt) == str(dt)

    def test_never_raises(self) -> None:
        assert to_safe_string(Unprintable()) == OBJECT_PLACEHOLDER


class TestToSafeIsoDate:
    def test_iso_input_is_canonicalized(self) -> None:
        assert to_safe_iso_date("2024-01-15T10:00:00Z") == "2024-01-15T10:00:00.000Z"

    def test_rfc822_with_gmt(self) -> None:
        assert to_safe_iso_date("Mon, 01 Jan 2024 12:00:00 GMT") == "2024-01-01T12:00:00.000Z"

    def test_offset_is_converted_to_utc(self) -> None:
        assert to_safe_iso_date("2024-01-15T12:30:00+02:00") == "2024-01-15T10:30:00.000Z"

    def test_timezone_abbreviation(self) -> None:
        assert to_safe_iso_date("Mon, 01 Jan 2024 12:00:00 EST") == "2024-01-01T17:00:00.000Z"

    def test_naive_is_treated_as_utc(self) -> None:
        assert to_safe_iso_date("2024-03-01 08:15:00") == "2024-03-01T08:15:00.000Z"

    def test_unparsable_is_empty(self) -> None:
        assert to_safe_iso_date("not a date") == ""

    def test_empty_and_none_are_empty(self) -> None:
        assert to_safe_iso_date("") == ""
        assert to_safe_iso_date(None) == ""

    def test_object_input_does_not_raise(self) -> None:
        assert to_safe_iso_date({"date": "x"}) == ""

    def test_year_only_fills_january_first(self) -> None:
        assert to_safe_iso_date("2024") == "2024-01-01T00:00:00.000Z"

    def test_month_and_year_fill_first_day(self) -> None:
        assert to_safe_iso_date("March 2024") == "2024-03-01T00:00:00.000Z"

    def test_date_without_time_is_midnight(self) -> None:
        assert to_safe_iso_date("2024-06-15") == "2024-06-15T00:00:00.000Z"

    def test_input_without_year_is_empty(self) -> None:
        assert to_safe_iso_date("March") == ""
        assert to_safe_iso_date("10") == ""
        assert to_safe_iso_date(5) == ""


class TestStripHtml:
    def test_removes_tags_and_collapses_whitespace(self) -> None:
        assert strip_html("<p>Hello   <b>world</b></p>\n\n<br/>again ") == "Hello world again"

    def test_none_is_empty(self) -> None:
        assert strip_html(None) == ""


class TestFormatIso:
    def test_milliseconds_and_z_suffix(self) -> None:
        dt = datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_iso(dt) == "2024-01-15T10:00:00.123Z"
