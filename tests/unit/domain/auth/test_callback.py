"""Unit tests for callback query parsing and code decoding."""

import pytest

from fbauth.domain.auth.util.callback import (
    CODE_ESCAPES,
    CallbackParams,
    decode_code,
    split_query,
)


class TestDecodeCode:
    @pytest.mark.parametrize(
        "value",
        ["", "AQDxyz123", "a+b", "with%20space", "lower%3dcase", "%41%42", "100%"],
    )
    def test_strings_without_table_escapes_are_unchanged(self, value):
        assert decode_code(value) == value

    def test_decodes_mixed_escapes(self):
        assert decode_code("%3D%26") == "=&"

    def test_decodes_repeated_escape(self):
        assert decode_code("%2C%2C") == ",,"

    def test_decodes_every_table_entry(self):
        encoded = "".join(CODE_ESCAPES)
        assert decode_code(encoded) == "".join(CODE_ESCAPES.values())

    def test_decoding_never_creates_a_new_escape(self):
        """%253D is an escaped '%' followed by '3D', not '='."""
        assert decode_code("%253D") == "%253D"

    def test_realistic_code(self):
        assert decode_code("AQB%2Fx%3Ay%40z%3F") == "AQB/x:y@z?"


class TestSplitQuery:
    def test_ignores_leading_question_mark(self):
        assert split_query("?a=1&b=2") == {"a": "1", "b": "2"}

    def test_keeps_values_encoded(self):
        assert split_query("code=abc%3D123") == {"code": "abc%3D123"}

    def test_value_keeps_raw_equals_signs(self):
        assert split_query("code=abc=123&state=x") == {"code": "abc=123", "state": "x"}

    def test_first_occurrence_wins(self):
        assert split_query("code=first&code=second") == {"code": "first"}

    def test_segment_without_value(self):
        assert split_query("flag&a=1") == {"flag": "", "a": "1"}

    def test_skips_empty_segments(self):
        assert split_query("a=1&&b=2&") == {"a": "1", "b": "2"}


class TestCallbackParams:
    @pytest.mark.parametrize("query", [None, "", "?"])
    def test_no_query_is_empty(self, query):
        assert CallbackParams.parse(query).is_empty

    def test_extracts_and_decodes_code(self):
        params = CallbackParams.parse("?code=abc%3D123&state=xyz")

        assert params.raw_code == "abc%3D123"
        assert params.code == "abc=123"
        assert params.state == "xyz"
        assert not params.has_error

    def test_code_after_state(self):
        params = CallbackParams.parse("state=xyz&code=abc%2C")

        assert params.code == "abc,"
        assert params.state == "xyz"

    def test_no_code(self):
        params = CallbackParams.parse("state=xyz")

        assert params.raw_code is None
        assert params.code is None

    def test_user_denial(self):
        params = CallbackParams.parse(
            "?error=access_denied&error_code=200"
            "&error_description=Permissions+error.&error_reason=user_denied&state=xyz"
        )

        assert params.has_error
        assert params.error == "access_denied"
        assert params.error_reason == "user_denied"
        assert params.error_description == "Permissions error."

    def test_code_containing_error_substring_is_not_a_denial(self):
        params = CallbackParams.parse("code=terror123")

        assert not params.has_error
        assert params.code == "terror123"
