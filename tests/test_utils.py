# =============================================================================
# tests/test_utils.py - String List Serialization Tests
# =============================================================================
# Run with: poetry run pytest tests/test_utils.py -v
# =============================================================================

from uuid import UUID

import pytest

from lib.utils import (
    decode_string_list,
    encode_string_list,
    join_string_list,
    normalize_uuid,
)


class TestEncodeStringList:

    def test_encodes_json_array(self):
        assert encode_string_list(["UX Design", "UI Design"]) == '["UX Design", "UI Design"]'

    def test_none_is_empty_array(self):
        assert encode_string_list(None) == "[]"

    def test_decoding_restores_values(self):
        values = ["Branding", "Design, Systems", 'Quoted "copy"']
        assert decode_string_list(encode_string_list(values)) == values


class TestDecodeStringList:

    def test_json_array(self):
        assert decode_string_list('["UX Design", "UI Design"]') == ["UX Design", "UI Design"]

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_values_are_empty(self, raw):
        assert decode_string_list(raw) == []

    def test_legacy_comma_separated_text(self):
        """Rows written before JSON encoding hold plain text."""
        assert decode_string_list("UX Design,  UI Design , ,Research") == [
            "UX Design",
            "UI Design",
            "Research",
        ]

    def test_single_legacy_value(self):
        assert decode_string_list("Healthcare") == ["Healthcare"]

    def test_json_that_is_not_an_array(self):
        assert decode_string_list('{"a": 1}') == []
        assert decode_string_list("42") == []

    def test_array_items_become_strings(self):
        assert decode_string_list("[2021, true]") == ["2021", "True"]

    def test_list_passes_through(self):
        assert decode_string_list(["a", "b"]) == ["a", "b"]


class TestJoinStringList:

    def test_default_separator(self):
        assert join_string_list('["UX", "UI"]') == "UX, UI"

    def test_custom_separator(self):
        assert join_string_list("UX, UI", " · ") == "UX · UI"

    def test_empty(self):
        assert join_string_list(None) == ""


def test_normalize_uuid():
    value = UUID("550e8400-e29b-41d4-a716-446655440000")
    assert normalize_uuid(value) == "550e8400-e29b-41d4-a716-446655440000"
    assert normalize_uuid("abc") == "abc"
