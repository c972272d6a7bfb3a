"""
Tests for parsing item lists out of model text
"""
import pytest

from services.item_parser import parse_item_list


class TestParseItemList:
    @pytest.mark.unit
    def test_plain_json_array(self):
        assert parse_item_list('["gray sofa", "coffee table"]') == ["gray sofa", "coffee table"]

    @pytest.mark.unit
    def test_array_wrapped_in_prose(self):
        assert parse_item_list('Here are the items: ["sofa", "chair"] in the room.') == ["sofa", "chair"]

    @pytest.mark.unit
    def test_escaped_quotes_are_unescaped(self):
        assert parse_item_list('["24\\" TV", "lamp"]') == ['24" TV', "lamp"]

    @pytest.mark.unit
    def test_array_spanning_lines_in_code_fence(self):
        raw = '```json\n[\n  "walnut coffee table",\n  "blue velvet sofa"\n]\n```'

        assert parse_item_list(raw) == ["walnut coffee table", "blue velvet sofa"]

    @pytest.mark.unit
    def test_empty_array(self):
        assert parse_item_list("[]") == []

    @pytest.mark.unit
    def test_duplicates_kept_in_order(self):
        assert parse_item_list('["chair", "lamp", "chair"]') == ["chair", "lamp", "chair"]

    @pytest.mark.unit
    def test_first_array_wins(self):
        assert parse_item_list('["rug"] and also ["vase"]') == ["rug"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            '["sofa", 2]',
            "[1, 2, 3]",
            '["sofa", null]',
            '[{"name": "sofa"}]',
            '["sofa", true]',
        ],
    )
    def test_non_string_elements_rejected(self, raw):
        assert parse_item_list(raw) == []

    @pytest.mark.unit
    def test_nested_array_rejected(self):
        # Non-greedy match stops at the first ']' so this is malformed JSON
        assert parse_item_list('[["sofa"], "chair"]') == []

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "No furniture found.",
            "['single', 'quotes']",
            '["unterminated, "array"',
            '["trailing comma",]',
        ],
    )
    def test_unparseable_text_returns_empty(self, raw):
        assert parse_item_list(raw) == []

    @pytest.mark.unit
    def test_non_string_input_returns_empty(self):
        assert parse_item_list(None) == []
        assert parse_item_list(42) == []

    @pytest.mark.unit
    def test_deeply_nested_brackets_return_empty(self):
        assert parse_item_list("[" * 100000 + "]") == []

    @pytest.mark.unit
    def test_deeply_nested_brackets_in_prose_return_empty(self):
        raw = "Items: " + "[" * 50000 + '"sofa"]'

        assert parse_item_list(raw) == []
