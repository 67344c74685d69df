"""Tests for extract_json_object across malformed model output."""

from __future__ import annotations

import pytest

from encounter_summary.exceptions import ResponseParseError
from encounter_summary.providers.json_parser import extract_json_object


class TestExtractJsonObject:
    def test_bare_object(self) -> None:
        assert extract_json_object('{"summary": "ok"}') == {"summary": "ok"}

    def test_leading_and_trailing_prose(self) -> None:
        text = 'Here is the summary:\n{"summary": "ok", "keyFindings": ["a"]}\nLet me know if you need more.'
        assert extract_json_object(text) == {"summary": "ok", "keyFindings": ["a"]}

    def test_fenced_block(self) -> None:
        text = '```json\n{"summary": "fenced"}\n```'
        assert extract_json_object(text) == {"summary": "fenced"}

    def test_nested_braces(self) -> None:
        text = '{"summary": "x", "meta": {"inner": {"deep": 1}}}'
        assert extract_json_object(text)["meta"]["inner"]["deep"] == 1

    def test_braces_in_trailing_prose_fall_back_to_balanced_scan(self) -> None:
        text = '{"summary": "first"} and then some {notes}'
        assert extract_json_object(text) == {"summary": "first"}

    def test_braces_inside_strings(self) -> None:
        text = 'Result: {"summary": "uses {curly} text"} trailing {junk'
        assert extract_json_object(text) == {"summary": "uses {curly} text"}

    def test_trailing_comma_tolerated(self) -> None:
        assert extract_json_object('{"summary": "ok", "recommendations": ["a", "b",],}') == {
            "summary": "ok",
            "recommendations": ["a", "b"],
        }

    def test_no_json_at_all(self) -> None:
        with pytest.raises(ResponseParseError) as exc_info:
            extract_json_object("I cannot summarize this patient.")
        assert exc_info.value.raw_response == "I cannot summarize this patient."

    def test_empty_string(self) -> None:
        with pytest.raises(ResponseParseError):
            extract_json_object("")

    def test_array_is_not_an_object(self) -> None:
        with pytest.raises(ResponseParseError):
            extract_json_object('["summary", "keyFindings"]')

    def test_unbalanced_object(self) -> None:
        with pytest.raises(ResponseParseError):
            extract_json_object('{"summary": "cut off')

    def test_invalid_json_in_braces(self) -> None:
        with pytest.raises(ResponseParseError):
            extract_json_object("{summary: not json}")
