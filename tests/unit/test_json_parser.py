from __future__ import annotations

import json

import pytest

from content_builder.ai.json_parser import parse_json_with_fallback, strip_json_fences


def test_strict_json_is_returned_unchanged() -> None:
  assert parse_json_with_fallback('{"a": [1, 2]}') == {"a": [1, 2]}


def test_first_block_is_extracted_from_prose() -> None:
  assert parse_json_with_fallback('Sure! [1, 2, 3] Hope that helps [4]') == [1, 2, 3]


def test_brackets_inside_strings_do_not_end_the_block() -> None:
  raw = 'Plan: [{"title": "Needs [vs] wants", "summary": "A \\"quoted\\" ]"}] done'
  assert parse_json_with_fallback(raw) == [{"title": "Needs [vs] wants", "summary": 'A "quoted" ]'}]


def test_unrecoverable_text_raises_decode_error() -> None:
  with pytest.raises(json.JSONDecodeError):
    parse_json_with_fallback("[1, 2")


def test_strip_json_fences_removes_markers() -> None:
  assert strip_json_fences("```json\n[1]\n```\n") == "[1]"


def test_commas_inside_strings_survive_cleanup() -> None:
  assert parse_json_with_fallback('{"note": "a, } b", "items": [1, 2,],}') == {"note": "a, } b", "items": [1, 2]}


def test_later_block_is_tried_when_earlier_one_fails() -> None:
  assert parse_json_with_fallback("Notes [draft] then [1, 2]") == [1, 2]
