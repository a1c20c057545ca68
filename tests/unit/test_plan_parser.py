"""Unit tests for planner output validation."""

from __future__ import annotations

import json

import pytest

from content_builder.ai.plan_parser import parse_section_plan
from content_builder.core.errors import PlanParseError

VALID_PLAN = [
  {"title": "Budgeting Basics", "summary": "What a budget is.", "wordCount": 1200},
  {"title": "Tracking Spending", "summary": "Apps and spreadsheets.", "wordCount": 1000},
  {"title": "Wrap-up", "summary": "Key takeaways.", "wordCount": 800},
]


def test_valid_array_preserves_length_and_order() -> None:
  plan = parse_section_plan(json.dumps(VALID_PLAN))

  assert len(plan) == 3
  assert [section.title for section in plan.sections] == ["Budgeting Basics", "Tracking Spending", "Wrap-up"]
  assert [section.target_word_count for section in plan.sections] == [1200, 1000, 800]
  assert plan.sections[1].summary == "Apps and spreadsheets."


def test_fenced_and_unfenced_inputs_give_identical_plans() -> None:
  raw = json.dumps(VALID_PLAN, indent=2)
  fenced = f"```json\n{raw}\n```"
  bare_fence = f"```\n{raw}\n```"

  assert parse_section_plan(fenced) == parse_section_plan(raw)
  assert parse_section_plan(bare_fence) == parse_section_plan(raw)


def test_uppercase_fence_marker_is_stripped() -> None:
  plan = parse_section_plan(f"```JSON\n{json.dumps(VALID_PLAN)}\n```")
  assert len(plan) == 3


def test_surrounding_prose_is_ignored() -> None:
  raw = f"Here is your plan:\n{json.dumps(VALID_PLAN)}\nLet me know if you need changes."
  assert parse_section_plan(raw) == parse_section_plan(json.dumps(VALID_PLAN))


def test_trailing_commas_are_tolerated() -> None:
  raw = '[{"title": "One", "summary": "First.", "wordCount": 500,}, {"title": "Two", "summary": "Second.", "wordCount": 600},]'
  plan = parse_section_plan(raw)
  assert [section.title for section in plan.sections] == ["One", "Two"]


def test_whole_float_word_count_is_accepted() -> None:
  plan = parse_section_plan('[{"title": "One", "summary": "First.", "wordCount": 1500.0}]')
  assert plan.sections[0].target_word_count == 1500


def test_title_and_summary_are_trimmed() -> None:
  plan = parse_section_plan('[{"title": "  Credit Scores  ", "summary": " How they work. ", "wordCount": 900}]')
  assert plan.sections[0].title == "Credit Scores"
  assert plan.sections[0].summary == "How they work."


def test_extra_keys_are_ignored() -> None:
  plan = parse_section_plan('[{"title": "One", "summary": "First.", "wordCount": 500, "notes": "ignored"}]')
  assert plan.sections[0].title == "One"


@pytest.mark.parametrize("raw", ['{"title": "One", "summary": "First.", "wordCount": 500}', '"just a string"', "null", "42"])
def test_non_array_json_is_rejected(raw: str) -> None:
  with pytest.raises(PlanParseError, match="expected a JSON array"):
    parse_section_plan(raw)


def test_wrapper_object_around_sections_is_rejected() -> None:
  with pytest.raises(PlanParseError, match="got object"):
    parse_section_plan(json.dumps({"sections": VALID_PLAN}))


def test_empty_array_is_rejected() -> None:
  with pytest.raises(PlanParseError, match="no sections"):
    parse_section_plan("[]")


@pytest.mark.parametrize("raw", ["", "   ", "not json at all", "[{'title': 'One'}]", "```json\n```"])
def test_undecodable_text_is_rejected(raw: str) -> None:
  with pytest.raises(PlanParseError, match="not valid JSON"):
    parse_section_plan(raw)


@pytest.mark.parametrize(
  ("element", "field"),
  [
    ({"summary": "s", "wordCount": 10}, "title"),
    ({"title": "", "summary": "s", "wordCount": 10}, "title"),
    ({"title": 7, "summary": "s", "wordCount": 10}, "title"),
    ({"title": "t", "wordCount": 10}, "summary"),
    ({"title": "t", "summary": "   ", "wordCount": 10}, "summary"),
    ({"title": "t", "summary": ["s"], "wordCount": 10}, "summary"),
    ({"title": "t", "summary": "s"}, "wordCount"),
    ({"title": "t", "summary": "s", "wordCount": "1000"}, "wordCount"),
    ({"title": "t", "summary": "s", "wordCount": True}, "wordCount"),
    ({"title": "t", "summary": "s", "wordCount": 0}, "wordCount"),
    ({"title": "t", "summary": "s", "wordCount": -50}, "wordCount"),
    ({"title": "t", "summary": "s", "wordCount": 99.5}, "wordCount"),
    ({"title": "t", "summary": "s", "wordCount": None}, "wordCount"),
  ],
)
def test_bad_element_fails_the_whole_plan(element: dict, field: str) -> None:
  raw = json.dumps([VALID_PLAN[0], element, VALID_PLAN[2]])

  with pytest.raises(PlanParseError) as exc_info:
    parse_section_plan(raw)

  assert exc_info.value.index == 1
  assert "at index 1" in str(exc_info.value)
  assert field in str(exc_info.value)


def test_non_object_element_is_rejected() -> None:
  with pytest.raises(PlanParseError, match="expected an object, got string") as exc_info:
    parse_section_plan('["Budgeting Basics"]')
  assert exc_info.value.index == 0


def test_first_bad_element_is_reported() -> None:
  raw = json.dumps([{"title": "t", "summary": "s", "wordCount": 1}, {"title": 1}, {"summary": 2}])

  with pytest.raises(PlanParseError) as exc_info:
    parse_section_plan(raw)

  assert exc_info.value.index == 1


def test_oversized_word_count_literal_is_a_parse_error() -> None:
  raw = '[{"title": "A", "summary": "B", "wordCount": ' + "9" * 5000 + "}]"

  with pytest.raises(PlanParseError, match="could not be decoded"):
    parse_section_plan(raw)


def test_pathological_nesting_is_a_parse_error() -> None:
  with pytest.raises(PlanParseError, match="could not be decoded"):
    parse_section_plan("[" * 100000 + "]" * 100000)


def test_trailing_comma_cleanup_leaves_string_content_alone() -> None:
  plan = parse_section_plan('[{"title": "A", "summary": "Pick one of (x, ]", "wordCount": 5,}]')

  assert plan.sections[0].summary == "Pick one of (x, ]"


def test_plan_after_bracketed_prose_is_found() -> None:
  raw = f"Plan [draft]: {json.dumps(VALID_PLAN)}"

  assert parse_section_plan(raw) == parse_section_plan(json.dumps(VALID_PLAN))
