"""Validation of planner output into a typed section plan."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from content_builder.ai.json_parser import parse_json_with_fallback, strip_json_fences
from content_builder.ai.pipeline.contracts import SectionDescriptor, SectionPlan
from content_builder.core.errors import PlanParseError

logger = logging.getLogger(__name__)

_INVALID_FORMAT = "Invalid section plan format"


def parse_section_plan(raw_text: str) -> SectionPlan:
  """Turn raw planner text into a SectionPlan, all-or-nothing.

  The text may be wrapped in ```json fences or surrounded by stray prose; both are
  tolerated. Every element must carry a string ``title``, a string ``summary`` and a
  positive whole-number ``wordCount``. The first bad element aborts the parse.
  """
  cleaned = strip_json_fences(raw_text or "")

  try:
    decoded = parse_json_with_fallback(cleaned)
  except json.JSONDecodeError as exc:
    logger.warning("Section plan is not valid JSON: %s", exc)
    raise PlanParseError(f"{_INVALID_FORMAT}: response is not valid JSON ({exc.msg}).") from exc
  except (ValueError, RecursionError) as exc:
    # Oversized integer literals and pathological nesting fail inside the decoder itself.
    logger.warning("Section plan could not be decoded: %s", type(exc).__name__)
    raise PlanParseError(f"{_INVALID_FORMAT}: response could not be decoded ({type(exc).__name__}).") from exc

  if not isinstance(decoded, list):
    raise PlanParseError(f"{_INVALID_FORMAT}: expected a JSON array of sections, got {_json_type(decoded)}.")

  if not decoded:
    raise PlanParseError(f"{_INVALID_FORMAT}: the plan contains no sections.")

  sections = [_parse_section(item, index) for index, item in enumerate(decoded)]
  return SectionPlan(sections=sections)


def _parse_section(item: Any, index: int) -> SectionDescriptor:
  if not isinstance(item, dict):
    raise PlanParseError(f"Invalid section format at index {index}: expected an object, got {_json_type(item)}.", index=index)

  title = item.get("title")
  summary = item.get("summary")
  word_count = item.get("wordCount")

  if not isinstance(title, str) or not title.strip():
    raise PlanParseError(f"Invalid section format at index {index}: 'title' must be a non-empty string.", index=index)

  if not isinstance(summary, str) or not summary.strip():
    raise PlanParseError(f"Invalid section format at index {index}: 'summary' must be a non-empty string.", index=index)

  if not _is_whole_positive_number(word_count):
    raise PlanParseError(f"Invalid section format at index {index}: 'wordCount' must be a positive whole number.", index=index)

  return SectionDescriptor(title=title.strip(), summary=summary.strip(), target_word_count=int(word_count))


def _is_whole_positive_number(value: Any) -> bool:
  # bool is an int subclass but JSON true/false is not a number.
  if isinstance(value, bool) or not isinstance(value, int | float):
    return False

  if isinstance(value, float) and (not math.isfinite(value) or not value.is_integer()):
    return False

  return value > 0


def _json_type(value: Any) -> str:
  if value is None:
    return "null"
  if isinstance(value, bool):
    return "boolean"
  if isinstance(value, int | float):
    return "number"
  if isinstance(value, str):
    return "string"
  if isinstance(value, list):
    return "array"
  return "object"
