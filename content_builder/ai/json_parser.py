"""Lenient JSON parsing helpers for LLM outputs."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_json_fences(raw: str) -> str:
  """Drop every Markdown code-fence marker and surrounding whitespace."""
  return _FENCE_RE.sub("", raw).strip()


def parse_json_with_fallback(raw: str) -> Any:
  """Parse JSON strictly, then retry on balanced JSON blocks with trailing commas removed."""
  # Prefer strict parsing so valid JSON is preserved without mutation.
  try:
    return json.loads(raw)
  except json.JSONDecodeError as exc:
    last_error = exc

  # Try each top-level JSON array/object in turn to skip leading or trailing prose.
  search_from = 0
  while True:
    block = _extract_json_block(raw, search_from)
    if block is None:
      raise last_error

    start, end = block
    candidate = raw[start:end]
    try:
      return json.loads(candidate)
    except json.JSONDecodeError as exc:
      last_error = exc

    cleaned = _remove_trailing_commas(candidate)
    if cleaned != candidate:
      try:
        return json.loads(cleaned)
      except json.JSONDecodeError as exc:
        last_error = exc

    search_from = end


def _extract_json_block(raw: str, search_from: int = 0) -> tuple[int, int] | None:
  """Locate the first balanced JSON object/array at or after ``search_from``, honoring string escapes."""
  start_index: int | None = None
  depth = 0
  in_string = False
  escape = False

  for index in range(search_from, len(raw)):
    char = raw[index]
    if start_index is None:
      if char in "{[":
        start_index = index
        depth = 1
      continue

    if in_string:
      if escape:
        escape = False
      elif char == "\\":
        escape = True
      elif char == '"':
        in_string = False
      continue

    if char == '"':
      in_string = True
    elif char in "{[":
      depth += 1
    elif char in "}]":
      depth -= 1
      if depth == 0:
        return start_index, index + 1

  return None


def _remove_trailing_commas(text: str) -> str:
  """Drop commas that directly precede a closing bracket, leaving string literals untouched."""
  result: list[str] = []
  in_string = False
  escape = False

  for index, char in enumerate(text):
    if in_string:
      result.append(char)
      if escape:
        escape = False
      elif char == "\\":
        escape = True
      elif char == '"':
        in_string = False
      continue

    if char == '"':
      in_string = True
    elif char == "," and _next_significant(text, index + 1) in {"]", "}"}:
      continue

    result.append(char)

  return "".join(result)


def _next_significant(text: str, start: int) -> str:
  for index in range(start, len(text)):
    if not text[index].isspace():
      return text[index]
  return ""
