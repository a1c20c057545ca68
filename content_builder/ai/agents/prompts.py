"""Prompt rendering shared by agents.

Templates live as Markdown files under ``content_builder/ai/prompts`` and use
``{{PLACEHOLDER}}`` markers. Rendering raises when a marker has no value, so a template
edit cannot ship a literal ``{{...}}`` to the model.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from content_builder.ai.pipeline.contracts import GenerationJob, SectionDescriptor
from content_builder.ai.pipeline.policy import GenerationPolicy

PLANNER_SYSTEM_PROMPT = "planner_system.md"
SECTION_WRITER_SYSTEM_PROMPT = "section_writer_system.md"
FREE_CHAT_SYSTEM_PROMPT = "free_chat_system.md"

MATH_REQUIREMENT_LINE = "- Include math-based examples or calculations where appropriate\n"

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")


def _replace_placeholders(template: str, values: dict[str, str]) -> str:
  """Substitute {{PLACEHOLDER}} markers in one pass, so caller text is never re-scanned."""
  missing = sorted({key for key in _PLACEHOLDER_RE.findall(template) if key not in values})
  if missing:
    raise ValueError(f"Prompt template has unfilled placeholders: {', '.join(missing)}")

  return _PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)


def _format_keywords(keywords: list[str]) -> str:
  return ", ".join(keywords)


def render_planner_prompt(job: GenerationJob, submodule: str, policy: GenerationPolicy) -> str:
  """Render the planning prompt for one submodule."""
  replacements = {
    "SUBMODULE": submodule,
    "MODULE": job.module_name,
    "KEYWORDS": _format_keywords(job.topic_keywords),
    "REQUIREMENTS": job.extra_requirements,
    "MIN_SECTIONS": str(policy.min_sections),
    "MAX_SECTIONS": str(policy.max_sections),
    "MIN_TOTAL_WORDS": str(policy.min_total_words),
    "MAX_TOTAL_WORDS": str(policy.max_total_words),
  }
  return _replace_placeholders(_load_prompt("planner.md"), replacements)


def render_section_prompt(job: GenerationJob, submodule: str, section: SectionDescriptor, policy: GenerationPolicy) -> str:
  """Render the writing prompt for one planned section."""
  replacements = {
    "SECTION_TITLE": section.title,
    "SECTION_SUMMARY": section.summary,
    "SUBMODULE": submodule,
    "MODULE": job.module_name,
    "WORD_COUNT": str(section.target_word_count),
    "MCQ_COUNT": str(policy.mcq_count),
    "MATH_REQUIREMENT": MATH_REQUIREMENT_LINE if job.include_math_questions else "",
  }
  return _replace_placeholders(_load_prompt("section_writer.md"), replacements)


def load_system_prompt(name: str) -> str:
  """Return a fixed system instruction by template name."""
  return _load_prompt(name)


@lru_cache(maxsize=16)
def _load_prompt(name: str) -> str:
  try:
    path = Path(__file__).parents[1] / "prompts" / name
    return path.read_text(encoding="utf-8").strip()
  except (FileNotFoundError, PermissionError, UnicodeDecodeError) as exc:
    raise RuntimeError(f"Failed to load prompt '{name}': {exc}") from exc
