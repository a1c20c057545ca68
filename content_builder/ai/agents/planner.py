"""Planner agent implementation."""

from __future__ import annotations

import logging

from content_builder.ai.agents.base import BaseAgent
from content_builder.ai.agents.prompts import PLANNER_SYSTEM_PROMPT, load_system_prompt, render_planner_prompt
from content_builder.ai.pipeline.contracts import JobContext, SectionPlan
from content_builder.ai.plan_parser import parse_section_plan

logger = logging.getLogger(__name__)


class PlannerAgent(BaseAgent[str, SectionPlan]):
  """Ask the model for a section outline of one submodule and validate it."""

  name = "Planner"

  async def run(self, input_data: str, ctx: JobContext) -> SectionPlan:
    """Plan the sections of the submodule named by ``input_data``."""
    prompt_text = render_planner_prompt(ctx.job, input_data, self._policy)
    raw_plan = await self._chat(
      system_instruction=load_system_prompt(PLANNER_SYSTEM_PROMPT), prompt=prompt_text, params=self._policy.planner_params, ctx=ctx, submodule=input_data, purpose="plan_submodule", call_index="1/1"
    )

    plan = parse_section_plan(raw_plan)
    total_words = sum(section.target_word_count for section in plan.sections)
    logger.info("Planner produced %d sections (%d words) for submodule %r", len(plan), total_words, input_data)

    # Out-of-range plans are still rendered; the ranges are requests, not guarantees.
    if not self._policy.min_sections <= len(plan) <= self._policy.max_sections:
      logger.warning("Planner returned %d sections for %r; requested %d-%d", len(plan), input_data, self._policy.min_sections, self._policy.max_sections)

    return plan
