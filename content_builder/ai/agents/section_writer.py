"""Section writer agent implementation."""

from __future__ import annotations

import logging

from content_builder.ai.agents.base import BaseAgent
from content_builder.ai.agents.prompts import SECTION_WRITER_SYSTEM_PROMPT, load_system_prompt, render_section_prompt
from content_builder.ai.pipeline.contracts import JobContext, SectionTask

logger = logging.getLogger(__name__)


class SectionWriter(BaseAgent[SectionTask, str]):
  """Expand one planned section into Markdown prose."""

  name = "SectionWriter"

  async def run(self, input_data: SectionTask, ctx: JobContext) -> str:
    """Write the section and return its text with outer whitespace trimmed."""
    prompt_text = render_section_prompt(ctx.job, input_data.submodule_name, input_data.section, self._policy)
    text = await self._chat(
      system_instruction=load_system_prompt(SECTION_WRITER_SYSTEM_PROMPT),
      prompt=prompt_text,
      params=self._policy.section_params,
      ctx=ctx,
      submodule=input_data.submodule_name,
      purpose="write_section",
      call_index=f"{input_data.position}/{input_data.total}",
    )

    text = text.strip()
    logger.info("SectionWriter wrote %d words for %r (target %d)", len(text.split()), input_data.section.title, input_data.section.target_word_count)
    return text
