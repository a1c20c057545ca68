"""Generation policy: structural limits and sampling parameters for each stage."""

from __future__ import annotations

from dataclasses import dataclass, field

from content_builder.ai.providers.base import SamplingParams
from content_builder.config import Settings


@dataclass(frozen=True)
class GenerationPolicy:
  """Constants the planner and writer prompts are rendered with."""

  max_submodules: int = 4
  min_sections: int = 6
  max_sections: int = 10
  min_total_words: int = 10_000
  max_total_words: int = 12_000
  mcq_count: int = 5
  llm_call_timeout_seconds: float = 180.0
  job_timeout_seconds: float = 3600.0
  # Planning favors consistent structure; writing favors varied prose.
  planner_params: SamplingParams = field(default_factory=lambda: SamplingParams(temperature=0.4))
  section_params: SamplingParams = field(default_factory=lambda: SamplingParams(temperature=0.5, top_p=0.75, top_k=0))
  free_chat_params: SamplingParams = field(default_factory=lambda: SamplingParams(temperature=0.5, top_p=0.75, top_k=0))


def policy_from_settings(settings: Settings) -> GenerationPolicy:
  """Build the policy from process settings."""
  return GenerationPolicy(
    max_submodules=settings.max_submodules,
    min_sections=settings.plan_min_sections,
    max_sections=settings.plan_max_sections,
    min_total_words=settings.plan_min_total_words,
    max_total_words=settings.plan_max_total_words,
    mcq_count=settings.mcq_count,
    llm_call_timeout_seconds=settings.llm_call_timeout_seconds,
    job_timeout_seconds=settings.job_timeout_seconds,
  )
