"Orchestration for the plan-then-write content pipeline."

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, NoReturn

from content_builder.ai.agents import PlannerAgent, SectionWriter
from content_builder.ai.pipeline.contracts import CompiledSubmodule, GenerationJob, JobContext, PipelineResult, SectionTask
from content_builder.ai.pipeline.policy import GenerationPolicy
from content_builder.ai.providers.base import AIModel
from content_builder.core.errors import PipelineError, PolicyViolationError
from content_builder.utils.ids import generate_job_id

STAGE_PLANNING = "planning"
STAGE_SECTION = "section"

logger = logging.getLogger(__name__)


@dataclass
class _PipelineContext:
  """Mutable state for one job; tracks the stage in flight so aborts can name it."""

  job_context: JobContext
  result: PipelineResult = field(default_factory=dict)
  usage: list[dict[str, Any]] = field(default_factory=list)
  stage: str = STAGE_PLANNING
  submodule: str | None = None
  section_index: int | None = None


class ContentPipeline:
  """Plans and writes every requested submodule, one gateway call at a time."""

  def __init__(self, *, policy: GenerationPolicy, provider: str = "unknown") -> None:
    self._policy = policy
    self._provider = provider

  async def run(self, job: GenerationJob, gateway: AIModel, *, job_id: str | None = None) -> PipelineResult:
    """Run the job and return submodule name -> Markdown document, in request order.

    Any planning or writing failure aborts the whole job with a PipelineError; nothing
    computed so far is returned.
    """
    if len(job.submodule_names) > self._policy.max_submodules:
      raise PolicyViolationError(f"Maximum of {self._policy.max_submodules} submodules allowed per request")

    job_context = JobContext(job_id=job_id or generate_job_id(), created_at=datetime.now(UTC), provider=self._provider, model=getattr(gateway, "name", "unknown"), job=job)
    ctx = _PipelineContext(job_context=job_context)
    planner = PlannerAgent(model=gateway, policy=self._policy, use=ctx.usage.append)
    writer = SectionWriter(model=gateway, policy=self._policy, use=ctx.usage.append)

    logger.info("Starting job %s: module=%r submodules=%d provider=%s model=%s", job_context.job_id, job.module_name, len(job.submodule_names), job_context.provider, job_context.model)

    try:
      await asyncio.wait_for(self._run_submodules(ctx, planner, writer), timeout=self._policy.job_timeout_seconds)
    except TimeoutError as exc:
      message = f"Job deadline of {self._policy.job_timeout_seconds:g}s exceeded"
      logger.error("Job %s aborted: %s (stage=%s submodule=%r)", job_context.job_id, message, ctx.stage, ctx.submodule)
      raise PipelineError(message, stage=ctx.stage, submodule=ctx.submodule, section_index=ctx.section_index, completed=list(ctx.result)) from exc

    total_tokens = sum(int(entry.get("total_tokens") or 0) for entry in ctx.usage)
    logger.info("Job %s complete: %d submodules, %d calls with usage, %d total tokens", job_context.job_id, len(ctx.result), len(ctx.usage), total_tokens)
    return dict(ctx.result)

  async def _run_submodules(self, ctx: _PipelineContext, planner: PlannerAgent, writer: SectionWriter) -> None:
    for submodule in ctx.job_context.job.submodule_names:
      ctx.submodule = submodule
      ctx.stage = STAGE_PLANNING
      ctx.section_index = None

      try:
        plan = await planner.run(submodule, ctx.job_context)
      except Exception as exc:  # noqa: BLE001
        _raise_pipeline_error(ctx, exc)

      document = CompiledSubmodule.start(submodule)
      ctx.stage = STAGE_SECTION
      total = len(plan.sections)

      for index, section in enumerate(plan.sections):
        ctx.section_index = index
        task = SectionTask(submodule_name=submodule, section=section, position=index + 1, total=total)
        try:
          text = await writer.run(task, ctx.job_context)
        except Exception as exc:  # noqa: BLE001
          _raise_pipeline_error(ctx, exc)

        document.append_section(section.title, text, is_last=task.is_last)

      # Duplicate submodule names overwrite the earlier document.
      ctx.result[submodule] = document.document_text
      logger.info("Job %s compiled submodule %r (%d sections, %d chars)", ctx.job_context.job_id, submodule, document.section_count, len(document.document_text))


def _raise_pipeline_error(ctx: _PipelineContext, error: Exception) -> NoReturn:
  if ctx.stage == STAGE_PLANNING:
    message = f"Planning failed for submodule {ctx.submodule!r}: {error}"
  else:
    message = f"Writing section {ctx.section_index} failed for submodule {ctx.submodule!r}: {error}"
  logger.error("Job %s aborted: %s (completed=%s)", ctx.job_context.job_id, message, list(ctx.result))
  raise PipelineError(message, stage=ctx.stage, submodule=ctx.submodule, section_index=ctx.section_index, completed=list(ctx.result)) from error
