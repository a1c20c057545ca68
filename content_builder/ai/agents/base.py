"""Base class for AI agents."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from content_builder.ai.pipeline.contracts import JobContext
from content_builder.ai.pipeline.policy import GenerationPolicy
from content_builder.ai.providers.base import AIModel, SamplingParams
from content_builder.core.errors import GatewayError
from content_builder.telemetry.context import llm_call_context

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
UsageSink = Callable[[dict[str, Any]], None] | None


class BaseAgent(ABC, Generic[InputT, OutputT]):
  """Base agent with shared dependencies."""

  name: str

  def __init__(self, *, model: AIModel, policy: GenerationPolicy, use: UsageSink = None) -> None:
    self._model = model
    self._policy = policy
    self._usage_sink = use

  @abstractmethod
  async def run(self, input_data: InputT, ctx: JobContext) -> OutputT:
    """Run the agent on input data."""

  async def _chat(self, *, system_instruction: str, prompt: str, params: SamplingParams, ctx: JobContext, submodule: str, purpose: str, call_index: str) -> str:
    """Issue one bounded gateway call under this agent's telemetry context."""
    timeout = self._policy.llm_call_timeout_seconds
    with llm_call_context(agent=self.name, submodule=submodule, job_id=ctx.job_id, purpose=purpose, call_index=call_index):
      try:
        response = await asyncio.wait_for(self._model.chat(system_instruction, prompt, params, web_search=ctx.job.web_search_enabled), timeout=timeout)
      except TimeoutError as exc:
        raise GatewayError(f"{self.name} call timed out after {timeout:g}s", model=getattr(self._model, "name", None)) from exc

    self._record_usage(purpose=purpose, call_index=call_index, usage=response.usage)
    return response.content

  def _record_usage(self, *, purpose: str, call_index: str, usage: dict[str, int] | None) -> None:
    if not usage or not self._usage_sink:
      return
    payload = {"model": getattr(self._model, "name", "unknown"), "agent": self.name, "purpose": purpose, "call_index": call_index, **usage}
    self._usage_sink(payload)
