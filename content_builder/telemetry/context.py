"""Context helpers for correlating LLM calls with the job that issued them."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True)
class LlmCallContext:
  """Upstream metadata stamped onto provider log lines."""

  agent: str
  submodule: str | None
  job_id: str | None
  purpose: str | None
  call_index: str | None

  def describe(self) -> str:
    return f"agent={self.agent} job_id={self.job_id} submodule={self.submodule!r} purpose={self.purpose} call={self.call_index}"


_CURRENT_LLM_CONTEXT: ContextVar[LlmCallContext | None] = ContextVar("llm_call_context", default=None)


def get_llm_call_context() -> LlmCallContext | None:
  """Return the active LLM call context, if any."""
  return _CURRENT_LLM_CONTEXT.get()


def describe_llm_call_context() -> str:
  """Render the active context for log lines; empty when no call is in flight."""
  context = _CURRENT_LLM_CONTEXT.get()
  if context is None:
    return "agent=<none>"
  return context.describe()


@contextmanager
def llm_call_context(*, agent: str, submodule: str | None, job_id: str | None, purpose: str | None, call_index: str | None) -> Iterator[LlmCallContext]:
  """Set contextual metadata for downstream LLM calls and reset it afterward."""
  context = LlmCallContext(agent=agent, submodule=submodule, job_id=job_id, purpose=purpose, call_index=call_index)
  token = _CURRENT_LLM_CONTEXT.set(context)

  try:
    yield context

  finally:
    _CURRENT_LLM_CONTEXT.reset(token)
