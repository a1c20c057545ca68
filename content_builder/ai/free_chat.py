"""Single-call pass-through chat."""

from __future__ import annotations

import asyncio
import logging

from content_builder.ai.agents.prompts import FREE_CHAT_SYSTEM_PROMPT, load_system_prompt
from content_builder.ai.pipeline.policy import GenerationPolicy
from content_builder.ai.providers.base import AIModel
from content_builder.core.errors import GatewayError
from content_builder.telemetry.context import llm_call_context
from content_builder.utils.ids import generate_job_id

logger = logging.getLogger(__name__)


async def run_free_chat(prompt: str, gateway: AIModel, policy: GenerationPolicy, *, web_search: bool = False) -> str:
  """Send the prompt straight to the model under the free-chat system instruction."""
  job_id = generate_job_id()
  timeout = policy.llm_call_timeout_seconds
  logger.info("Free chat %s: prompt_chars=%d web_search=%s", job_id, len(prompt), web_search)

  with llm_call_context(agent="FreeChat", submodule=None, job_id=job_id, purpose="free_chat", call_index="1/1"):
    try:
      response = await asyncio.wait_for(gateway.chat(load_system_prompt(FREE_CHAT_SYSTEM_PROMPT), prompt, policy.free_chat_params, web_search=web_search), timeout=timeout)
    except TimeoutError as exc:
      raise GatewayError(f"Free chat call timed out after {timeout:g}s", model=getattr(gateway, "name", None)) from exc

  return response.content
