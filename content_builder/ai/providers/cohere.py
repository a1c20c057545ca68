"""Cohere provider implementation using the openai SDK against Cohere's compatibility endpoint."""

from __future__ import annotations

import logging
from typing import Any, Final

import openai
from openai import AsyncOpenAI

from content_builder.ai.providers.base import AIModel, ModelResponse, Provider, SamplingParams, SimpleModelResponse
from content_builder.core.errors import GatewayError
from content_builder.telemetry.context import describe_llm_call_context

COHERE_COMPATIBILITY_BASE_URL: Final[str] = "https://api.cohere.ai/compatibility/v1"

logger = logging.getLogger("content_builder.ai.providers.cohere")


class CohereModel(AIModel):
  """Cohere chat model client."""

  def __init__(self, name: str, api_key: str, base_url: str | None = None) -> None:
    self.name: str = name
    if not api_key:
      raise GatewayError("Cohere API key is required", provider="cohere", model=name)

    # Retries are disabled: a failed call aborts the job.
    self._client = AsyncOpenAI(api_key=api_key, base_url=base_url or COHERE_COMPATIBILITY_BASE_URL, max_retries=0)

  async def chat(self, system_instruction: str, user_message: str, params: SamplingParams, *, web_search: bool = False) -> ModelResponse:
    """Generate a chat completion from Cohere."""
    call = describe_llm_call_context()
    if web_search:
      logger.info("Cohere ignores the web search hint (%s)", call)

    request: dict[str, Any] = {"temperature": params.temperature}
    if params.top_p is not None:
      request["top_p"] = params.top_p
    if params.max_output_tokens is not None:
      request["max_tokens"] = params.max_output_tokens
    # The compatibility endpoint has no top_k; Cohere treats k=0 as disabled anyway.
    if params.top_k:
      logger.debug("Cohere compatibility endpoint drops top_k=%s (%s)", params.top_k, call)

    logger.info("Cohere request model=%s temperature=%s top_p=%s (%s)", self.name, params.temperature, params.top_p, call)
    try:
      response = await self._client.chat.completions.create(model=self.name, messages=[{"role": "system", "content": system_instruction}, {"role": "user", "content": user_message}], stream=False, **request)
    except openai.APIError as exc:
      raise GatewayError(f"Cohere request failed: {exc}", provider="cohere", model=self.name) from exc

    if not response.choices:
      raise GatewayError("Cohere returned no choices", provider="cohere", model=self.name)

    content = response.choices[0].message.content
    if not content or not content.strip():
      raise GatewayError("Cohere returned an empty message", provider="cohere", model=self.name)

    usage = None
    if response.usage:
      usage = {"prompt_tokens": response.usage.prompt_tokens, "completion_tokens": response.usage.completion_tokens, "total_tokens": response.usage.total_tokens}

    logger.info("Cohere response chars=%d usage=%s (%s)", len(content), usage, call)
    logger.debug("Cohere response:\n%s", content)
    return SimpleModelResponse(content=content, usage=usage)


class CohereProvider(Provider):
  """Cohere provider."""

  _DEFAULT_MODEL: Final[str] = "command-a-03-2025"
  _AVAILABLE_MODELS: Final[set[str]] = {"command-a-03-2025", "command-r-plus-08-2024", "command-r-08-2024", "command-r7b-12-2024"}

  def __init__(self, base_url: str | None = None) -> None:
    self.name: str = "cohere"
    self._base_url = base_url

  def get_model(self, model: str | None = None, *, api_key: str) -> AIModel:
    """Return a Cohere model client."""
    model_name = model or self._DEFAULT_MODEL
    if model_name not in self._AVAILABLE_MODELS:
      raise ValueError(f"Unsupported Cohere model '{model_name}'.")
    return CohereModel(model_name, api_key=api_key, base_url=self._base_url)
