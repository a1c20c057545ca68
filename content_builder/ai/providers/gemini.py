"""Gemini provider implementation using the google-genai SDK."""

from __future__ import annotations

import logging
from typing import Final

from google import genai
from google.genai import types

from content_builder.ai.providers.base import AIModel, ModelResponse, Provider, SamplingParams, SimpleModelResponse
from content_builder.core.errors import GatewayError
from content_builder.telemetry.context import describe_llm_call_context

logger = logging.getLogger("content_builder.ai.providers.gemini")


class GeminiModel(AIModel):
  """Gemini chat model client with optional Google Search grounding."""

  supports_web_search = True

  def __init__(self, name: str, api_key: str) -> None:
    self.name: str = name
    if not api_key:
      raise GatewayError("Gemini API key is required", provider="gemini", model=name)

    self._client = genai.Client(api_key=api_key)

  def _build_config(self, system_instruction: str, params: SamplingParams, *, web_search: bool) -> types.GenerateContentConfig:
    tools = [types.Tool(google_search=types.GoogleSearch())] if web_search else None
    # Gemini rejects top_k=0; a zero means "no top-k cut-off" upstream.
    top_k = params.top_k if params.top_k else None
    return types.GenerateContentConfig(system_instruction=system_instruction, temperature=params.temperature, top_p=params.top_p, top_k=top_k, max_output_tokens=params.max_output_tokens, tools=tools)

  async def chat(self, system_instruction: str, user_message: str, params: SamplingParams, *, web_search: bool = False) -> ModelResponse:
    """Generate text from Gemini without blocking the event loop."""
    call = describe_llm_call_context()
    config = self._build_config(system_instruction, params, web_search=web_search)

    logger.info("Gemini request model=%s temperature=%s top_p=%s web_search=%s (%s)", self.name, params.temperature, params.top_p, web_search, call)
    try:
      response = await self._client.aio.models.generate_content(model=self.name, contents=user_message, config=config)
    except Exception as exc:  # noqa: BLE001
      raise GatewayError(f"Gemini request failed: {exc}", provider="gemini", model=self.name) from exc

    content = response.text
    if not content or not content.strip():
      raise GatewayError("Gemini returned an empty response", provider="gemini", model=self.name)

    usage = None
    if response.usage_metadata:
      usage = {"prompt_tokens": response.usage_metadata.prompt_token_count or 0, "completion_tokens": response.usage_metadata.candidates_token_count or 0, "total_tokens": response.usage_metadata.total_token_count or 0}

    logger.info("Gemini response chars=%d usage=%s (%s)", len(content), usage, call)
    logger.debug("Gemini response:\n%s", content)
    return SimpleModelResponse(content=content, usage=usage)


class GeminiProvider(Provider):
  """Gemini provider."""

  _DEFAULT_MODEL: Final[str] = "gemini-2.5-flash"
  _AVAILABLE_MODELS: Final[set[str]] = {"gemini-2.5-pro", "gemini-2.5-flash", "gemini-2.0-flash", "gemini-2.0-flash-lite"}

  def __init__(self) -> None:
    self.name: str = "gemini"

  def get_model(self, model: str | None = None, *, api_key: str) -> AIModel:
    """Return a Gemini model client."""
    model_name = model or self._DEFAULT_MODEL
    if model_name not in self._AVAILABLE_MODELS:
      raise ValueError(f"Unsupported Gemini model '{model_name}'.")
    return GeminiModel(model_name, api_key=api_key)
