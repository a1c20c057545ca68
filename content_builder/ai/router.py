"""Routing utilities for provider/model selection."""

from __future__ import annotations

from enum import Enum

from content_builder.ai.providers.base import AIModel, Provider
from content_builder.ai.providers.cohere import CohereProvider
from content_builder.ai.providers.gemini import GeminiProvider


class ProviderMode(str, Enum):
  """Supported provider modes."""

  COHERE = "cohere"
  GEMINI = "gemini"


def get_provider_for_mode(mode: str | ProviderMode) -> Provider:
  """Return a provider instance for the given mode."""
  key = mode.value if isinstance(mode, ProviderMode) else mode
  if key == ProviderMode.COHERE.value:
    return CohereProvider()
  if key == ProviderMode.GEMINI.value:
    return GeminiProvider()
  raise ValueError(f"Unsupported provider mode '{mode}'.")


def get_model_for_mode(mode: str | ProviderMode, model: str | None = None, *, api_key: str) -> AIModel:
  """Return a model client for the given mode, model name and caller credential."""
  provider = get_provider_for_mode(mode)
  return provider.get_model(model, api_key=api_key)
