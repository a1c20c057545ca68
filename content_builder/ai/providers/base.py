"""Base interfaces for AI providers and models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class SamplingParams:
  """Sampling knobs for a single chat call; None leaves the provider default."""

  temperature: float
  top_p: float | None = None
  top_k: int | None = None
  max_output_tokens: int | None = None


class ModelResponse(Protocol):
  """Response contract for model outputs."""

  content: str
  usage: dict[str, int] | None


@dataclass
class SimpleModelResponse:
  """Minimal model response structure."""

  content: str
  usage: dict[str, int] | None = None


class AIModel(ABC):
  """Abstract chat model: a system instruction plus one user message in, generated text out."""

  name: str
  supports_web_search: bool = False

  @abstractmethod
  async def chat(self, system_instruction: str, user_message: str, params: SamplingParams, *, web_search: bool = False) -> ModelResponse:
    """Generate a reply; raise GatewayError on any provider failure."""


class Provider(ABC):
  """Abstract base class for AI providers."""

  name: str

  @abstractmethod
  def get_model(self, model: str | None = None, *, api_key: str) -> AIModel:
    """Return the model client for the provider."""
