"""Provider implementations."""

from content_builder.ai.providers.base import AIModel, ModelResponse, Provider, SamplingParams, SimpleModelResponse
from content_builder.ai.providers.cohere import CohereModel, CohereProvider
from content_builder.ai.providers.gemini import GeminiModel, GeminiProvider

__all__ = ["AIModel", "ModelResponse", "Provider", "SamplingParams", "SimpleModelResponse", "CohereModel", "CohereProvider", "GeminiModel", "GeminiProvider"]
