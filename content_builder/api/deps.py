"""Shared FastAPI dependencies for credentials, policy and the model gateway."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, Header

from content_builder.ai.pipeline.policy import GenerationPolicy, policy_from_settings
from content_builder.ai.providers.base import AIModel
from content_builder.ai.router import get_model_for_mode
from content_builder.config import Settings, get_settings
from content_builder.core.errors import GatewayError, MissingCredentialError

GatewayFactory = Callable[[str], AIModel]


def resolve_api_key(x_api_key: str | None = Header(default=None), settings: Settings = Depends(get_settings)) -> str:  # noqa: B008
  """Prefer the caller's x-api-key header, falling back to the configured default."""
  if x_api_key is not None and x_api_key.strip():
    return x_api_key.strip()

  if settings.default_api_key:
    return settings.default_api_key

  raise MissingCredentialError()


def get_policy(settings: Settings = Depends(get_settings)) -> GenerationPolicy:  # noqa: B008
  return policy_from_settings(settings)


def get_gateway_factory(settings: Settings = Depends(get_settings)) -> GatewayFactory:  # noqa: B008
  """Return a builder that creates a gateway for one request's credential."""

  def build(api_key: str) -> AIModel:
    try:
      return get_model_for_mode(settings.provider, settings.model, api_key=api_key)
    except ValueError as exc:
      raise GatewayError(str(exc), provider=settings.provider, model=settings.model) from exc

  return build
