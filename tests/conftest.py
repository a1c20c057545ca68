"""Shared fixtures: scripted model gateways, settings isolation and an HTTP client."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from content_builder.ai.providers.base import AIModel, SamplingParams, SimpleModelResponse
from content_builder.api.deps import get_gateway_factory
from content_builder.config import get_settings
from content_builder.main import app


class StubGateway(AIModel):
  """Gateway that replays scripted replies in order and records every call."""

  def __init__(self, responses: list[str | BaseException], *, name: str = "stub-model", usage: dict[str, int] | None = None, delay: float = 0.0) -> None:
    self.name = name
    self.calls: list[dict[str, Any]] = []
    self._responses = list(responses)
    self._usage = usage
    self._delay = delay

  async def chat(self, system_instruction: str, user_message: str, params: SamplingParams, *, web_search: bool = False) -> SimpleModelResponse:
    self.calls.append({"system": system_instruction, "user": user_message, "params": params, "web_search": web_search})
    if self._delay:
      await asyncio.sleep(self._delay)
    if not self._responses:
      raise AssertionError("Unexpected gateway call")
    reply = self._responses.pop(0)
    if isinstance(reply, BaseException):
      raise reply
    return SimpleModelResponse(content=reply, usage=self._usage)


def _plan_json(*titles: str, words: int = 500) -> str:
  return json.dumps([{"title": title, "summary": f"About {title.lower()}.", "wordCount": words} for title in titles])


@pytest.fixture
def anyio_backend():
  return "asyncio"


@pytest.fixture
def stub_gateway():
  """Factory for scripted gateways."""
  return StubGateway


@pytest.fixture
def plan_json():
  """Render a planner reply for the given section titles."""
  return _plan_json


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
  """Isolate tests from ambient credentials and cached settings."""
  for name in ("CONTENT_BUILDER_API_KEY", "COHERE_API_KEY", "GEMINI_API_KEY", "CONTENT_BUILDER_PROVIDER", "CONTENT_BUILDER_MODEL", "CONTENT_BUILDER_MAX_SUBMODULES", "CONTENT_BUILDER_ENV_CONTRACT_ENFORCE"):
    monkeypatch.delenv(name, raising=False)
  get_settings.cache_clear()
  yield
  get_settings.cache_clear()


@pytest.fixture
def gateway_holder():
  """Mutable slot the HTTP fixtures read the active gateway from; also records credentials."""
  return {"gateway": None, "api_keys": []}


@pytest.fixture
async def async_client(gateway_holder):
  def _factory_override():
    def build(api_key: str) -> AIModel:
      gateway_holder["api_keys"].append(api_key)
      if gateway_holder["gateway"] is None:
        raise AssertionError("No stub gateway configured for this test")
      return gateway_holder["gateway"]

    return build

  app.dependency_overrides[get_gateway_factory] = _factory_override
  async with AsyncClient(transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test") as client:
    yield client
  app.dependency_overrides.clear()
