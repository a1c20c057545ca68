"""Settings parsing tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from content_builder.ai.pipeline import policy_from_settings
from content_builder.config import get_settings
from content_builder.utils.env import load_env_file


def test_defaults() -> None:
  settings = get_settings()

  assert settings.provider == "cohere"
  assert settings.model is None
  assert settings.default_api_key is None
  assert settings.allowed_origins == ("http://localhost:3000",)
  assert settings.max_submodules == 4
  assert (settings.plan_min_sections, settings.plan_max_sections) == (6, 10)
  assert (settings.plan_min_total_words, settings.plan_max_total_words) == (10000, 12000)
  assert settings.mcq_count == 5
  assert settings.llm_call_timeout_seconds == 180.0
  assert settings.job_timeout_seconds == 3600.0


def test_provider_key_is_the_default_credential(monkeypatch) -> None:
  monkeypatch.setenv("COHERE_API_KEY", " co-key ")
  assert get_settings().default_api_key == "co-key"


def test_service_key_wins_over_provider_key(monkeypatch) -> None:
  monkeypatch.setenv("COHERE_API_KEY", "co-key")
  monkeypatch.setenv("CONTENT_BUILDER_API_KEY", "service-key")
  assert get_settings().default_api_key == "service-key"


def test_gemini_provider_reads_gemini_key(monkeypatch) -> None:
  monkeypatch.setenv("CONTENT_BUILDER_PROVIDER", "Gemini")
  monkeypatch.setenv("COHERE_API_KEY", "co-key")
  monkeypatch.setenv("GEMINI_API_KEY", "gm-key")

  settings = get_settings()
  assert settings.provider == "gemini"
  assert settings.default_api_key == "gm-key"


def test_unknown_provider_is_rejected(monkeypatch) -> None:
  monkeypatch.setenv("CONTENT_BUILDER_PROVIDER", "openai")
  with pytest.raises(ValueError, match="CONTENT_BUILDER_PROVIDER"):
    get_settings()


def test_wildcard_origin_is_rejected(monkeypatch) -> None:
  monkeypatch.setenv("CONTENT_BUILDER_ALLOWED_ORIGINS", "https://a.example, *")
  with pytest.raises(ValueError, match="wildcard"):
    get_settings()


def test_origins_are_split_and_trimmed(monkeypatch) -> None:
  monkeypatch.setenv("CONTENT_BUILDER_ALLOWED_ORIGINS", "https://a.example , https://b.example,")
  assert get_settings().allowed_origins == ("https://a.example", "https://b.example")


@pytest.mark.parametrize("name", ["CONTENT_BUILDER_MAX_SUBMODULES", "CONTENT_BUILDER_MCQ_COUNT", "CONTENT_BUILDER_JOB_TIMEOUT_SECONDS"])
def test_non_positive_numbers_are_rejected(monkeypatch, name: str) -> None:
  monkeypatch.setenv(name, "0")
  with pytest.raises(ValueError, match=name):
    get_settings()


def test_inverted_section_range_is_rejected(monkeypatch) -> None:
  monkeypatch.setenv("CONTENT_BUILDER_PLAN_MIN_SECTIONS", "12")
  with pytest.raises(ValueError, match="PLAN_MIN_SECTIONS"):
    get_settings()


def test_policy_mirrors_settings(monkeypatch) -> None:
  monkeypatch.setenv("CONTENT_BUILDER_MAX_SUBMODULES", "2")
  monkeypatch.setenv("CONTENT_BUILDER_MCQ_COUNT", "3")
  monkeypatch.setenv("CONTENT_BUILDER_LLM_CALL_TIMEOUT_SECONDS", "30")

  policy = policy_from_settings(get_settings())
  assert policy.max_submodules == 2
  assert policy.mcq_count == 3
  assert policy.llm_call_timeout_seconds == 30.0
  assert policy.planner_params.temperature == 0.4


def test_env_file_loader(tmp_path: Path, monkeypatch) -> None:
  env_file = tmp_path / ".env"
  env_file.write_text('# comment\nexport CB_TEST_A="quoted value"\nCB_TEST_B=plain\nCB_TEST_C=keep\nnot a pair\n', encoding="utf-8")
  # Register the keys so monkeypatch removes whatever the loader sets.
  for name in ("CB_TEST_A", "CB_TEST_B"):
    monkeypatch.setenv(name, "")
    monkeypatch.delenv(name)
  monkeypatch.setenv("CB_TEST_C", "existing")

  load_env_file(env_file)

  assert os.environ["CB_TEST_A"] == "quoted value"
  assert os.environ["CB_TEST_B"] == "plain"
  assert os.environ["CB_TEST_C"] == "existing"
