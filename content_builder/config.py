"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from content_builder.utils.env import default_env_path, load_env_file

load_env_file(default_env_path(), override=False)

SUPPORTED_PROVIDERS: tuple[str, ...] = ("cohere", "gemini")


@dataclass(frozen=True)
class Settings:
  """Typed settings for the content builder service."""

  environment: str
  allowed_origins: tuple[str, ...]
  debug: bool
  provider: str
  model: str | None
  default_api_key: str | None
  max_submodules: int
  plan_min_sections: int
  plan_max_sections: int
  plan_min_total_words: int
  plan_max_total_words: int
  mcq_count: int
  llm_call_timeout_seconds: float
  job_timeout_seconds: float
  log_dir: Path
  log_max_bytes: int
  log_backup_count: int
  log_http_4xx: bool


def _parse_origins(raw: str | None) -> tuple[str, ...]:
  if not raw:
    return ("http://localhost:3000",)

  origins = [origin.strip() for origin in raw.split(",") if origin.strip()]

  if not origins:
    raise ValueError("CONTENT_BUILDER_ALLOWED_ORIGINS must include at least one origin.")

  if "*" in origins:
    raise ValueError("CONTENT_BUILDER_ALLOWED_ORIGINS must not include wildcard origins.")

  return tuple(origins)


def _parse_bool(raw: str | None) -> bool:
  """Parse a boolean-ish string from environment variables."""

  if raw is None:
    return False

  normalized = raw.strip().lower()
  return normalized in {"1", "true", "yes", "on"}


def _optional_str(raw: str | None) -> str | None:
  if raw is None:
    return None
  value = raw.strip()
  if value == "":
    return None
  return value


def _positive_int(name: str, default: str) -> int:
  value = int(os.getenv(name, default))
  if value <= 0:
    raise ValueError(f"{name} must be a positive integer.")
  return value


def _positive_float(name: str, default: str) -> float:
  value = float(os.getenv(name, default))
  if value <= 0:
    raise ValueError(f"{name} must be a positive number.")
  return value


def _resolve_default_api_key(provider: str) -> str | None:
  """Pick the process-wide fallback credential for the configured provider."""
  # A service-wide key wins over the provider-specific variable.
  explicit = _optional_str(os.getenv("CONTENT_BUILDER_API_KEY"))
  if explicit:
    return explicit

  return _optional_str(os.getenv(f"{provider.upper()}_API_KEY"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings once per process."""

  environment = os.getenv("CONTENT_BUILDER_ENV", "development").strip().lower()
  debug = _parse_bool(os.getenv("CONTENT_BUILDER_DEBUG"))

  provider = (os.getenv("CONTENT_BUILDER_PROVIDER") or "cohere").strip().lower()
  if provider not in SUPPORTED_PROVIDERS:
    raise ValueError(f"CONTENT_BUILDER_PROVIDER must be one of: {', '.join(SUPPORTED_PROVIDERS)}.")

  max_submodules = _positive_int("CONTENT_BUILDER_MAX_SUBMODULES", "4")

  plan_min_sections = _positive_int("CONTENT_BUILDER_PLAN_MIN_SECTIONS", "6")
  plan_max_sections = _positive_int("CONTENT_BUILDER_PLAN_MAX_SECTIONS", "10")
  if plan_min_sections > plan_max_sections:
    raise ValueError("CONTENT_BUILDER_PLAN_MIN_SECTIONS must not exceed CONTENT_BUILDER_PLAN_MAX_SECTIONS.")

  plan_min_total_words = _positive_int("CONTENT_BUILDER_PLAN_MIN_WORDS", "10000")
  plan_max_total_words = _positive_int("CONTENT_BUILDER_PLAN_MAX_WORDS", "12000")
  if plan_min_total_words > plan_max_total_words:
    raise ValueError("CONTENT_BUILDER_PLAN_MIN_WORDS must not exceed CONTENT_BUILDER_PLAN_MAX_WORDS.")

  mcq_count = _positive_int("CONTENT_BUILDER_MCQ_COUNT", "5")

  # Per-call deadline sits inside the whole-job deadline.
  llm_call_timeout_seconds = _positive_float("CONTENT_BUILDER_LLM_CALL_TIMEOUT_SECONDS", "180")
  job_timeout_seconds = _positive_float("CONTENT_BUILDER_JOB_TIMEOUT_SECONDS", "3600")

  log_max_bytes = _positive_int("CONTENT_BUILDER_LOG_MAX_BYTES", "5242880")  # 5MB default
  log_backup_count = int(os.getenv("CONTENT_BUILDER_LOG_BACKUP_COUNT", "10"))
  if log_backup_count < 0:
    raise ValueError("CONTENT_BUILDER_LOG_BACKUP_COUNT must be zero or a positive integer.")

  raw_log_dir = _optional_str(os.getenv("CONTENT_BUILDER_LOG_DIR"))
  log_dir = Path(raw_log_dir) if raw_log_dir else Path(__file__).resolve().parents[1] / "logs"

  return Settings(
    environment=environment,
    allowed_origins=_parse_origins(os.getenv("CONTENT_BUILDER_ALLOWED_ORIGINS")),
    debug=debug,
    provider=provider,
    model=_optional_str(os.getenv("CONTENT_BUILDER_MODEL")),
    default_api_key=_resolve_default_api_key(provider),
    max_submodules=max_submodules,
    plan_min_sections=plan_min_sections,
    plan_max_sections=plan_max_sections,
    plan_min_total_words=plan_min_total_words,
    plan_max_total_words=plan_max_total_words,
    mcq_count=mcq_count,
    llm_call_timeout_seconds=llm_call_timeout_seconds,
    job_timeout_seconds=job_timeout_seconds,
    log_dir=log_dir,
    log_max_bytes=log_max_bytes,
    log_backup_count=log_backup_count,
    log_http_4xx=_parse_bool(os.getenv("CONTENT_BUILDER_LOG_HTTP_4XX")),
  )
