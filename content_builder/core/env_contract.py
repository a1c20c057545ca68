"""Runtime environment contract checks for the service process.

Keeps deploy-time configuration mistakes visible at startup and redacts
secret values in the startup log.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from content_builder.config import SUPPORTED_PROVIDERS

EnvValidator = Callable[[str, dict[str, str]], str | None]


@dataclass(frozen=True)
class EnvVarDefinition:
  """Describe how an environment variable must be validated."""

  name: str
  required: bool
  secret: bool
  validator: EnvValidator | None = None


class EnvContractError(RuntimeError):
  """Raised when required runtime environment keys are missing or invalid."""


def _parse_bool(raw: str | None, *, default: bool = False) -> bool:
  if raw is None:
    return default

  return raw.strip().lower() in {"1", "true", "yes", "on"}


def _validate_allowed_origins(value: str, _: dict[str, str]) -> str | None:
  """Reject wildcard and empty origin lists."""
  origins = [origin.strip() for origin in value.split(",") if origin.strip()]
  if not origins:
    return "must include at least one origin."

  if "*" in origins:
    return "must not include wildcard origins."

  return None


def _validate_environment_name(value: str, _: dict[str, str]) -> str | None:
  normalized = value.strip().lower()
  if normalized in {"dev", "development", "stage", "staging", "prod", "production", "test", "testing"}:
    return None

  return "must be one of: development, stage, production, test (or aliases)."


def _validate_provider(value: str, _: dict[str, str]) -> str | None:
  if value.strip().lower() in SUPPORTED_PROVIDERS:
    return None

  return f"must be one of: {', '.join(SUPPORTED_PROVIDERS)}."


def _validate_positive_int(value: str, _: dict[str, str]) -> str | None:
  try:
    parsed = int(value.strip())
  except ValueError:
    return "must be an integer."

  if parsed <= 0:
    return "must be a positive integer."

  return None


def _validate_positive_number(value: str, _: dict[str, str]) -> str | None:
  try:
    parsed = float(value.strip())
  except ValueError:
    return "must be a number."

  if parsed <= 0:
    return "must be a positive number."

  return None


REQUIRED_ENV_REGISTRY: tuple[EnvVarDefinition, ...] = (
  EnvVarDefinition(name="CONTENT_BUILDER_ENV", required=True, secret=False, validator=_validate_environment_name),
  EnvVarDefinition(name="CONTENT_BUILDER_ALLOWED_ORIGINS", required=True, secret=False, validator=_validate_allowed_origins),
  EnvVarDefinition(name="CONTENT_BUILDER_PROVIDER", required=False, secret=False, validator=_validate_provider),
  EnvVarDefinition(name="CONTENT_BUILDER_MODEL", required=False, secret=False),
  EnvVarDefinition(name="CONTENT_BUILDER_MAX_SUBMODULES", required=False, secret=False, validator=_validate_positive_int),
  EnvVarDefinition(name="CONTENT_BUILDER_LLM_CALL_TIMEOUT_SECONDS", required=False, secret=False, validator=_validate_positive_number),
  EnvVarDefinition(name="CONTENT_BUILDER_JOB_TIMEOUT_SECONDS", required=False, secret=False, validator=_validate_positive_number),
  EnvVarDefinition(name="CONTENT_BUILDER_API_KEY", required=False, secret=True),
  EnvVarDefinition(name="COHERE_API_KEY", required=False, secret=True),
  EnvVarDefinition(name="GEMINI_API_KEY", required=False, secret=True),
)


def list_required_env_names() -> tuple[str, ...]:
  """Expose required key names for deploy automation."""
  return tuple(definition.name for definition in REQUIRED_ENV_REGISTRY if definition.required)


def validate_env_values(*, env_map: dict[str, str]) -> list[str]:
  """Validate a provided env map against the contract rules."""
  errors: list[str] = []
  for definition in REQUIRED_ENV_REGISTRY:
    value = env_map.get(definition.name, "")
    if definition.required and value.strip() == "":
      errors.append(f"{definition.name}: required variable is missing.")
      continue

    if definition.validator and value.strip() != "":
      validation_error = definition.validator(value, env_map)
      if validation_error:
        errors.append(f"{definition.name}: {validation_error}")

  return errors


def validate_runtime_env_or_raise(*, logger: logging.Logger) -> None:
  """Validate and log runtime env values; raise only when enforcement is enabled."""
  # Off by default so CI and local runs can start without a full deployment config.
  env_contract_enabled = _parse_bool(os.getenv("CONTENT_BUILDER_ENV_CONTRACT_ENFORCE"), default=False)
  resolved_values: dict[str, str] = {}
  for definition in REQUIRED_ENV_REGISTRY:
    value = os.getenv(definition.name, "")
    resolved_values[definition.name] = value
    if value == "":
      logger.info("ENV_CHECK key=%s value=<missing>", definition.name)
    elif definition.secret:
      logger.info("ENV_CHECK key=%s value=<redacted>", definition.name)
    else:
      logger.info("ENV_CHECK key=%s value=%s", definition.name, value)

  errors = validate_env_values(env_map=resolved_values)

  if not errors:
    logger.info("ENV_CHECK status=ok checked=%d", len(REQUIRED_ENV_REGISTRY))
    return

  message = "ENV_CHECK status=failed violations:\n- {errors}".format(errors="\n- ".join(errors))
  if env_contract_enabled:
    logger.error(message)
    raise EnvContractError(message)

  logger.warning("ENV_CHECK enforcement disabled by CONTENT_BUILDER_ENV_CONTRACT_ENFORCE=0")
  logger.warning(message)
