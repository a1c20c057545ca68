"""Exception handlers that shape every failure into the ``{"error": ...}`` envelope."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from content_builder.core.errors import ContentBuilderError, MissingCredentialError, PipelineError, PolicyViolationError

GENERIC_FAILURE_MESSAGE = "Failed to generate content"

logger = logging.getLogger("content_builder.core.exceptions")


def _coerce_json_safe(value: Any) -> Any:
  """Convert unsupported values into JSON-safe primitives for error responses."""
  if value is None or isinstance(value, bool | int | float | str):
    return value
  if isinstance(value, dict):
    return {str(key): _coerce_json_safe(item) for key, item in value.items()}
  if isinstance(value, list | tuple | set):
    return [_coerce_json_safe(item) for item in value]
  # Serialize exception instances explicitly to avoid leaking non-serializable objects.
  if isinstance(value, BaseException):
    error_message = str(value)
    if error_message:
      return f"{type(value).__name__}: {error_message}"
    return type(value).__name__
  return str(value)


def _error_payload(message: str, *, request_id: str | None = None, details: Any = None) -> dict[str, Any]:
  payload: dict[str, Any] = {"error": message}
  if details is not None:
    payload["details"] = details
  # Attach a request id so client reports can be matched to server logs.
  if request_id:
    payload["requestId"] = request_id
  return payload


def _sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
  """Return validation errors without raw input payloads."""
  sanitized: list[dict[str, Any]] = []
  for error in errors:
    scrubbed = {key: value for key, value in error.items() if key not in {"input", "url"}}
    if "ctx" in scrubbed and isinstance(scrubbed["ctx"], dict):
      scrubbed_ctx = dict(scrubbed["ctx"])
      scrubbed_ctx.pop("input", None)
      scrubbed["ctx"] = scrubbed_ctx

    sanitized.append(_coerce_json_safe(scrubbed))

  return sanitized


def _status_for(exc: ContentBuilderError) -> int:
  if isinstance(exc, MissingCredentialError | PolicyViolationError):
    return status.HTTP_400_BAD_REQUEST
  return status.HTTP_500_INTERNAL_SERVER_ERROR


async def content_builder_exception_handler(request: Request, exc: ContentBuilderError) -> JSONResponse:
  """Map domain errors to 400 (caller-correctable) or 500 (downstream failure)."""
  request_id = getattr(request.state, "request_id", None)
  status_code = _status_for(exc)

  if status_code < 500:
    logger.warning("Rejected request request_id=%s path=%s error_type=%s message=%s", request_id, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=status_code, content=_error_payload(str(exc), request_id=request_id))

  # Downstream details (prompts, provider messages) stay in the logs.
  if isinstance(exc, PipelineError):
    logger.error("Generation failed request_id=%s stage=%s submodule=%r section_index=%s completed=%s", request_id, exc.stage, exc.submodule, exc.section_index, exc.completed, exc_info=exc)
  else:
    logger.error("Generation failed request_id=%s error_type=%s", request_id, type(exc).__name__, exc_info=exc)
  return JSONResponse(status_code=status_code, content=_error_payload(GENERIC_FAILURE_MESSAGE, request_id=request_id))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
  """Log request validation errors without leaking payloads."""
  request_id = getattr(request.state, "request_id", None)
  sanitized_errors = _sanitize_validation_errors(list(exc.errors()))
  logger.warning("Request validation failed request_id=%s path=%s method=%s errors=%s", request_id, request.url.path, request.method, sanitized_errors)
  return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=_error_payload("Invalid request payload", request_id=request_id, details=sanitized_errors))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
  """Handle HTTPExceptions without exposing 5xx diagnostics."""
  from content_builder.config import get_settings

  request_id = getattr(request.state, "request_id", None)
  if exc.status_code >= 500:
    logger.error("HTTPException request_id=%s path=%s status_code=%s detail=%s", request_id, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=_error_payload("Internal Server Error", request_id=request_id))

  if get_settings().log_http_4xx:
    logger.warning("HTTPException request_id=%s path=%s status_code=%s detail=%s", request_id, request.url.path, exc.status_code, exc.detail)

  return JSONResponse(status_code=exc.status_code, content=_error_payload(str(exc.detail), request_id=request_id), headers=getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
  """Catch-all for unhandled errors."""
  request_id = getattr(request.state, "request_id", None)
  logger.error("Unhandled exception request_id=%s path=%s error_type=%s", request_id, request.url.path, type(exc).__name__, exc_info=exc)
  return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_error_payload("Internal Server Error", request_id=request_id))
