import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from content_builder.core.env_contract import EnvContractError, validate_runtime_env_or_raise
from content_builder.core.logging import initialize_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
  """Set up logging and check the environment contract once uvicorn starts."""
  from content_builder.config import get_settings

  settings = get_settings()
  logger = logging.getLogger("content_builder.core.lifespan")

  try:
    initialize_logging(settings)
    logger.info("Startup complete - logging verified.")
    validate_runtime_env_or_raise(logger=logger)
    if settings.default_api_key is None:
      logger.warning("No default %s API key configured; requests must send x-api-key.", settings.provider)

  except EnvContractError:
    logger.error("Environment contract failed; refusing to start the service.", exc_info=True)
    raise

  except RuntimeError:
    # Log directory problems should not keep the service from answering requests.
    logger.warning("Initial logging setup failed; continuing with default handlers.", exc_info=True)

  yield

  logger.info("Shutdown complete.")
