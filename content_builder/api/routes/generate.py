from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from content_builder.ai.free_chat import run_free_chat
from content_builder.ai.orchestrator import ContentPipeline
from content_builder.ai.pipeline.policy import GenerationPolicy
from content_builder.api.deps import GatewayFactory, get_gateway_factory, get_policy, resolve_api_key
from content_builder.api.models import GenerateRequest, GenerateResponse
from content_builder.config import Settings, get_settings
from content_builder.core.errors import PolicyViolationError
from content_builder.utils.ids import generate_job_id

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateResponse)
async def generate(
  request: GenerateRequest,
  api_key: Annotated[str, Depends(resolve_api_key)],
  policy: Annotated[GenerationPolicy, Depends(get_policy)],
  gateway_factory: Annotated[GatewayFactory, Depends(get_gateway_factory)],
  settings: Annotated[Settings, Depends(get_settings)],
) -> GenerateResponse:
  """Build a full module's content, or pass a prompt straight through in free-chat mode."""
  if request.mode == "free-chat":
    if request.prompt is None or not request.prompt.strip():
      raise PolicyViolationError("Prompt is required for free-chat mode")
    gateway = gateway_factory(api_key)
    content = await run_free_chat(request.prompt, gateway, policy, web_search=request.enable_web_search)
    return GenerateResponse(content=content)

  if request.module_data is None:
    raise PolicyViolationError("Module data is required for content-builder mode")

  job = request.to_job()
  job_id = generate_job_id()
  logger.info("Content-builder job %s accepted: module=%r submodules=%d", job_id, job.module_name, len(job.submodule_names))

  pipeline = ContentPipeline(policy=policy, provider=settings.provider)
  gateway = gateway_factory(api_key)
  result = await pipeline.run(job, gateway, job_id=job_id)
  return GenerateResponse(content=result)
