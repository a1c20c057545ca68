from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from content_builder.ai.pipeline.contracts import GenerationJob


def _clean_entries(values: list[str]) -> list[str]:
  """Trim entries and drop the blanks left over from splitting user input."""
  return [value.strip() for value in values if value.strip()]


class ModuleData(BaseModel):
  """Course module description sent with content-builder requests."""

  module: StrictStr = Field(description="Course module name.", examples=["Intro to Databases"])
  submodules: list[StrictStr] = Field(description="Submodule names, generated in order.", examples=[["Normalization", "Indexing"]])
  keywords: list[StrictStr] = Field(default_factory=list, description="Topic keywords to steer planning.")
  misc_requirements: StrictStr = Field(default="", alias="miscRequirements", description="Free-form extra requirements for the planner.")
  include_math_questions: StrictBool = Field(default=False, alias="includeMathQuestions", description="Ask the writer for math-based examples.")
  model_config = ConfigDict(populate_by_name=True)

  @field_validator("module", "misc_requirements")
  @classmethod
  def strip_text(cls, value: str) -> str:
    return value.strip()

  @field_validator("submodules", "keywords")
  @classmethod
  def clean_lists(cls, value: list[str]) -> list[str]:
    return _clean_entries(value)


class GenerateRequest(BaseModel):
  """Request payload for ``POST /api/generate``."""

  mode: Literal["content-builder", "free-chat"] = Field(description="Generation mode.")
  prompt: StrictStr | None = Field(default=None, description="Free-chat user prompt.")
  module_data: ModuleData | None = Field(default=None, alias="moduleData", description="Module description for content-builder mode.")
  enable_web_search: StrictBool = Field(default=False, alias="enableWebSearch", description="Let providers that support it ground answers with web search.")
  model_config = ConfigDict(populate_by_name=True)

  def to_job(self) -> GenerationJob:
    """Build the pipeline job; callers check ``module_data`` first."""
    if self.module_data is None:
      raise ValueError("module_data is required to build a generation job.")
    data = self.module_data
    return GenerationJob(
      module_name=data.module,
      submodule_names=list(data.submodules),
      topic_keywords=list(data.keywords),
      extra_requirements=data.misc_requirements,
      include_math_questions=data.include_math_questions,
      web_search_enabled=self.enable_web_search,
    )


class GenerateResponse(BaseModel):
  """Generated content: one document per submodule, or the free-chat reply."""

  content: dict[str, str] | str
