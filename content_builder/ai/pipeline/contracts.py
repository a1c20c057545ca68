"""Shared data contracts for the content pipeline."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

PipelineResult = dict[str, str]


class SectionDescriptor(BaseModel):
  """One planned section of a submodule."""

  title: str = Field(min_length=1)
  summary: str = Field(min_length=1)
  target_word_count: int = Field(gt=0)
  model_config = ConfigDict(frozen=True)


class SectionPlan(BaseModel):
  """Ordered outline of sections; order is the rendering order of the document."""

  sections: list[SectionDescriptor] = Field(min_length=1)
  model_config = ConfigDict(frozen=True)

  def __len__(self) -> int:
    return len(self.sections)


class GenerationJob(BaseModel):
  """Inputs for one content-builder run."""

  module_name: str
  submodule_names: list[str]
  topic_keywords: list[str] = Field(default_factory=list)
  extra_requirements: str = ""
  include_math_questions: bool = False
  web_search_enabled: bool = False
  model_config = ConfigDict(frozen=True)


class JobContext(BaseModel):
  """Context metadata for a generation job."""

  job_id: str
  created_at: datetime
  provider: str
  model: str
  job: GenerationJob


class CompiledSubmodule(BaseModel):
  """Markdown document assembled section by section for one submodule."""

  submodule_name: str
  document_text: str
  section_count: int = 0

  @classmethod
  def start(cls, submodule_name: str) -> CompiledSubmodule:
    """Open a document with its title heading."""
    return cls(submodule_name=submodule_name, document_text=f"# Submodule: {submodule_name}\n\n")

  def append_section(self, title: str, text: str, *, is_last: bool) -> None:
    """Append one rendered section, followed by a rule unless it closes the document."""
    self.document_text += f"\n\n## {title}\n\n{text.strip()}"
    if not is_last:
      self.document_text += "\n\n---\n"
    self.section_count += 1


class SectionTask(BaseModel):
  """One section-stage call: which section of which submodule, and where it sits."""

  submodule_name: str
  section: SectionDescriptor
  position: int = Field(ge=1)
  total: int = Field(ge=1)
  model_config = ConfigDict(frozen=True)

  @property
  def is_last(self) -> bool:
    return self.position == self.total
