"""Error taxonomy shared by the pipeline, the providers and the HTTP layer."""

from __future__ import annotations


class ContentBuilderError(RuntimeError):
  """Base class for every failure the service reports to callers."""


class MissingCredentialError(ContentBuilderError):
  """Raised when neither the request nor the configuration supplies an API key."""

  def __init__(self, message: str = "API key is required") -> None:
    super().__init__(message)


class PolicyViolationError(ContentBuilderError):
  """Raised when a job breaks a request policy, such as the submodule cap."""


class GatewayError(ContentBuilderError):
  """Raised when the LLM provider cannot be reached or returns an unusable envelope."""

  def __init__(self, message: str, *, provider: str | None = None, model: str | None = None) -> None:
    super().__init__(message)
    self.provider = provider
    self.model = model


class PlanParseError(ContentBuilderError):
  """Raised when planning output is not a well-formed section plan."""

  def __init__(self, message: str, *, index: int | None = None) -> None:
    super().__init__(message)
    # Position of the offending element; None for decode and shape failures.
    self.index = index


class PipelineError(ContentBuilderError):
  """Raised when a generation job aborts; the original failure is chained as __cause__."""

  def __init__(self, message: str, *, stage: str, submodule: str | None, section_index: int | None = None, completed: list[str] | None = None) -> None:
    super().__init__(message)
    self.stage = stage
    self.submodule = submodule
    self.section_index = section_index
    # Submodules that finished before the abort; reported in logs only.
    self.completed = list(completed or [])
