"""Pipeline contracts and policy."""

from content_builder.ai.pipeline.contracts import CompiledSubmodule, GenerationJob, JobContext, PipelineResult, SectionDescriptor, SectionPlan, SectionTask
from content_builder.ai.pipeline.policy import GenerationPolicy, policy_from_settings

__all__ = ["CompiledSubmodule", "GenerationJob", "GenerationPolicy", "JobContext", "PipelineResult", "SectionDescriptor", "SectionPlan", "SectionTask", "policy_from_settings"]
