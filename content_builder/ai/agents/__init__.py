"""Agent implementations."""

from content_builder.ai.agents.planner import PlannerAgent
from content_builder.ai.agents.section_writer import SectionWriter

__all__ = ["PlannerAgent", "SectionWriter"]
