"""Two-stage LLM content builder service."""

__version__ = "0.1.0"
