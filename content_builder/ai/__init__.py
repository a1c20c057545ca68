"""LLM-facing parts of the content builder: providers, agents, parsing and orchestration."""
