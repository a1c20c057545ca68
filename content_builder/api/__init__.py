"""HTTP boundary for the content builder."""
