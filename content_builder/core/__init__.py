"""Ambient service concerns: errors, logging, middleware and startup."""
