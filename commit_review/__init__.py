"""LLM-powered review of GitHub commits and unified diffs."""

__version__ = "0.1.0"
