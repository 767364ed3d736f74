"""Tool functions for the AI code review agent."""

from . import github_tools

__all__ = ["github_tools"]
