"""Utility functions and helpers."""

from .logging import setup_observability
from .repo_url import parse_repo_url

__all__ = ["setup_observability", "parse_repo_url"]
