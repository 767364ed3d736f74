"""Request handlers for review and chat requests."""

from .chat_handler import handle_chat
from .review_handler import handle_code_review

__all__ = ["handle_code_review", "handle_chat"]
