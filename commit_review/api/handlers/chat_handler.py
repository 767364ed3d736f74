"""Chat handler: free-form conversation with the review agent, with memory."""

import logging
from collections.abc import Callable

import httpx
from pydantic_ai import Agent
from pydantic_ai.messages import ModelMessagesTypeAdapter
from pydantic_core import to_jsonable_python
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from commit_review.agents.code_reviewer import ChunkHandler, stream_review
from commit_review.config.settings import settings
from commit_review.database.db import SessionLocal
from commit_review.models.conversation import ConversationThread
from commit_review.models.dependencies import ReviewDependencies
from commit_review.services.github_commits import GitHubCommitFetcher

logger = logging.getLogger(__name__)


def _load_thread(db: Session, thread_id: str) -> ConversationThread:
    """Return the stored thread, creating an empty one if needed."""
    thread = db.execute(
        select(ConversationThread).where(ConversationThread.thread_id == thread_id)
    ).scalar_one_or_none()
    if thread is None:
        thread = ConversationThread(thread_id=thread_id, messages=[])
        db.add(thread)
        logger.info(f"Created conversation thread {thread_id}")
    return thread


async def handle_chat(
    message: str,
    thread_id: str,
    *,
    session_factory: Callable[[], Session] | None = None,
    fetcher: GitHubCommitFetcher | None = None,
    agent: Agent[ReviewDependencies, str] | None = None,
    on_chunk: ChunkHandler | None = None,
) -> str:
    """
    Send a message to the review agent within a persistent thread.

    The thread's earlier messages are replayed as history, so the agent can
    refer back to repositories and commits discussed before. New messages
    are stored only after the agent answered successfully.

    Args:
        message: User message (e.g. "review the latest commit of <url>")
        thread_id: Conversation identifier
        session_factory: DB session factory (default: SessionLocal)
        fetcher: GitHub client for the agent's tools
        agent: Review agent (default: code_review_agent)
        on_chunk: Callback for each streamed fragment

    Returns:
        The agent's full reply

    Raises:
        ReasoningEngineError: If the agent run fails
    """
    if fetcher is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as http_client:
            return await handle_chat(
                message,
                thread_id,
                session_factory=session_factory,
                fetcher=GitHubCommitFetcher.from_settings(http_client),
                agent=agent,
                on_chunk=on_chunk,
            )

    if session_factory is None:
        session_factory = SessionLocal

    db = session_factory()
    try:
        thread = _load_thread(db, thread_id)
        history = ModelMessagesTypeAdapter.validate_python(thread.messages or [])

        streamed = await stream_review(
            message,
            deps=ReviewDependencies(fetcher=fetcher),
            agent=agent,
            on_chunk=on_chunk,
            message_history=history,
        )

        new_messages = to_jsonable_python(streamed.new_messages)
        thread.append_messages(new_messages)
        try:
            db.commit()
        except IntegrityError:
            # Another turn created the thread while this one was streaming
            db.rollback()
            thread = _load_thread(db, thread_id)
            thread.append_messages(new_messages)
            db.commit()
        logger.info(
            f"Chat reply stored in thread {thread_id} "
            f"({len(thread.messages)} messages total)"
        )
        return streamed.text
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
