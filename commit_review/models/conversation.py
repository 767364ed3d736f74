"""SQLAlchemy model for the review agent's conversation memory."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class ConversationThread(Base):
    """
    Persisted message history of one chat thread with the review agent.

    Messages are stored in pydantic-ai's JSON message format so they can be
    passed back to the agent as ``message_history`` on the next turn.
    """

    __tablename__ = "conversation_threads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    thread_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Caller-chosen thread identifier",
    )

    # Structure: pydantic-ai ModelMessage objects dumped to JSON
    messages: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: [],
        comment="Array of model messages in chronological order",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<ConversationThread(id={self.id}, "
            f"thread_id={self.thread_id}, "
            f"messages={len(self.messages or [])})>"
        )

    def append_messages(self, new_messages: list[dict[str, Any]]) -> None:
        """
        Append serialized messages to the thread.

        Args:
            new_messages: Messages produced by the latest agent run
        """
        # Re-assign list to ensure SQLAlchemy detects the change
        # (In-place append on JSON types is not always tracked)
        messages = list(self.messages or [])
        messages.extend(new_messages)
        self.messages = messages

        self.updated_at = datetime.now(timezone.utc)
