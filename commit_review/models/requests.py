"""Request and response shapes accepted by the review workflow."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class GithubRef(_CamelModel):
    """Review the newest commit of a GitHub repository."""

    repo_url: str = Field(min_length=1)


class DiffPayload(_CamelModel):
    """Review a raw unified diff with optional commit metadata."""

    diff_content: str
    commit_message: str | None = None
    author: str | None = None
    commit_sha: str | None = None


ReviewRequest = GithubRef | DiffPayload


class ReviewResponse(BaseModel):
    """Full review text produced by the agent."""

    review: str


class ChatRequest(_CamelModel):
    """Free-form message to the review agent within a memory thread."""

    message: str = Field(min_length=1)
    thread_id: str = Field(default="default", min_length=1, max_length=255)


class ChatResponse(_CamelModel):
    """Agent reply for a chat message."""

    reply: str
    thread_id: str
