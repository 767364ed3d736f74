"""Logging for the review pipeline, with optional Logfire tracing."""

import logging
import sys

from commit_review.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Clients that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(level: str | None = None) -> None:
    """Route application logs to stderr.

    Stdout is kept free for the streamed review text, so the CLI output can
    be piped or redirected without log lines mixed in.

    Args:
        level: Log level name overriding ``LOG_LEVEL`` (e.g. "DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_observability(level: str | None = None) -> None:
    """Configure logging, then Logfire tracing when ``LOGFIRE_TOKEN`` is set.

    Tracing covers agent runs (model requests and tool calls) and the
    outbound GitHub requests made through httpx.
    """
    setup_logging(level)

    logger = logging.getLogger(__name__)

    if not settings.logfire_token:
        logger.debug("LOGFIRE_TOKEN not set, tracing disabled")
        return

    try:
        import logfire
    except ImportError:
        logger.warning(
            "LOGFIRE_TOKEN is set but logfire is not installed. "
            "Install with: pip install 'commit-review-agent[observability]'"
        )
        return

    try:
        logfire.configure(
            token=settings.logfire_token, environment=settings.environment
        )
        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()
    except Exception as e:
        logger.error(f"Failed to set up Logfire tracing: {e}")
        return

    logger.info(f"Logfire tracing enabled ({settings.environment})")
