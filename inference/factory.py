"""
Backend selection.

Environment-driven choice between the real OpenAI backend and the stub.
"""

import logging

from config import BotConfig

from .base import CompletionBackend
from .openai_chat import OpenAICompletionBackend
from .stub import StubCompletionBackend
from .types import CompletionSettings

logger = logging.getLogger(__name__)


def create_completion_backend(config: BotConfig) -> CompletionBackend:
    """
    Create the completion backend named by ``config.llm_backend``.

    Raises:
        ValueError: unknown backend name
    """
    if config.llm_backend == "stub":
        logger.info("Using stub completion backend")
        return StubCompletionBackend()

    if config.llm_backend == "openai":
        settings = CompletionSettings(
            model=config.openai_model,
            temperature=config.openai_temperature,
            max_tokens=config.openai_max_tokens,
            timeout_s=config.http_timeout_s,
        )
        return OpenAICompletionBackend(
            api_key=config.openai_api_key,
            settings=settings,
            base_url=config.openai_base_url,
        )

    raise ValueError(f"Unknown LLM backend: {config.llm_backend}")
