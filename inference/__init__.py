"""
Completion boundary layer.

This package provides a clean abstraction for text generation,
so the webhook stays agnostic of the underlying backend.

Supported backends:
- OpenAICompletionBackend: OpenAI chat-completions API (default)
- StubCompletionBackend: Deterministic fake (local runs / CI)

Example usage:
    from inference import create_completion_backend

    backend = create_completion_backend(BotConfig.from_env())
    text = await backend.complete("moon landing")
"""

from .types import ChatMessage, CompletionSettings
from .base import CompletionBackend, CompletionError, UpstreamError
from .prompts import SYSTEM_PROMPT, build_messages, build_user_prompt
from .stub import StubCompletionBackend
from .openai_chat import OpenAICompletionBackend
from .factory import create_completion_backend

__all__ = [
    "ChatMessage",
    "CompletionSettings",
    "CompletionBackend",
    "CompletionError",
    "UpstreamError",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_user_prompt",
    "StubCompletionBackend",
    "OpenAICompletionBackend",
    "create_completion_backend",
]
