"""
Prompt Builder
==============

Defines the fixed persona and the per-topic user instruction sent to the
completion service. Neither is user-controlled beyond the topic string.
"""

from typing import List

from .types import ChatMessage

SYSTEM_PROMPT = (
    "You are a fearless whistleblower historian. No sugarcoating. "
    "Expose hidden/ignored aspects responsibly."
)

USER_PROMPT_TEMPLATE = "Topic: {topic}\nGive me the brutal truth (concise)."


def build_user_prompt(topic: str) -> str:
    return USER_PROMPT_TEMPLATE.format(topic=topic)


def build_messages(topic: str) -> List[ChatMessage]:
    """Assemble the [system, user] message pair for ``topic``."""
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_user_prompt(topic)),
    ]
