from .base import CompletionBackend
from .prompts import build_user_prompt


class StubCompletionBackend(CompletionBackend):
    """
    Deterministic fake completion for local runs and CI.

    Never touches the network. Echoes the user instruction so the
    follow-up flow can be exercised end to end without an API key.
    """

    async def complete(self, topic: str) -> str:
        return f"[stub] {build_user_prompt(topic)}".strip()
