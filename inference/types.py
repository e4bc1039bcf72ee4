from dataclasses import dataclass
from typing import Dict, List, Literal

ChatRole = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class CompletionSettings:
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 400
    timeout_s: float = 30.0


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


def messages_payload(messages: List[ChatMessage]) -> List[Dict[str, str]]:
    return [m.to_dict() for m in messages]
