import logging
from typing import Any, Dict, Optional

import httpx

from .base import CompletionBackend, CompletionError, UpstreamError
from .prompts import build_messages
from .types import CompletionSettings, messages_payload

logger = logging.getLogger(__name__)


def _extract_content(data: Any) -> str:
    """Pull choices[0].message.content out of a chat-completions body."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content.strip() if isinstance(content, str) else ""


class OpenAICompletionBackend(CompletionBackend):
    """
    OpenAI chat-completions backend.

    One POST per call, bearer auth, fixed model/temperature/token budget.
    No retries: a failed call surfaces as CompletionError so the caller can
    turn it into a user-visible message.
    """

    def __init__(
        self,
        api_key: str,
        settings: Optional[CompletionSettings] = None,
        base_url: str = "https://api.openai.com/v1",
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            api_key:     OpenAI API key (sent as Bearer token)
            settings:    Model, sampling and timeout constants
            base_url:    API root, without trailing slash
            http_client: Optional shared client; one is created per call otherwise
        """
        self.api_key = api_key
        self.settings = settings or CompletionSettings()
        self.base_url = base_url.rstrip("/")
        self.http_client = http_client

    def build_payload(self, topic: str) -> Dict[str, Any]:
        return {
            "model": self.settings.model,
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
            "messages": messages_payload(build_messages(topic)),
        }

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.http_client is not None:
            return await self.http_client.post(
                url, json=payload, headers=headers, timeout=self.settings.timeout_s
            )
        async with httpx.AsyncClient() as client:
            return await client.post(
                url, json=payload, headers=headers, timeout=self.settings.timeout_s
            )

    async def complete(self, topic: str) -> str:
        """
        Generate text for ``topic``.

        Returns:
            Trimmed first-choice content, or "" if the response has none

        Raises:
            UpstreamError: non-2xx status from the API
            CompletionError: transport failure (connect error, timeout)
        """
        payload = self.build_payload(topic)

        try:
            response = await self._post(payload)
        except httpx.RequestError as e:
            logger.error(
                f"Completion request failed: {e}",
                extra={"model": self.settings.model},
            )
            raise CompletionError(f"OpenAI request failed: {type(e).__name__}") from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Completion API error: {response.status_code}",
                extra={"status_code": response.status_code, "model": self.settings.model},
            )
            raise UpstreamError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionError("OpenAI returned invalid JSON") from e

        content = _extract_content(data)
        logger.info(
            "Completion received",
            extra={"model": self.settings.model, "output_length": len(content)},
        )
        return content
