"""
Discord Follow-up Sender

Delivers generated text through the interaction's follow-up webhook,
split into message-sized chunks.
No formatting intelligence. No retries.
"""

import logging
from typing import List, Optional

import httpx

from .schemas import FollowupMessage

logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"
MAX_MESSAGE_LENGTH = 2000
NO_ANSWER = "No answer."


class FollowupDeliveryError(Exception):
    """A follow-up segment could not be delivered; later segments were not sent."""

    def __init__(self, message: str, segment_index: int, status_code: Optional[int] = None):
        self.segment_index = segment_index
        self.status_code = status_code
        super().__init__(message)


def followup_url(application_id: str, token: str, api_base: str = DISCORD_API_BASE) -> str:
    return f"{api_base.rstrip('/')}/webhooks/{application_id}/{token}"


def split_content(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """
    Slice ``text`` into consecutive pieces of at most ``limit`` characters.

    Purely positional: no word or line awareness. "" yields [].
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    return [text[i:i + limit] for i in range(0, len(text), limit)]


async def post_chunks(
    client: httpx.AsyncClient,
    url: str,
    text: str,
    limit: int = MAX_MESSAGE_LENGTH,
    timeout_s: float = 30.0,
) -> int:
    """
    POST each chunk of ``text`` to ``url`` in order, awaiting each one.

    Aborts on the first failed segment.

    Returns:
        Number of segments delivered

    Raises:
        FollowupDeliveryError: non-2xx status or transport failure
    """
    sent = 0
    for index, segment in enumerate(split_content(text, limit)):
        body = FollowupMessage(content=segment).model_dump()
        try:
            response = await client.post(url, json=body, timeout=timeout_s)
        except httpx.RequestError as e:
            raise FollowupDeliveryError(
                f"Follow-up request failed: {type(e).__name__}", segment_index=index
            ) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Follow-up webhook error: {response.status_code}",
                extra={"status_code": response.status_code, "segment_index": index},
            )
            raise FollowupDeliveryError(
                f"Discord returned {response.status_code}",
                segment_index=index,
                status_code=response.status_code,
            )
        sent += 1
    return sent


async def send_followup(
    application_id: str,
    token: str,
    content: str,
    api_base: str = DISCORD_API_BASE,
    client: Optional[httpx.AsyncClient] = None,
    timeout_s: float = 30.0,
) -> int:
    """
    Deliver ``content`` as one or more follow-up messages.

    Content is trimmed, then replaced with "No answer." if empty, so an
    empty completion still produces exactly one message.

    Returns:
        Number of messages posted

    Raises:
        FollowupDeliveryError: if a segment fails
    """
    text = (content or "").strip() or NO_ANSWER
    url = followup_url(application_id, token, api_base)

    if client is not None:
        sent = await post_chunks(client, url, text, timeout_s=timeout_s)
    else:
        async with httpx.AsyncClient() as owned_client:
            sent = await post_chunks(owned_client, url, text, timeout_s=timeout_s)

    logger.info(
        "Follow-up delivered",
        extra={"application_id": application_id, "segments": sent, "length": len(text)},
    )
    return sent
