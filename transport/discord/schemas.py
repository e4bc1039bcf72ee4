"""
Discord Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO I/O
Defines the interaction contract and the parse boundary.
"""

import json
from enum import IntEnum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictInt, ValidationError


class ParseError(Exception):
    """Interaction body is malformed or misses required fields."""
    pass


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2


class InteractionResponseType(IntEnum):
    PONG = 1
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


# ============================================================================
# INBOUND INTERACTION
# ============================================================================

class CommandOption(BaseModel):
    """Single slash-command option (name/value pair)."""

    name: str
    value: Optional[Union[str, int, float, bool]] = None

    class Config:
        frozen = True


class InteractionData(BaseModel):
    """
    Interaction payload data.

    Commands carry a name and ordered options; components and modals carry
    other keys (custom_id, component_type) and no name.
    """

    name: Optional[str] = None
    options: List[CommandOption] = Field(default_factory=list)

    class Config:
        frozen = True


class Interaction(BaseModel):
    """
    Interaction event delivered to the endpoint.

    ref: https://discord.com/developers/docs/interactions/receiving-and-responding
    """

    type: StrictInt = Field(..., description="1 = ping, 2 = application command")
    data: Optional[InteractionData] = None
    application_id: str = Field("", description="Builds the follow-up URL")
    token: str = Field("", description="Authorizes follow-up posts")

    class Config:
        frozen = True

    @property
    def has_followup_target(self) -> bool:
        """application_id and token are both present (needed to post follow-ups)."""
        return bool(self.application_id) and bool(self.token)

    @property
    def command_name(self) -> Optional[str]:
        return self.data.name if self.data else None

    def option_value(self, name: str) -> Optional[Union[str, int, float, bool]]:
        """Value of the first option called ``name`` (first match wins)."""
        if not self.data:
            return None
        for option in self.data.options:
            if option.name == name:
                return option.value
        return None


def parse_interaction(body: bytes) -> Interaction:
    """
    Decode a verified request body into an Interaction.

    Raises:
        ParseError: invalid JSON, non-object body, or schema violation
    """
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Invalid JSON payload: {e}") from e

    if not isinstance(payload, dict):
        raise ParseError("Interaction payload must be a JSON object")

    try:
        return Interaction.model_validate(payload)
    except ValidationError as e:
        raise ParseError(f"Invalid interaction: {e.error_count()} error(s)") from e


# ============================================================================
# OUTBOUND RESPONSES
# ============================================================================

class InteractionResponse(BaseModel):
    """Immediate reply to an interaction request."""

    type: InteractionResponseType


class FollowupMessage(BaseModel):
    """Body of a single follow-up webhook post."""

    content: str
