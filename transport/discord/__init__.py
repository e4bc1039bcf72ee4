"""Discord Transport Layer - Module Exports"""

from .schemas import (
    CommandOption,
    FollowupMessage,
    Interaction,
    InteractionData,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    ParseError,
    parse_interaction,
)
from .security import AuthenticationFailure, require_valid_signature, verify_signature
from .sender import (
    MAX_MESSAGE_LENGTH,
    NO_ANSWER,
    FollowupDeliveryError,
    followup_url,
    post_chunks,
    send_followup,
    split_content,
)
from .webhook import UnhandledInteraction, answer_truth_command, dispatch_interaction, router

__all__ = [
    # Schemas
    "Interaction",
    "InteractionData",
    "CommandOption",
    "InteractionType",
    "InteractionResponseType",
    "InteractionResponse",
    "FollowupMessage",
    "parse_interaction",
    "ParseError",
    # Security
    "verify_signature",
    "require_valid_signature",
    "AuthenticationFailure",
    # Sender
    "followup_url",
    "split_content",
    "post_chunks",
    "send_followup",
    "FollowupDeliveryError",
    "MAX_MESSAGE_LENGTH",
    "NO_ANSWER",
    # Router
    "router",
    "dispatch_interaction",
    "answer_truth_command",
    "UnhandledInteraction",
]
