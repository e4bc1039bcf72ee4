"""
Discord Interactions Webhook

FastAPI router that receives interaction events, verifies them, answers
immediately, and finishes slow work in a detached background task.

Update Flow:
  request → verify signature → parse → ack → (background) completion → follow-up
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from config import BotConfig
from inference import CompletionBackend

from .schemas import (
    Interaction,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    ParseError,
    parse_interaction,
)
from .security import AuthenticationFailure, require_valid_signature
from .sender import FollowupDeliveryError, send_followup

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Discord Interactions"])

TRUTH_COMMAND = "truth"
TOPIC_OPTION = "topic"
ERROR_PREFIX = "❌ Error: "


class UnhandledInteraction(Exception):
    """Interaction type or command this endpoint does not serve."""
    pass


def _config(request: Request) -> BotConfig:
    return request.app.state.config


def _backend(request: Request) -> CompletionBackend:
    return request.app.state.completion_backend


def _interaction_response(response_type: InteractionResponseType) -> JSONResponse:
    return JSONResponse(InteractionResponse(type=response_type).model_dump(mode="json"))


# ============================================================================
# DEBUG / BROWSER CHECK
# ============================================================================

@router.get("/debug")
async def debug_report(request: Request) -> dict:
    """Report whether secrets are present and well-formed. Never returns values."""
    config = _config(request)
    return {"okDiscord": config.discord_key_ok, "okOpenAI": config.openai_key_ok}


# ============================================================================
# INTERACTION RECEIVER
# ============================================================================

@router.post("/{full_path:path}")
async def interactions_endpoint(request: Request, background_tasks: BackgroundTasks):
    """
    Receive a Discord interaction.

    Flow:
    1. Buffer the raw body once
    2. Verify signature (401 if missing/invalid, nothing parsed before this)
    3. Parse into Interaction (400 if malformed)
    4. PING → PONG; /truth → deferred ack + background follow-up
    5. Anything else → 400

    Returns:
        {"type": 1} for ping, {"type": 5} for /truth
    """
    config = _config(request)

    # Step 1: Buffer the body; reused for verification and parsing
    body = await request.body()

    # Step 2: Verify signature (security boundary)
    try:
        require_valid_signature(request.headers, body, config.discord_public_key)
    except AuthenticationFailure as e:
        logger.warning(f"Signature verification failed: {e}")
        return PlainTextResponse(str(e), status_code=status.HTTP_401_UNAUTHORIZED)
    logger.debug("Signature verified")

    # Step 3: Parse
    try:
        interaction = parse_interaction(body)
    except ParseError as e:
        logger.warning(f"Interaction parse failed: {e}")
        return PlainTextResponse(
            "invalid interaction payload", status_code=status.HTTP_400_BAD_REQUEST
        )
    logger.info(f"Interaction received: type={interaction.type}")

    # Step 4: Dispatch
    try:
        return dispatch_interaction(interaction, background_tasks, _backend(request), config)
    except UnhandledInteraction as e:
        logger.info(f"Unhandled interaction: {e}")
        return PlainTextResponse("Unhandled", status_code=status.HTTP_400_BAD_REQUEST)
    except ParseError as e:
        logger.warning(f"Interaction rejected at dispatch: {e}")
        return PlainTextResponse(
            "invalid interaction payload", status_code=status.HTTP_400_BAD_REQUEST
        )


def dispatch_interaction(
    interaction: Interaction,
    background_tasks: BackgroundTasks,
    backend: CompletionBackend,
    config: BotConfig,
) -> JSONResponse:
    """
    Pick the immediate response for ``interaction`` and schedule any follow-up.

    Raises:
        UnhandledInteraction: type/command not served here
        ParseError: /truth command without application_id or token
    """
    if interaction.type == InteractionType.PING:
        return _interaction_response(InteractionResponseType.PONG)

    if (
        interaction.type == InteractionType.APPLICATION_COMMAND
        and interaction.command_name == TRUTH_COMMAND
    ):
        if not interaction.has_followup_target:
            raise ParseError("application command requires application_id and token")
        # Runs after the response is sent; its outcome never reaches this request
        background_tasks.add_task(answer_truth_command, interaction, backend, config)
        return _interaction_response(InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE)

    raise UnhandledInteraction(
        f"type={interaction.type} command={interaction.command_name!r}"
    )


# ============================================================================
# BACKGROUND FOLLOW-UP
# ============================================================================

async def answer_truth_command(
    interaction: Interaction,
    backend: CompletionBackend,
    config: BotConfig,
) -> None:
    """
    Background task: generate the answer for /truth and post it as follow-ups.

    Every failure ends up either in the message content or in the log;
    nothing is raised to the caller.
    """
    value = interaction.option_value(TOPIC_OPTION)
    topic = "" if value is None else str(value)

    try:
        content = await backend.complete(topic)
    except Exception as e:
        logger.error(f"Completion failed: {e}", exc_info=True)
        content = ERROR_PREFIX + str(e)

    try:
        await send_followup(
            interaction.application_id,
            interaction.token,
            content,
            api_base=config.discord_api_base,
            timeout_s=config.http_timeout_s,
        )
    except FollowupDeliveryError as e:
        logger.error(
            f"Follow-up delivery aborted: {e}",
            extra={"segment_index": e.segment_index, "status_code": e.status_code},
        )
    except Exception as e:
        logger.error(f"Unexpected error delivering follow-up: {e}", exc_info=True)


# ============================================================================
# NON-POST FALLBACK
# ============================================================================

@router.api_route(
    "/{full_path:path}",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"],
)
async def browser_check(full_path: str) -> PlainTextResponse:
    """Any non-POST request gets a plain OK so the endpoint can be opened in a browser."""
    return PlainTextResponse("OK")
