#!/usr/bin/env python3
"""
Register the /truth slash command with Discord.

Overwrites the application's command set with the single /truth command
(one required string option, "topic"). Run once after creating the app,
or again whenever the command definition changes.

Usage:
    python -m scripts.register_commands
    python -m scripts.register_commands --guild-id 123456789012345678
    python -m scripts.register_commands --dry-run
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import BotConfig  # noqa: E402

logger = logging.getLogger(__name__)

# Discord application command / option type codes
CHAT_INPUT = 1
STRING_OPTION = 3

TRUTH_COMMAND: Dict[str, Any] = {
    "name": "truth",
    "type": CHAT_INPUT,
    "description": "Get the brutal, concise truth about a topic",
    "options": [
        {
            "name": "topic",
            "description": "What do you want the truth about?",
            "type": STRING_OPTION,
            "required": True,
        }
    ],
}


class RegistrationError(Exception):
    """Discord rejected the command registration."""
    pass


def commands_url(api_base: str, application_id: str, guild_id: Optional[str] = None) -> str:
    base = f"{api_base.rstrip('/')}/applications/{application_id}"
    if guild_id:
        return f"{base}/guilds/{guild_id}/commands"
    return f"{base}/commands"


def register_commands(
    config: BotConfig,
    commands: List[Dict[str, Any]],
    guild_id: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """
    Bulk-overwrite application commands.

    Returns:
        Command objects as stored by Discord

    Raises:
        RegistrationError: missing credentials or non-2xx response
    """
    if not config.discord_bot_token:
        raise RegistrationError("DISCORD_BOT_TOKEN not configured")
    if not config.discord_application_id:
        raise RegistrationError("DISCORD_APPLICATION_ID not configured")

    url = commands_url(config.discord_api_base, config.discord_application_id, guild_id)
    http = session or requests.Session()
    response = http.put(
        url,
        json=commands,
        headers={"Authorization": f"Bot {config.discord_bot_token}"},
        timeout=config.http_timeout_s,
    )

    if not 200 <= response.status_code < 300:
        logger.error(f"Failed to register commands: {response.status_code} {response.text}")
        raise RegistrationError(f"Discord returned {response.status_code}")

    result = response.json()
    logger.info(f"Registered {len(result)} command(s)")
    return result


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Register the /truth slash command.")
    parser.add_argument("--guild-id", help="Register in one guild only (updates instantly).")
    parser.add_argument("--dry-run", action="store_true", help="Print the payload and exit.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.dry_run:
        print(json.dumps([TRUTH_COMMAND], indent=2))
        return 0

    try:
        registered = register_commands(BotConfig.from_env(), [TRUTH_COMMAND], args.guild_id)
    except (RegistrationError, requests.RequestException) as e:
        print(f"✗ Registration failed: {e}")
        return 1

    for command in registered:
        print(f"✓ /{command.get('name')} (id={command.get('id')})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
