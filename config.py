"""
Configuration management for Truth Bot.

Loads environment variables from .env file and provides a typed, immutable
configuration object that is injected into the app at construction time.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


LLMBackendType = Literal["openai", "stub"]

_PUBLIC_KEY_RE = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class BotConfig:
    """Configuration for the interaction endpoint."""

    # Discord
    discord_public_key: str = ""
    discord_bot_token: str = ""
    discord_application_id: str = ""
    discord_api_base: str = "https://discord.com/api/v10"

    # OpenAI
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 400

    # Runtime
    llm_backend: LLMBackendType = "openai"
    http_timeout_s: float = 30.0
    log_level: str = "INFO"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Load configuration from environment variables."""
        return cls(
            discord_public_key=os.getenv("DISCORD_PUBLIC_KEY", "").strip(),
            discord_bot_token=os.getenv("DISCORD_BOT_TOKEN", ""),
            discord_application_id=os.getenv("DISCORD_APPLICATION_ID", ""),
            discord_api_base=os.getenv("DISCORD_API_BASE", "https://discord.com/api/v10").rstrip("/"),
            openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.7")),
            openai_max_tokens=int(os.getenv("OPENAI_MAX_TOKENS", "400")),
            llm_backend=os.getenv("LLM_BACKEND", "openai").lower(),  # type: ignore
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "8000")),
        )

    @property
    def discord_key_ok(self) -> bool:
        """Public key looks like 32 raw bytes in lowercase hex."""
        return bool(self.discord_public_key) and bool(_PUBLIC_KEY_RE.fullmatch(self.discord_public_key))

    @property
    def openai_key_ok(self) -> bool:
        return bool(self.openai_api_key) and self.openai_api_key.startswith("sk-")

    def validate(self) -> List[str]:
        """Return the names of required settings that are missing."""
        missing = []
        if not self.discord_public_key:
            missing.append("DISCORD_PUBLIC_KEY")
        if self.llm_backend == "openai" and not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        return missing


if __name__ == "__main__":
    # Test configuration loading
    config = BotConfig.from_env()
    print("Configuration loaded:")
    print(f"  Discord Public Key: {'✓ Set' if config.discord_key_ok else '✗ Missing/invalid'}")
    print(f"  OpenAI API Key: {'✓ Set' if config.openai_key_ok else '✗ Missing/invalid'}")
    print(f"  LLM Backend: {config.llm_backend}")
    print(f"  Model: {config.openai_model}")
    missing = config.validate()
    print(f"\n  Validation: {'✓ PASSED' if not missing else '✗ FAILED: ' + ', '.join(missing)}")
