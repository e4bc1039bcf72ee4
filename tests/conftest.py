"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


class Signer:
    """Ed25519 key pair that signs requests the way Discord does."""

    def __init__(self):
        self.private_key = Ed25519PrivateKey.generate()
        self.public_key_hex = self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        ).hex()

    def sign(self, body: bytes, timestamp: str = "1700000000") -> str:
        return self.private_key.sign(timestamp.encode("utf-8") + body).hex()

    def headers(self, body: bytes, timestamp: str = "1700000000") -> Dict[str, str]:
        return {
            "x-signature-ed25519": self.sign(body, timestamp),
            "x-signature-timestamp": timestamp,
            "content-type": "application/json",
        }

    def signed(self, payload: Any, timestamp: str = "1700000000") -> Dict[str, Any]:
        """Keyword arguments for TestClient.post with a signed JSON body."""
        body = json.dumps(payload).encode("utf-8")
        return {"content": body, "headers": self.headers(body, timestamp)}


@pytest.fixture
def signer() -> Signer:
    return Signer()


def _truth_interaction(topic: Optional[str] = "moon landing") -> Dict[str, Any]:
    options = [] if topic is None else [{"name": "topic", "type": 3, "value": topic}]
    return {
        "id": "1111",
        "type": 2,
        "application_id": "app123",
        "token": "tok456",
        "version": 1,
        "data": {"id": "2222", "name": "truth", "type": 1, "options": options},
    }


@pytest.fixture
def truth_interaction():
    """Factory for a /truth application-command payload."""
    return _truth_interaction
