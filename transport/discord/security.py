"""
Discord Signature Verification

SECURITY BOUNDARY - Verify Ed25519 signature over timestamp || body.
No parsing. No retries. No logic.
"""

import logging
from typing import Mapping, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-signature-ed25519"
TIMESTAMP_HEADER = "x-signature-timestamp"


class AuthenticationFailure(Exception):
    """Request signature missing or invalid."""
    pass


def _hex_to_bytes(value: str) -> Optional[bytes]:
    """Decode hex, or None when the input is not valid hex."""
    try:
        return bytes.fromhex(value)
    except ValueError:
        return None


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive; starlette Headers are not
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


def verify_signature(
    headers: Mapping[str, str],
    body: bytes,
    public_key_hex: str,
) -> bool:
    """
    Verify Discord's Ed25519 request signature.

    Discord sends:
    - X-Signature-Ed25519 header (hex, 64 bytes)
    - X-Signature-Timestamp header
    - Request body

    The signed message is timestamp.encode("utf-8") + body, no delimiter.

    Args:
        headers: Request headers
        body: Raw request body bytes (not consumed)
        public_key_hex: Application public key (hex, 32 bytes)

    Returns:
        True only if the signature verifies; never raises
    """
    signature_hex = _header(headers, SIGNATURE_HEADER)
    timestamp = _header(headers, TIMESTAMP_HEADER)
    if not signature_hex or not timestamp:
        return False

    if not public_key_hex:
        logger.warning("DISCORD_PUBLIC_KEY not configured, rejecting request")
        return False

    signature = _hex_to_bytes(signature_hex)
    key_bytes = _hex_to_bytes(public_key_hex)
    if signature is None or key_bytes is None or len(signature) != 64:
        return False

    try:
        public_key = Ed25519PublicKey.from_public_bytes(key_bytes)
    except ValueError:
        logger.warning("Configured public key is not a valid Ed25519 key")
        return False

    try:
        public_key.verify(signature, timestamp.encode("utf-8") + body)
    except InvalidSignature:
        return False
    return True


def require_valid_signature(
    headers: Mapping[str, str],
    body: bytes,
    public_key_hex: str,
) -> None:
    """
    Gate form of :func:`verify_signature`.

    Raises:
        AuthenticationFailure: missing or invalid signature
    """
    if not verify_signature(headers, body, public_key_hex):
        raise AuthenticationFailure("bad request signature")
