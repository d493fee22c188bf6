"""JWT utility functions for bearer authentication (HS256 only)"""

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional


def base64url_encode(data: bytes) -> str:
    """Base64 URL-safe encode without padding"""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def base64url_decode(data: str) -> bytes:
    """Base64 URL-safe decode, restoring stripped padding"""
    padding = 4 - (len(data) % 4)
    if padding != 4:
        data += "=" * padding
    return base64.urlsafe_b64decode(data)


def _signature(message: str, secret: str) -> bytes:
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).digest()


def sign_jwt(
    payload: Dict[str, Any], secret: str, expires_in_sec: Optional[int] = None
) -> str:
    """
    Sign a JWT token with HS256.

    Args:
        payload: Claims to encode
        secret: Shared signing secret
        expires_in_sec: Lifetime in seconds; no exp claim when None

    Returns:
        The compact serialized token
    """
    header = {"alg": "HS256", "typ": "JWT"}
    now = int(time.time())
    full_payload = {**payload, "iat": now}
    if expires_in_sec is not None:
        full_payload["exp"] = now + expires_in_sec

    header_b64 = base64url_encode(json.dumps(header).encode("utf-8"))
    payload_b64 = base64url_encode(json.dumps(full_payload).encode("utf-8"))

    message = f"{header_b64}.{payload_b64}"
    return f"{message}.{base64url_encode(_signature(message, secret))}"


def verify_jwt(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT token

    Returns:
        The decoded claims if the signature checks out, the algorithm is
        HS256 and the token has not expired; None otherwise
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts

    try:
        header = json.loads(base64url_decode(header_b64))
        actual_signature = base64url_decode(signature_b64)
        payload = json.loads(base64url_decode(payload_b64))
    except (binascii.Error, ValueError):
        return None

    if not isinstance(header, dict) or header.get("alg") != "HS256":
        return None

    expected_signature = _signature(f"{header_b64}.{payload_b64}", secret)
    if not hmac.compare_digest(expected_signature, actual_signature):
        return None

    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    if exp is not None and (not isinstance(exp, (int, float)) or exp < time.time()):
        return None

    return payload


def extract_user_id(payload: Dict[str, Any]) -> Optional[int]:
    """Numeric caller id from the userId claim, falling back to id."""
    raw = payload.get("userId", payload.get("id"))
    if isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
