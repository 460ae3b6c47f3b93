"""HS256 bearer tokens identifying the acting user.

A token's ``sub`` claim is the user id as a decimal string. Decoding returns
``None`` for anything that does not verify or does not name a positive user
id, so callers only have to distinguish "identified" from "not identified".
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ISSUER = "docs-service"
_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class TokenPayload:
    user_id: int
    expires_at: datetime


def sign_claims(claims: Dict[str, Any], secret: str) -> str:
    """Serialize *claims* into a signed compact JWT."""
    header = _b64encode(json.dumps(_HEADER, separators=(",", ":")).encode())
    body = _b64encode(json.dumps(claims, separators=(",", ":")).encode())
    signature = hmac.new(secret.encode(), header + b"." + body, hashlib.sha256).digest()
    return b".".join((header, body, _b64encode(signature))).decode()


def create_token(
    user_id: int,
    secret: str,
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Mint a token for *user_id*. Used by operators and the test suite."""
    if algorithm != "HS256":
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    now = int(time.time())
    return sign_claims(
        {"sub": str(user_id), "iat": now, "exp": now + expires_hours * 3600, "iss": ISSUER},
        secret,
    )


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[TokenPayload]:
    """Verify signature, issuer and expiry, then read the user id."""
    if algorithm != "HS256":
        return None

    try:
        header, body, signature = token.encode().split(b".")
        expected = hmac.new(secret.encode(), header + b"." + body, hashlib.sha256).digest()
        if not hmac.compare_digest(expected, _b64decode(signature)):
            return None

        claims = json.loads(_b64decode(body))
        if claims.get("iss") != ISSUER or time.time() > claims["exp"]:
            return None

        subject = claims["sub"]
        if not isinstance(subject, str) or not subject.isdigit():
            return None
        user_id = int(subject)
        if user_id <= 0:
            return None

        return TokenPayload(
            user_id=user_id,
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
    except (json.JSONDecodeError, KeyError, ValueError, TypeError):
        return None


def _b64encode(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _b64decode(data: bytes) -> bytes:
    return base64.urlsafe_b64decode(data + b"=" * (-len(data) % 4))
