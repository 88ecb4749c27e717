"""Signed bearer tokens that scope issue preferences to a user."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from config import settings


SESSION_TOKEN_TYPE = "vlint_session"
MIN_TTL_HOURS = 1


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_session_token(
    user_id: str,
    expires_hours: Optional[int] = None,
) -> Dict[str, Any]:
    """Sign a session token for ``user_id``. Returns the token and its unix expiry."""
    subject = str(user_id or "").strip()
    if not subject:
        raise ValueError("user_id is required to issue a session token.")

    issued_at = _now()
    ttl_hours = max(int(expires_hours or settings.JWT_EXPIRATION_HOURS), MIN_TTL_HOURS)
    expires_at = issued_at + timedelta(hours=ttl_hours)
    claims = {
        "sub": subject,
        "type": SESSION_TOKEN_TYPE,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return {
        "token": jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM),
        "expires_at": claims["exp"],
    }


def decode_session_token(token: str) -> str:
    """Validate a session token and return the user id it was issued for."""
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Invalid or expired session token.") from exc

    if claims.get("type") != SESSION_TOKEN_TYPE:
        raise ValueError("Invalid session token type.")

    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise ValueError("Session token missing subject.")
    return user_id
