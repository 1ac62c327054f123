from typing import Any, Dict

import jwt
from fastapi import HTTPException

from zein_bus.config import settings
from zein_bus.auth.session import UserSession

def decode_token(token: str) -> Dict[str, Any]:
    """Decode a backend-issued JWT.

    The signature is checked when JWT_SECRET is configured; otherwise the
    backend stays the only authority and rejects forged tokens on use.
    """
    if settings.JWT_SECRET:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": True})

def verify_token(token: str, credentials_exception: HTTPException) -> UserSession:
    """Build the caller's session from a bearer token"""
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        raise credentials_exception

    user_id = payload.get("id") or payload.get("user_id") or payload.get("sub")
    if user_id is None:
        raise credentials_exception

    return UserSession(token=token, user_id=str(user_id))
