# bloodbridge/core/security.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Header
from jose import jwt, JWTError
from passlib.hash import pbkdf2_sha256 as hasher

from bloodbridge.core.config import settings
from bloodbridge.deps import get_repo


def hash_password(password: str) -> str:
    return hasher.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    try:
        return hasher.verify(password, hashed)
    except (ValueError, TypeError):
        # empty or malformed hash
        return False

def create_token(email: str, role: str, minutes: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": email,
        "role": role,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(minutes=minutes or settings.access_ttl_min),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)

def decode_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])
    except JWTError:
        return None

def bearer_token(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(401, "Missing token")
    return authorization.split(" ", 1)[1]

async def get_claims(token: str = Depends(bearer_token), repo=Depends(get_repo)) -> Dict[str, Any]:
    """Decoded claims of a live (unexpired, not signed out) session token."""
    claims = decode_token(token)
    if not claims:
        raise HTTPException(401, "Invalid token")
    if await repo.is_token_revoked(claims.get("jti", "")):
        raise HTTPException(401, "Session has been signed out")
    return claims
