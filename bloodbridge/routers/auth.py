# bloodbridge/routers/auth.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from bloodbridge.core.config import settings
from bloodbridge.core.security import (
    create_token, get_claims, hash_password, verify_password,
)
from bloodbridge.deps import get_repo
from bloodbridge.repos.inmemory import DuplicateEmail
from bloodbridge.schemas import ROLES, AuthOut, CreateUserIn, SessionOut, SignInIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _auth_out(user: dict) -> dict:
    role = user.get("metadata", {}).get("role")
    return {
        "access_token": create_token(user["email"], role),
        "token_type": "bearer",
        "user": {"id": str(user["_id"]), "email": user["email"], "role": role},
    }

@router.post("/signup", response_model=AuthOut, status_code=201)
async def signup(body: CreateUserIn, repo=Depends(get_repo)):
    if len(body.password) < settings.min_password_length:
        raise HTTPException(400, f"Password should be at least {settings.min_password_length} characters")
    role = body.metadata.get("role")
    if role is not None and role not in ROLES:
        raise HTTPException(422, f"Unknown role: {role}")

    try:
        user = await repo.create_user(body.email, hash_password(body.password), body.metadata)
    except DuplicateEmail:
        raise HTTPException(409, "User already registered")

    logger.info("identity created for %s (%s)", body.email, role)
    return _auth_out(user)

@router.post("/signin", response_model=AuthOut)
async def signin(body: SignInIn, repo=Depends(get_repo)):
    user = await repo.find_user_by_email(body.email)
    if not user or not verify_password(body.password, user.get("password_hash", "")):
        raise HTTPException(401, "Invalid login credentials")
    logger.info("sign-in for %s", body.email)
    return _auth_out(user)

@router.post("/signout")
async def signout(claims=Depends(get_claims), repo=Depends(get_repo)):
    await repo.revoke_token(claims["jti"])
    return {"ok": True}

@router.get("/session", response_model=SessionOut)
async def session(claims=Depends(get_claims), repo=Depends(get_repo)):
    user = await repo.find_user_by_email(claims["sub"])
    if not user:
        raise HTTPException(401, "User not found")
    return {
        "user": {"id": str(user["_id"]), "email": user["email"], "role": claims.get("role")},
        "expires_at": datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
    }
