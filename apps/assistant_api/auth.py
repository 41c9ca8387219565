"""
Authentication for the api channel.

Implements:
- JWT token validation (python-jose)
- Token generation for callers and tests

The token identifies the platform user the assistant acts for: `sub` is the
user id, `org_id` and `role` are custom claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import HTTPException, status
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from kiisha_config.settings import Settings


class Caller(BaseModel):
    """Identity extracted from a JWT."""

    user_id: int
    org_id: int
    role: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def validate_jwt(authorization_header: str | None, settings: Settings) -> Caller:
    """
    Validate JWT token from Authorization header.

    Args:
        authorization_header: "Bearer <token>" format
        settings: Provides the signing key and algorithm

    Returns:
        Caller: user id, org id and role

    Raises:
        HTTPException: 401 if validation fails
    """
    if not authorization_header or not authorization_header.startswith("Bearer "):
        raise _unauthorized("Invalid authorization header format. Expected 'Bearer <token>'")

    token = authorization_header[7:]

    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise _unauthorized(f"Invalid JWT token: {str(e)}") from e

    try:
        return Caller(
            user_id=payload.get("sub"),
            org_id=payload.get("org_id"),
            role=payload.get("role"),
        )
    except ValidationError as e:
        raise _unauthorized("Token missing 'sub', 'org_id' or 'role' claim") from e


def create_access_token(user_id: int, org_id: int, role: str, settings: Settings) -> str:
    """
    Create JWT access token.

    Example:
        token = create_access_token(7, 1, "editor", Settings())
    """
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

    payload: dict[str, Any] = {
        "sub": str(user_id),
        "org_id": org_id,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
