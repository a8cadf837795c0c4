"""Authentication dependency for API routes."""

import logging
from typing import Optional

from fastapi import HTTPException, Header
from pydantic import BaseModel

from mealprep.db.supabase import get_supabase_client

logger = logging.getLogger(__name__)


class AuthenticatedUser(BaseModel):
    """Authenticated user info from a Supabase access token."""

    id: str
    email: Optional[str] = None


async def get_current_user(authorization: str = Header(None)) -> AuthenticatedUser:
    """
    Validate the Supabase JWT and extract user info.

    Expects Authorization header: "Bearer <access_token>"
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization format")

    access_token = authorization[len("Bearer "):]

    try:
        user_response = get_supabase_client().auth.get_user(access_token)
    except Exception as e:
        logger.warning(f"Auth validation failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    if not user_response or not user_response.user:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return AuthenticatedUser(id=user_response.user.id, email=user_response.user.email)
