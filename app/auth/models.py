# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from uuid import UUID
from typing import Optional

from pydantic import BaseModel, ConfigDict

from core.models.common import CamelModel


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class UserResponse(CamelModel):
    """Who the caller is and whether the admin API will accept them."""
    id: UUID
    email: Optional[str] = None
    is_admin: bool = False


class VerifyResponse(CamelModel):
    """Returned while a session token is still valid."""
    valid: bool = True
    user_id: UUID
    email: Optional[str] = None
