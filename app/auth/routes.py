# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-in itself happens client-side with Supabase Auth. These routes let
# the admin panel check a stored session:
#   GET /auth/me      - who am I, and may I use the admin API?
#   GET /auth/verify  - is this token still valid?
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse, VerifyResponse
from app.auth.policy import AuthorizationPolicy, get_authorization_policy

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user),
    policy: AuthorizationPolicy = Depends(get_authorization_policy),
) -> UserResponse:
    """
    Get the signed-in user and whether the admin API will accept them.

    The frontend uses isAdmin to decide whether to show the admin panel.
    """
    return UserResponse(
        id=user.id,
        email=user.email,
        is_admin=policy.is_authorized(user.email),
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(user: AuthUser = Depends(get_current_user)) -> VerifyResponse:
    """Succeeds (200) while the token is valid; 401 once it has expired."""
    return VerifyResponse(user_id=user.id, email=user.email)
