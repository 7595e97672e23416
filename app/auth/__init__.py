# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Resolves the caller's identity from a Supabase session token and gates the
# admin API behind an injectable authorization policy.
#
# Usage:
#   from app.auth import AdminRoute, require_admin
#
#   router = APIRouter(route_class=AdminRoute, dependencies=[Depends(require_admin)])
# =============================================================================

from app.auth.dependencies import (
    AdminRoute,
    get_current_user,
    get_current_user_optional,
    require_admin,
)
from app.auth.models import AuthUser, UserResponse, VerifyResponse
from app.auth.policy import (
    AllowListPolicy,
    AlwaysAllowPolicy,
    AuthorizationPolicy,
    build_authorization_policy,
    get_authorization_policy,
)

__all__ = [
    "AdminRoute",
    "get_current_user",
    "get_current_user_optional",
    "require_admin",
    "AuthUser",
    "UserResponse",
    "VerifyResponse",
    "AllowListPolicy",
    "AlwaysAllowPolicy",
    "AuthorizationPolicy",
    "build_authorization_policy",
    "get_authorization_policy",
]
