# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and admin authorization.
#
# Sessions are managed by Supabase Auth; the frontend forwards the session's
# access token as a Bearer header. Tokens are verified with:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Usage:
#   from app.auth import AdminRoute, require_admin
#
#   router = APIRouter(route_class=AdminRoute, dependencies=[Depends(require_admin)])
# =============================================================================

import logging
import time
from typing import Callable, Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.routing import APIRoute
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser
from app.auth.policy import AuthorizationPolicy, get_authorization_policy
from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    # Decode header without verification to get algorithm and key ID
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    # For ES256 or other algorithms, use JWKS
    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def decode_session_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and extract the user.

    Raises:
        HTTPException: 401 if the token is invalid, expired or malformed
    """
    try:
        signing_key, algorithm = _get_signing_key(token)

        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )

    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    try:
        user_uuid = UUID(user_id) if user_id else None
    except ValueError:
        user_uuid = None

    if user_uuid is None:
        logger.warning(f"Token has missing or malformed 'sub' claim: {user_id!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: malformed user ID",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthUser(id=user_uuid, email=payload.get("email"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate user from Supabase JWT token.

    Raises:
        HTTPException: 401 if token is missing, invalid or expired

    Usage:
        @router.get("/me")
        async def me(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    user = decode_session_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> Optional[AuthUser]:
    """
    Optionally get the current user from JWT token.

    Returns None if no token is provided or the token doesn't verify,
    instead of raising an error.
    """
    if credentials is None:
        return None

    try:
        return decode_session_token(credentials.credentials)
    except HTTPException:
        # If token is invalid, treat as no auth rather than error
        return None


def _authorize(user: Optional[AuthUser], policy: AuthorizationPolicy) -> None:
    identity = user.email if user else None

    if not policy.is_authorized(identity):
        logger.warning(
            "Rejected admin request: "
            + ("no session" if user is None else f"user {user.id} is not an admin")
        )
        raise UnauthorizedError()


async def require_admin(
    user: Optional[AuthUser] = Depends(get_current_user_optional),
    policy: AuthorizationPolicy = Depends(get_authorization_policy),
) -> Optional[AuthUser]:
    """
    Gate for every mutating endpoint.

    Computed fresh per request from the session identity and the injected
    policy. Missing and non-admin identities are rejected with the same
    401 response.

    Raises:
        UnauthorizedError: If the policy rejects the identity
    """
    _authorize(user, policy)
    return user


def _user_from_header(request: Request) -> Optional[AuthUser]:
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None

    try:
        return decode_session_token(token.strip())
    except HTTPException:
        return None


class AdminRoute(APIRoute):
    """
    Route class for admin routers.

    Runs the admin check before FastAPI reads and validates the request
    body, so a caller without an admin session gets the uniform 401 even
    when the body is malformed.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def admin_route_handler(request: Request) -> Response:
            provider = request.app.dependency_overrides.get(
                get_authorization_policy, get_authorization_policy
            )
            _authorize(_user_from_header(request), provider())
            return await handler(request)

        return admin_route_handler
