# =============================================================================
# app/auth/policy.py - Admin Authorization Policies
# =============================================================================
# Decides whether a resolved identity (an email) may use the admin API.
#
# - AllowListPolicy: the configured ADMIN_EMAILS, case-insensitive
# - AlwaysAllowPolicy: local development only (AUTH_BYPASS=true)
#
# The policy is built once from settings and injected into require_admin,
# so tests can swap it with app.dependency_overrides.
# =============================================================================

import logging
from functools import lru_cache
from typing import Iterable, Protocol

from app.config import Settings, settings

logger = logging.getLogger(__name__)


class AuthorizationPolicy(Protocol):
    """Anything that can answer "may this identity mutate content?"."""

    def is_authorized(self, identity: str | None) -> bool:
        ...


class AllowListPolicy:
    """
    Allow only identities on a fixed list.

    Example:
        policy = AllowListPolicy(["owner@studio.com"])
        policy.is_authorized("Owner@Studio.com")  # True
        policy.is_authorized(None)                # False
    """

    def __init__(self, emails: Iterable[str]):
        self._emails = frozenset(e.strip().lower() for e in emails if e.strip())

    @property
    def emails(self) -> frozenset[str]:
        return self._emails

    def is_authorized(self, identity: str | None) -> bool:
        if not identity:
            return False
        return identity.strip().lower() in self._emails


class AlwaysAllowPolicy:
    """Allow everyone, signed in or not. Never used outside development."""

    def is_authorized(self, identity: str | None) -> bool:
        return True


def build_authorization_policy(config: Settings) -> AuthorizationPolicy:
    """
    Select the policy for the configured environment.

    Raises:
        ValueError: If AUTH_BYPASS is set outside development
    """
    if config.AUTH_BYPASS:
        if not config.is_development:
            raise ValueError(
                f"AUTH_BYPASS is only allowed in development (ENVIRONMENT={config.ENVIRONMENT}). "
                "Unset AUTH_BYPASS for deployed environments."
            )
        logger.warning("AUTH_BYPASS is enabled: every admin request will be allowed")
        return AlwaysAllowPolicy()

    if not config.admin_emails_list:
        logger.warning("ADMIN_EMAILS is empty: every admin request will be rejected")

    return AllowListPolicy(config.admin_emails_list)


@lru_cache
def get_authorization_policy() -> AuthorizationPolicy:
    """FastAPI dependency: the policy for the running app."""
    return build_authorization_policy(settings)
