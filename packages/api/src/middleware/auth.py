# This project was developed with assistance from AI tools.
"""
JWT authentication middleware for the identity provider's OIDC tokens.

Validates Bearer tokens against the provider's JWKS endpoint, extracts user
identity, role and company, and provides FastAPI dependencies for route-level
auth. The role used for every permission decision comes from here and only
from here.

Set AUTH_DISABLED=true to bypass validation (tests / local dev without an IdP).
"""

import logging
import time
from typing import Annotated

import httpx
import jwt
from db.enums import UserRole
from fastapi import Depends, HTTPException, Request, status

from ..core.auth import build_data_scope
from ..core.config import settings
from ..schemas.auth import DataScope, TokenPayload, UserContext

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# JWKS cache
# ---------------------------------------------------------------------------

_jwks_data: dict | None = None
_jwks_fetched_at: float = 0


def _jwks_url() -> str:
    return settings.OIDC_JWKS_URL or f"{settings.OIDC_ISSUER_URL.rstrip('/')}/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JSON Web Key Set from the identity provider. Raises on failure."""
    response = httpx.get(_jwks_url(), timeout=5)
    response.raise_for_status()
    return response.json()


def _get_jwks(force_refresh: bool = False) -> dict:
    """Return cached JWKS, refreshing if stale or forced."""
    global _jwks_data, _jwks_fetched_at  # noqa: PLW0603

    now = time.time()
    if _jwks_data is None or force_refresh or (now - _jwks_fetched_at) > settings.JWKS_CACHE_TTL:
        _jwks_data = _fetch_jwks()
        _jwks_fetched_at = now

    return _jwks_data


def _get_signing_key(token: str) -> jwt.PyJWK:
    """Find the signing key for the given token from the JWKS."""
    try:
        header = jwt.get_unverified_header(token)
        kid = header.get("kid")

        for force_refresh in (False, True):
            # Second pass cache-busts once to pick up rotated keys.
            jwk_set = jwt.PyJWKSet.from_dict(_get_jwks(force_refresh=force_refresh))
            for key in jwk_set.keys:
                if key.key_id == kid:
                    return key

        raise jwt.InvalidTokenError(f"No matching key found for kid={kid}")

    except httpx.HTTPError as exc:
        logger.error("Failed to fetch JWKS from %s: %s", _jwks_url(), exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        ) from exc


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


def _extract_token(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


def _decode_token(token: str) -> TokenPayload:
    """Validate and decode a JWT against the provider's JWKS."""
    signing_key = _get_signing_key(token)

    payload = jwt.decode(
        token,
        signing_key.key,
        algorithms=["RS256"],
        issuer=settings.OIDC_ISSUER_URL,
        options={"verify_aud": False},
    )
    return TokenPayload(**payload)


def resolve_role(token_payload: TokenPayload) -> UserRole:
    """Extract the marketplace role from the token claims."""
    raw = token_payload.role or token_payload.public_metadata.get("role")
    try:
        return UserRole(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No recognized role assigned",
        ) from None


def resolve_company(token_payload: TokenPayload) -> str | None:
    """Company (organization) the user acts for, if any."""
    return token_payload.org_id or token_payload.public_metadata.get("company_id")


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

_DISABLED_USER = UserContext(
    user_id="dev-user",
    role=UserRole.ADMIN,
    email="dev@splits.local",
    name="Dev User",
    data_scope=DataScope(full_pipeline=True),
)


async def get_current_user(request: Request) -> UserContext:
    """FastAPI dependency: validate JWT and return UserContext.

    When AUTH_DISABLED=true, returns a dev admin user without token validation.
    """
    if settings.AUTH_DISABLED:
        return _DISABLED_USER

    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = _decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except jwt.InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    role = resolve_role(payload)
    company_id = resolve_company(payload)
    if role == UserRole.COMPANY and not company_id:
        logger.warning("Company user %s has no company claim", payload.sub)

    return UserContext(
        user_id=payload.sub,
        role=role,
        email=payload.email,
        name=payload.name or payload.preferred_username,
        company_id=company_id,
        data_scope=build_data_scope(role, payload.sub, company_id),
    )


# Type alias for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def require_roles(*allowed_roles: UserRole):
    """Dependency factory: restrict a route to specific roles.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def _check(user: CurrentUser) -> UserContext:
        if user.role not in allowed_roles:
            logger.warning(
                "RBAC denied: user=%s role=%s attempted route requiring %s",
                user.user_id,
                user.role.value,
                [r.value for r in allowed_roles],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return _check
