"""Authentication module for bearer-token verification against the identity provider."""
import logging
from typing import Any

import httpx
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from schemas.identity import Identity

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

# Identity used for every request in DEV_MODE
DEV_IDENTITY = Identity(
    id="dev|local-development-user",
    email="dev@localhost",
    name="Local Developer",
)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_jwt(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and validate an access token signed with the provider's JWT secret.

    Raises:
        HTTPException: If token is invalid, expired, or has the wrong audience.
    """
    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.supabase_jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidAudienceError:
        raise _unauthorized("Invalid audience")
    except jwt.PyJWTError as e:
        # Log full details for debugging (server-side only)
        logger.warning("JWT validation failed: %s", e, exc_info=True)
        raise _unauthorized("Invalid token")


async def fetch_provider_user(token: str, settings: Settings) -> dict[str, Any]:
    """
    Resolve an access token to its user by asking the identity provider.

    Any 4xx answer means the provider rejected the token. Transport failures
    and 5xx answers mean the token could not be checked at all.

    Raises:
        HTTPException: 401 if the token is rejected, 500 if the provider is unavailable.
    """
    headers = {
        "Authorization": f"Bearer {token}",
        "apikey": settings.supabase_anon_key,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.auth_timeout) as client:
            response = await client.get(settings.supabase_user_url, headers=headers)
    except httpx.HTTPError as e:
        logger.error("Failed to reach identity provider: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not validate credentials",
        )

    if response.is_client_error:
        logger.warning("Identity provider rejected token (status %s)", response.status_code)
        raise _unauthorized("Invalid token")
    if response.is_error:
        logger.error("Identity provider returned status %s", response.status_code)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not validate credentials",
        )

    try:
        return response.json()
    except ValueError:
        logger.error("Identity provider returned a non-JSON body")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not validate credentials",
        )


async def verify_token(token: str, settings: Settings) -> Identity:
    """
    Verify a bearer token and return the identity it belongs to.

    Uses local JWT verification when a JWT secret is configured, otherwise the
    provider's user endpoint. A verification failure is final for the request.
    """
    if settings.verify_tokens_locally:
        claims = decode_jwt(token, settings)
    else:
        claims = await fetch_provider_user(token, settings)

    identity = Identity.from_claims(claims)
    if identity is None:
        raise _unauthorized("Invalid token: missing id or email")
    return identity


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """
    Dependency that validates the bearer token and returns the caller's identity.

    In DEV_MODE, bypasses auth and returns a fixed development identity.
    """
    if settings.dev_mode:
        return DEV_IDENTITY

    if credentials is None:
        raise _unauthorized("Not authenticated")

    return await verify_token(credentials.credentials, settings)
