"""Shared test helpers for minting access tokens."""
from datetime import UTC, datetime, timedelta

import jwt

# HS256 secret shared between the test token minter and the app's test Settings
TEST_JWT_SECRET = "test-secret-for-hs256-access-tokens-0123456789"
TEST_JWT_AUDIENCE = "authenticated"


def make_token(
    user_id: str,
    email: str | None,
    *,
    full_name: str | None = None,
    avatar_url: str | None = None,
    expires_in: int = 3600,
    audience: str = TEST_JWT_AUDIENCE,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """Mint a provider-style access token for the given user."""
    now = datetime.now(UTC)
    claims: dict = {
        "sub": user_id,
        "aud": audience,
        "role": "authenticated",
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
        "user_metadata": {},
    }
    if email is not None:
        claims["email"] = email
    if full_name is not None:
        claims["user_metadata"]["full_name"] = full_name
    if avatar_url is not None:
        claims["user_metadata"]["avatar_url"] = avatar_url
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(token: str) -> dict[str, str]:
    """Build the Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}
