"""Verified caller identity."""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Identity:
    """
    A user identity confirmed by the identity provider for the current request.

    Produced once per request by the auth dependency and passed explicitly to
    the operations that need it. Never stored globally.
    """

    id: str
    email: str
    name: str | None = None
    avatar_url: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Identity | None":
        """
        Build an identity from provider claims.

        Accepts either a decoded access token (`sub`) or a provider user object
        (`id`). Profile fields come from `user_metadata`. Returns None when the
        id or email is missing.
        """
        user_id = claims.get("id") or claims.get("sub")
        email = claims.get("email")
        if not user_id or not email:
            return None

        metadata = claims.get("user_metadata") or {}
        return cls(
            id=str(user_id),
            email=email,
            name=metadata.get("full_name") or metadata.get("name"),
            avatar_url=metadata.get("avatar_url"),
        )
