"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Identity comes from a single source: the Authorization: Bearer <token> header.
Verification is local (signature + expiry); accounts are not re-read from the
store, so a token outlives any later change to its account.

get_bearer_token() raises 401 when the header is absent.
get_identity() raises 401 when the token is invalid or expired.
require_admin() / require_buyer() raise 403 when the role does not match.

Errors are core.errors types; api/main.py maps them to responses.

Layer rule: no imports from api/ or auction/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Depends, Request

from auth.models import AdminIdentity, BuyerIdentity, Identity
from auth.tokens import decode_access_token
from core.errors import AuthError, Unauthorized


def get_bearer_token(request: Request) -> str:
    """Return the raw bearer token. Raises AuthError (401) if none was sent.

    The bid routes pass the raw token on to the engine, which verifies it
    itself; everything else goes through get_identity().
    """
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("No authorization token provided.")
    return token.strip()


def get_identity(token: str = Depends(get_bearer_token)) -> Identity:
    """Require a valid token. Raises InvalidOrExpiredToken (401) otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        async def route(identity: Identity = Depends(get_identity)): ...
    """
    return decode_access_token(token)


def require_admin(identity: Identity = Depends(get_identity)) -> AdminIdentity:
    """Require the admin role. 401 if unauthenticated, 403 if a buyer."""
    if not isinstance(identity, AdminIdentity):
        raise Unauthorized("Admin access required.")
    return identity


def require_buyer(identity: Identity = Depends(get_identity)) -> BuyerIdentity:
    """Require the buyer role. 401 if unauthenticated, 403 if an admin."""
    if not isinstance(identity, BuyerIdentity):
        raise Unauthorized("Buyer access required.")
    return identity
