"""
auth/tokens.py -- JWT identity assertions and password hashing.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with SECRET_KEY and carry the
       subject id, role, team name (buyers only) and expiry. Verification is
       purely local: signature plus expiry. There is no revocation list, so a
       token stays valid for its whole lifetime.

  Passwords: bcrypt directly. The _DUMMY_HASH constant lets login run bcrypt
       even when the account does not exist, so response time does not reveal
       which usernames are registered.

  SECRET_KEY: sourced from core.config.get_settings(), validated at startup.

Layer rule: no imports from api/ or auction/. Import from core/ is allowed --
core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from auth.models import ROLE_ADMIN, ROLE_BUYER, AdminIdentity, BuyerIdentity, Identity
from core.config import get_settings
from core.errors import InvalidOrExpiredToken

logger = logging.getLogger("auction.auth")

# ---------------------------------------------------------------------------
# Config -- read once at module load via the lru_cache singleton
# ---------------------------------------------------------------------------

_settings = get_settings()

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    bcrypt only looks at the first 72 bytes; the API layer caps password
    length well below that.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# Computed once at module load so the first login attempt is not measurably
# slower than subsequent ones.
_DUMMY_HASH: str = hash_password("auction_timing_dummy")


def burn_password_check(plain: str) -> None:
    """Spend one bcrypt comparison against the dummy hash (timing equalization)."""
    verify_password(plain, _DUMMY_HASH)


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(identity: Identity, expire_seconds: int = 0) -> str:
    """Encode a signed JWT for an admin or buyer identity.

    Args:
        identity:       AdminIdentity or BuyerIdentity. The team name is only
                        written for buyers.
        expire_seconds: Lifetime in seconds. If 0 (default), uses
                        Settings.token_expire_seconds (one hour).
    """
    duration = expire_seconds if expire_seconds > 0 else _settings.token_expire_seconds
    expire = datetime.now(timezone.utc) + timedelta(seconds=duration)
    if isinstance(identity, BuyerIdentity):
        payload = {"sub": str(identity.buyer_id), "role": ROLE_BUYER, "team": identity.team_name}
    else:
        payload = {"sub": str(identity.admin_id), "role": ROLE_ADMIN}
    payload["exp"] = expire
    return jwt.encode(payload, _settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> Identity:
    """Verify a JWT and return the identity it asserts.

    Raises InvalidOrExpiredToken on a bad signature, an elapsed expiry, or a
    payload that does not describe exactly one of the two identity shapes.
    """
    try:
        payload = jwt.decode(token, _settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise InvalidOrExpiredToken() from exc

    try:
        subject_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidOrExpiredToken() from exc

    role = payload.get("role")
    if role == ROLE_ADMIN and "team" not in payload:
        return AdminIdentity(admin_id=subject_id)
    if role == ROLE_BUYER and payload.get("team"):
        return BuyerIdentity(buyer_id=subject_id, team_name=payload["team"])
    raise InvalidOrExpiredToken()
