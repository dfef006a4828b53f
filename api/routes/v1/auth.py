"""
api/routes/v1/auth.py -- Admin and buyer account endpoints.

Routes:
  POST /api/v1/admin/auth   -- action=register (201) or action=login (200)
  POST /api/v1/buyer/auth   -- action=register (201, teamName required) or action=login (200)
  GET  /api/v1/auth/me      -- identity carried by the bearer token

Security:
  Both POST endpoints are rate-limited per client IP (LOGIN_RATE_LIMIT).
  Login responses carry Cache-Control: no-store.
  Passwords are bcrypt-hashed in auth/accounts.py before they reach the store.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import (
    AdminAuthRequest,
    AdminRegisteredResponse,
    AdminResponse,
    AuthAction,
    BuyerAuthRequest,
    BuyerRegisteredResponse,
    BuyerResponse,
    LoginResponse,
    MeResponse,
)
from auth.accounts import login_admin, login_buyer, register_admin, register_buyer
from auth.dependencies import get_identity
from auth.models import ROLE_ADMIN, ROLE_BUYER, AdminIdentity, Identity
from auth.store import CredentialStore
from core.config import get_settings
from core.errors import ValidationError

# Auth policy:
# - POST /api/v1/admin/auth:  public -- registration and login must be unauthenticated
# - POST /api/v1/buyer/auth:  public
# - GET  /api/v1/auth/me:     requires a valid token (get_identity)
router = APIRouter()

_settings = get_settings()


def _login_response(token: str, role: str, team_name: str | None = None) -> JSONResponse:
    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(
            message="Login successful",
            token=token,
            access_token=token,
            token_type="bearer",  # noqa: S106 # nosec B106 -- OAuth token type, not a password
            expires_in=_settings.token_expire_seconds,
            role=role,
            team_name=team_name,
        ).model_dump(by_alias=True),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@limiter.limit(_settings.login_rate_limit)
@router.post("/admin/auth")
def admin_auth(request: Request, body: AdminAuthRequest) -> JSONResponse:
    """Register a new admin or log an existing one in."""
    store: CredentialStore = request.app.state.credential_store

    if body.action == AuthAction.register:
        admin = register_admin(store, body.username, body.password)
        payload = AdminRegisteredResponse(
            message="Admin registered successfully",
            admin=AdminResponse(id=admin.id, username=admin.username),
        )
        return JSONResponse(status_code=201, content=payload.model_dump(by_alias=True))

    token = login_admin(store, body.username, body.password)
    return _login_response(token, ROLE_ADMIN)


@limiter.limit(_settings.login_rate_limit)
@router.post("/buyer/auth")
def buyer_auth(request: Request, body: BuyerAuthRequest) -> JSONResponse:
    """Register a new team buyer or log an existing one in."""
    store: CredentialStore = request.app.state.credential_store

    if body.action == AuthAction.register:
        if not body.team_name:
            raise ValidationError("Team name is required for registration.")
        buyer = register_buyer(store, body.username, body.password, body.team_name)
        payload = BuyerRegisteredResponse(
            message="Buyer registered successfully",
            buyer=BuyerResponse(id=buyer.id, username=buyer.username, team_name=buyer.team_name),
        )
        return JSONResponse(status_code=201, content=payload.model_dump(by_alias=True))

    token, buyer = login_buyer(store, body.username, body.password)
    return _login_response(token, ROLE_BUYER, buyer.team_name)


@router.get("/auth/me", response_model=MeResponse)
async def me(identity: Identity = Depends(get_identity)) -> MeResponse:
    """Echo the identity asserted by the caller's token."""
    if isinstance(identity, AdminIdentity):
        return MeResponse(id=identity.admin_id, role=identity.role)
    return MeResponse(id=identity.buyer_id, role=identity.role, team_name=identity.team_name)
