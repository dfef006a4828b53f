"""
auth/accounts.py -- Registration and login for admin and buyer accounts.

Registration hashes the password and inserts the row; a duplicate username
surfaces as DuplicateUsername. Login looks the row up, runs bcrypt (against a
dummy hash when the account is missing), and issues a token with the role baked
in. Admin tokens carry no team name; buyer tokens always carry one.

Layer rule: no imports from api/ or auction/.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from auth.models import Admin, AdminIdentity, Buyer, BuyerIdentity
from auth.store import CredentialStore
from auth.tokens import burn_password_check, create_access_token, hash_password, verify_password
from core.errors import AccountNotFound, BuyerNotFound, DuplicateUsername, InvalidPassword, ValidationError

logger = logging.getLogger("auction.auth")


def _require(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field} is required.")
    return value


def register_admin(store: CredentialStore, username: str, password: str) -> Admin:
    """Create an admin account. Raises DuplicateUsername if the name is taken."""
    _require(username, "Username")
    _require(password, "Password")
    admin = Admin(username=username, hashed_password=hash_password(password))
    try:
        admin.id = store.create_admin(admin)
    except IntegrityError as exc:
        raise DuplicateUsername() from exc
    logger.info("Admin registered (id=%s, username=%s)", admin.id, username)
    return admin


def register_buyer(store: CredentialStore, username: str, password: str, team_name: str) -> Buyer:
    """Create a buyer account for a team. Raises DuplicateUsername if the name is taken."""
    _require(username, "Username")
    _require(password, "Password")
    _require(team_name, "Team name")
    buyer = Buyer(username=username, hashed_password=hash_password(password), team_name=team_name)
    try:
        buyer.id = store.create_buyer(buyer)
    except IntegrityError as exc:
        raise DuplicateUsername() from exc
    logger.info("Buyer registered (id=%s, username=%s, team=%s)", buyer.id, username, team_name)
    return buyer


def login_admin(store: CredentialStore, username: str, password: str) -> str:
    """Return a signed admin token, or raise AccountNotFound / InvalidPassword."""
    admin = store.get_admin_by_username(username)
    if admin is None:
        burn_password_check(password)
        logger.warning("Admin login failed: unknown username %r", username)
        raise AccountNotFound("Admin not found.")
    if not verify_password(password, admin.hashed_password):
        logger.warning("Admin login failed: bad password for %r", username)
        raise InvalidPassword()
    return create_access_token(AdminIdentity(admin_id=admin.id))


def login_buyer(store: CredentialStore, username: str, password: str) -> tuple[str, Buyer]:
    """Return a signed buyer token carrying the team name, plus the buyer.

    Raises BuyerNotFound (400) or InvalidPassword.
    """
    buyer = store.get_buyer_by_username(username)
    if buyer is None:
        burn_password_check(password)
        logger.warning("Buyer login failed: unknown username %r", username)
        raise BuyerNotFound()
    if not verify_password(password, buyer.hashed_password):
        logger.warning("Buyer login failed: bad password for %r", username)
        raise InvalidPassword()
    token = create_access_token(BuyerIdentity(buyer_id=buyer.id, team_name=buyer.team_name))
    return token, buyer
