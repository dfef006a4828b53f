"""
core/errors.py -- Error taxonomy shared by every layer of the auction service.

Each error carries a machine-readable code and the HTTP status the transport
boundary maps it to. Lower layers raise these; only api/main.py turns them into
responses, via a single exception handler.

Taxonomy:
  ValidationError  -- missing or malformed input                     (400)
  AuthError        -- missing, invalid or expired identity           (401)
  ForbiddenError   -- valid identity, wrong role                     (403)
  NotFoundError    -- unknown player or account                      (404)
  ConflictError    -- request clashes with current auction state     (400)
  InternalError    -- store or crypto failure; message never leaked  (500)

All errors are terminal for the request. Nothing retries.

Layer rule: core/ is the kernel. No imports from api/, auth/, or auction/.
"""

from __future__ import annotations


class AuctionError(Exception):
    """Base class. Subclasses override code, status_code and default_message."""

    code: str = "internal_error"
    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class ValidationError(AuctionError):
    code = "validation_error"
    status_code = 400
    default_message = "Invalid request."


class AuthError(AuctionError):
    code = "unauthorized"
    status_code = 401
    default_message = "Authentication required."


class ForbiddenError(AuthError):
    code = "forbidden"
    status_code = 403
    default_message = "You are not allowed to perform this action."


class NotFoundError(AuctionError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found."


class ConflictError(AuctionError):
    code = "conflict"
    status_code = 400
    default_message = "Request conflicts with the current state."


class InternalError(AuctionError):
    pass


# ---------------------------------------------------------------------------
# Credential and token errors
# ---------------------------------------------------------------------------


class DuplicateUsername(ConflictError):
    code = "duplicate_username"
    default_message = "An account with that username already exists."


class AccountNotFound(NotFoundError):
    code = "account_not_found"
    default_message = "Account not found."


class BuyerNotFound(AccountNotFound):
    # Buyer login reports every credential failure as a 400.
    status_code = 400
    default_message = "Buyer not found."


class InvalidPassword(AuthError):
    # Credentials errors are client errors, not missing-auth errors.
    code = "invalid_password"
    status_code = 400
    default_message = "Invalid password."


class InvalidOrExpiredToken(AuthError):
    code = "invalid_token"
    default_message = "Invalid or expired token."


class Unauthorized(ForbiddenError):
    """Valid token whose role may not perform the requested action."""

    code = "wrong_role"


# ---------------------------------------------------------------------------
# Auction state errors
# ---------------------------------------------------------------------------


class PlayerNotFound(NotFoundError):
    code = "player_not_found"
    default_message = "Player not found."


class PlayerAlreadySold(ConflictError):
    code = "player_already_sold"
    default_message = "Player already sold."


class BidTooLow(ConflictError):
    code = "bid_too_low"
    default_message = "Bid amount must be higher than current bid."


class NoBidsPlaced(ConflictError):
    code = "no_bids"
    default_message = "Cannot finalize a sale before any bid has been placed."
