"""
API request and response models for the auction REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auction/models.py and
auth/models.py, which own the internal domain representation. Route handlers
map between the two.

JSON field names are camelCase on the wire (basePrice, currentBid, ...) and
snake_case in Python; the alias generator bridges the two.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auction.engine import suggested_next_bid
from auction.models import Bid, Player
from auction.store import MAX_INTEGER

# ---------------------------------------------------------------------------
# Base config
# ---------------------------------------------------------------------------

_REQUEST_CONFIG = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)
_RESPONSE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class AuthAction(str, Enum):
    register = "register"
    login = "login"


class BidAction(str, Enum):
    place = "place"
    finalize = "finalize"


class PlayerRoleEnum(str, Enum):
    batsman = "Batsman"
    bowler = "Bowler"
    all_rounder = "All-Rounder"
    wicket_keeper = "Wicket-Keeper"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class AdminAuthRequest(BaseModel):
    """Request body for POST /api/v1/admin/auth."""

    model_config = _REQUEST_CONFIG

    action: AuthAction
    username: str = Field(min_length=1, max_length=255)
    # max_length keeps inputs below bcrypt's 72-byte truncation threshold
    password: str = Field(min_length=1, max_length=64)


class BuyerAuthRequest(BaseModel):
    """Request body for POST /api/v1/buyer/auth. teamName is required to register."""

    model_config = _REQUEST_CONFIG

    action: AuthAction
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=64)
    team_name: Optional[str] = Field(default=None, max_length=255)


class PlayerCreate(BaseModel):
    """Optional body for POST /api/v1/players. Omit it to generate a random player."""

    model_config = _REQUEST_CONFIG

    name: str = Field(min_length=1, max_length=255)
    role: PlayerRoleEnum
    base_price: int = Field(ge=0, le=MAX_INTEGER)


class BidRequest(BaseModel):
    """Request body for POST /api/v1/bids."""

    model_config = _REQUEST_CONFIG

    action: BidAction
    player_id: int = Field(le=MAX_INTEGER)
    # Only checked for action=place. Strictness (> current bid) is the engine's job.
    bid_amount: Optional[int] = Field(default=None, gt=0, le=MAX_INTEGER)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class AdminResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: int
    username: str


class BuyerResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: int
    username: str
    team_name: str


class AdminRegisteredResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    message: str
    admin: AdminResponse


class BuyerRegisteredResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    message: str
    buyer: BuyerResponse


class LoginResponse(BaseModel):
    """Successful login. token and access_token hold the same JWT."""

    model_config = _RESPONSE_CONFIG

    message: str
    token: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    role: str
    team_name: Optional[str] = None


class MeResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: int
    role: str
    team_name: Optional[str] = None


class PlayerResponse(BaseModel):
    """A player as seen by clients, with the pre-filled next-bid hint."""

    model_config = _RESPONSE_CONFIG

    id: int
    name: str
    role: str
    base_price: int
    current_bid: int
    is_sold: bool
    sold_to_team: Optional[str]
    suggested_bid: Optional[int]
    created_at: str

    @classmethod
    def from_player(cls, player: Player, raise_pct: int = 5) -> "PlayerResponse":
        """Factory Method: the mapping lives beside the output model."""
        return cls(
            id=player.id,
            name=player.name,
            role=player.role,
            base_price=player.base_price,
            current_bid=player.current_bid,
            is_sold=player.is_sold,
            sold_to_team=player.sold_to_team,
            suggested_bid=None if player.is_sold else suggested_next_bid(player, raise_pct),
            created_at=player.created_at,
        )


class BidResultResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    message: str
    player: PlayerResponse


class BidRow(BaseModel):
    """One accepted bid in a player's audit log."""

    model_config = _RESPONSE_CONFIG

    id: int
    player_id: int
    buyer_id: int
    team_name: str
    bid_amount: int
    created_at: str

    @classmethod
    def from_bid(cls, bid: Bid) -> "BidRow":
        return cls(
            id=bid.id,
            player_id=bid.player_id,
            buyer_id=bid.buyer_id,
            team_name=bid.team_name,
            bid_amount=bid.bid_amount,
            created_at=bid.created_at,
        )


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
