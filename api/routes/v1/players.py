"""
api/routes/v1/players.py -- Player listing and creation routes.

Routes (in registration order to avoid FastAPI path capture conflicts):
  GET  /players?status=all|unsold|sold   -- public listing, highest bid first
  POST /players                          -- admin only; random player unless a body is sent
  GET  /players/{player_id}              -- public detail
  GET  /players/{player_id}/bids         -- public bid audit log, oldest first
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from api.models import BidRow, PlayerCreate, PlayerResponse
from auction import queries
from auction.queries import PlayerStatus
from auction.registry import create_player, generate_random_player
from auction.store import PlayerStore
from auth.dependencies import require_admin
from auth.models import AdminIdentity
from core.config import get_settings

# Auth policy:
# - GET  /api/v1/players, /players/{id}, /players/{id}/bids: public -- read-only auction board
# - POST /api/v1/players: requires admin (require_admin) -- 401 without token, 403 for buyers
router = APIRouter()


def _to_response(player) -> PlayerResponse:
    return PlayerResponse.from_player(player, get_settings().bid_raise_hint_pct)


@router.get("/players", response_model=list[PlayerResponse])
def list_players(request: Request, status: PlayerStatus = PlayerStatus.all) -> list[PlayerResponse]:
    """Return players filtered by sale status, ordered by current bid descending."""
    store: PlayerStore = request.app.state.player_store
    return [_to_response(p) for p in queries.list_players(store, status)]


@router.post("/players", response_model=PlayerResponse, status_code=201)
def add_player(
    request: Request,
    body: Optional[PlayerCreate] = None,
    admin: AdminIdentity = Depends(require_admin),
) -> PlayerResponse:
    """Create a player. Without a body, name/role/base price are drawn at random."""
    store: PlayerStore = request.app.state.player_store
    if body is None:
        player = generate_random_player(store)
    else:
        player = create_player(store, body.name, body.role.value, body.base_price)
    return _to_response(player)


@router.get("/players/{player_id}", response_model=PlayerResponse)
def get_player(request: Request, player_id: int) -> PlayerResponse:
    store: PlayerStore = request.app.state.player_store
    return _to_response(queries.get_player(store, player_id))


@router.get("/players/{player_id}/bids", response_model=list[BidRow])
def list_player_bids(request: Request, player_id: int) -> list[BidRow]:
    """Accepted bids for one player. 404 if the player does not exist."""
    store: PlayerStore = request.app.state.player_store
    return [BidRow.from_bid(b) for b in queries.bid_history(store, player_id)]
