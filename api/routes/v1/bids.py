"""
api/routes/v1/bids.py -- Bid placement and sale finalization.

Routes:
  POST /bids  {action: "place", playerId, bidAmount}   -- buyer token
  POST /bids  {action: "finalize", playerId}           -- admin token

The route only insists that *some* bearer token is present (401 otherwise).
The raw token goes to BidEngine, which verifies it and checks the role itself
(401 invalid/expired, 403 wrong role). Auction-state failures (bid too low,
already sold, no bids) come back as 400; an unknown player as 404.
"""

from fastapi import APIRouter, Depends, Request

from api.models import BidAction, BidRequest, BidResultResponse, PlayerResponse
from auction.engine import BidEngine
from auth.dependencies import get_bearer_token
from core.config import get_settings
from core.errors import ValidationError

# Auth policy:
# - POST /api/v1/bids: requires a bearer token; role is enforced by BidEngine
router = APIRouter()


@router.post("/bids", response_model=BidResultResponse)
def bids(
    request: Request,
    body: BidRequest,
    token: str = Depends(get_bearer_token),
) -> BidResultResponse:
    """Dispatch on action: place a bid or finalize a sale."""
    engine: BidEngine = request.app.state.bid_engine
    raise_pct = get_settings().bid_raise_hint_pct

    if body.action == BidAction.place:
        if body.bid_amount is None:
            raise ValidationError("Valid bid amount is required.")
        player = engine.place_bid(token, body.player_id, body.bid_amount)
        return BidResultResponse(
            message="Bid placed successfully",
            player=PlayerResponse.from_player(player, raise_pct),
        )

    player = engine.finalize_sale(token, body.player_id)
    return BidResultResponse(
        message="Player sale finalized",
        player=PlayerResponse.from_player(player, raise_pct),
    )
