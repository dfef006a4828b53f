"""
auction/engine.py -- Bid placement and sale finalization.

State machine per player:

    unsold/no bids --place_bid--> unsold/has bids --finalize_sale--> sold
                                   ^           |
                                   +-place_bid-+

Rules enforced here (and only here):
  - place_bid requires a buyer token; finalize_sale requires an admin token.
  - A bid must be strictly greater than the current bid. Equal bids lose.
    There is no minimum increment. The only ceiling is what the store can
    hold (MAX_INTEGER). The raise shown to clients (suggested_next_bid) is a
    hint, never enforced.
  - Sold players accept no more bids and never return to unsold.
  - finalize_sale refuses a player with no bids (NoBidsPlaced) and is a no-op
    on a player that is already sold.

Both operations take the raw bearer token and verify it themselves, so the
engine is safe to call from any transport.

The store performs the final write as a conditional update, so the checks
below are re-validated atomically by the database; a bid that loses a race is
reported with the same error it would have got had it arrived second.
"""

from __future__ import annotations

import logging
import math

from auction.models import Player
from auction.store import MAX_INTEGER, PlayerStore
from auth.models import AdminIdentity, BuyerIdentity
from auth.tokens import decode_access_token
from core.errors import (
    BidTooLow,
    NoBidsPlaced,
    PlayerAlreadySold,
    PlayerNotFound,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger("auction.engine")


def suggested_next_bid(player: Player, raise_pct: int = 5) -> int:
    """Amount a bidding client should pre-fill.

    Base price before the first bid, then current bid raised by raise_pct
    percent (rounded up, and always at least one unit above the current bid).
    """
    if player.current_bid <= 0:
        return player.base_price
    raised = math.ceil(player.current_bid * (100 + raise_pct) / 100)
    return max(raised, player.current_bid + 1)


class BidEngine:
    def __init__(self, store: PlayerStore) -> None:
        self.store = store

    def place_bid(self, token: str, player_id: int, amount: int) -> Player:
        """Accept a buyer's bid and return the updated player.

        Raises InvalidOrExpiredToken, Unauthorized (non-buyer), ValidationError
        (non-integer or out-of-range amount), PlayerNotFound, PlayerAlreadySold
        or BidTooLow.
        No state changes on any failure.
        """
        identity = decode_access_token(token)
        if not isinstance(identity, BuyerIdentity):
            raise Unauthorized("Only buyers can place bids.")
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError("Bid amount must be a whole number.")
        if amount > MAX_INTEGER:
            raise ValidationError(f"Bid amount must not exceed {MAX_INTEGER}.")

        player = self._load(player_id)
        self._check_biddable(player, amount)

        if not self.store.apply_bid(player_id, identity.buyer_id, identity.team_name, amount):
            # Another writer got in between the read and the write.
            player = self._load(player_id)
            self._check_biddable(player, amount)
            raise BidTooLow()

        logger.info(
            "Bid accepted (player=%d, buyer=%d, team=%s, amount=%d)",
            player_id,
            identity.buyer_id,
            identity.team_name,
            amount,
        )
        return self._load(player_id)

    def finalize_sale(self, token: str, player_id: int) -> Player:
        """Mark a player sold to the current highest bidder and return it.

        Raises InvalidOrExpiredToken, Unauthorized (non-admin), PlayerNotFound or
        NoBidsPlaced. Finalizing an already sold player returns it unchanged.
        """
        identity = decode_access_token(token)
        if not isinstance(identity, AdminIdentity):
            raise Unauthorized("Only admin can finalize sales.")

        player = self._load(player_id)
        if player.is_sold:
            return player
        if player.current_bid <= 0:
            logger.info("Finalize rejected (player=%d): no bids", player_id)
            raise NoBidsPlaced()

        if not self.store.mark_sold(player_id):
            # Lost a race with another finalize; the re-read is authoritative.
            player = self._load(player_id)
            if not player.is_sold:
                raise NoBidsPlaced()
            return player

        sold = self._load(player_id)
        logger.info(
            "Sale finalized (player=%d, team=%s, amount=%d, admin=%d)",
            player_id,
            sold.sold_to_team,
            sold.current_bid,
            identity.admin_id,
        )
        return sold

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, player_id: int) -> Player:
        player = self.store.get_player(player_id)
        if player is None:
            raise PlayerNotFound()
        return player

    @staticmethod
    def _check_biddable(player: Player, amount: int) -> None:
        if player.is_sold:
            logger.info("Bid rejected (player=%d): player_already_sold", player.id)
            raise PlayerAlreadySold()
        if amount <= player.current_bid:
            logger.info("Bid rejected (player=%d, amount=%d): bid_too_low", player.id, amount)
            raise BidTooLow()
