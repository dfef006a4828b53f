"""
auction/models.py -- Domain dataclasses for the player auction.

These are pure data containers with zero logic. State transitions live in
auction/engine.py; persistence lives in auction/store.py.

Money is an integer number of minor currency units. Player lifecycle:
  unsold, no bids  ->  unsold, has bids  ->  sold (terminal)
"""

from dataclasses import dataclass
from typing import Optional

PLAYER_ROLES: tuple[str, ...] = ("Batsman", "Bowler", "All-Rounder", "Wicket-Keeper")


@dataclass
class Player:
    """A player up for auction.

    current_bid is 0 until the first accepted bid. sold_to_team holds the
    team of the current highest bidder (provisional until is_sold), so it is
    None exactly while current_bid is 0. Once is_sold is True, neither
    current_bid nor sold_to_team changes again.

    id is None before the record is written to the database.
    """

    name: str
    role: str  # one of PLAYER_ROLES
    base_price: int
    current_bid: int = 0
    is_sold: bool = False
    sold_to_team: Optional[str] = None
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert


@dataclass
class Bid:
    """Append-only audit entry written for every accepted bid.

    Records are never updated or deleted -- only inserted.
    """

    player_id: int
    buyer_id: int
    bid_amount: int
    team_name: str
    created_at: str = ""  # ISO 8601
    id: Optional[int] = None
