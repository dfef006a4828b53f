"""
auction/queries.py -- Read-only player listings.

Every call goes straight to the store; there is no caching layer, so results
always reflect the latest committed state.
"""

from enum import Enum

from auction.models import Bid, Player
from auction.store import STATUS_ALL, STATUS_SOLD, STATUS_UNSOLD, PlayerStore
from core.errors import PlayerNotFound


class PlayerStatus(str, Enum):
    all = STATUS_ALL
    unsold = STATUS_UNSOLD
    sold = STATUS_SOLD


def list_players(store: PlayerStore, status: PlayerStatus = PlayerStatus.all) -> list[Player]:
    """Players matching status, ordered by current bid (descending)."""
    return store.list_players(PlayerStatus(status).value)


def list_all(store: PlayerStore) -> list[Player]:
    return list_players(store, PlayerStatus.all)


def list_unsold(store: PlayerStore) -> list[Player]:
    return list_players(store, PlayerStatus.unsold)


def list_sold(store: PlayerStore) -> list[Player]:
    return list_players(store, PlayerStatus.sold)


def get_player(store: PlayerStore, player_id: int) -> Player:
    """Fetch one player or raise PlayerNotFound."""
    player = store.get_player(player_id)
    if player is None:
        raise PlayerNotFound()
    return player


def bid_history(store: PlayerStore, player_id: int) -> list[Bid]:
    """Accepted bids for an existing player, oldest first."""
    get_player(store, player_id)
    return store.list_bids(player_id)
