"""Unit tests for auction/store.py -- the player registry and bid log.

Covers:
- new players start unsold with no bids, whatever the caller passes in
- list_players filtering and ordering (current bid desc, then creation order)
- apply_bid compare-and-swap: strictly greater, unsold only, audit row appended
- mark_sold only matches unsold players holding a bid
"""

import pytest

from auction.models import Player
from auction.store import MAX_INTEGER, PlayerStore


def _add(store: PlayerStore, name: str, base_price: int = 2_000_000) -> int:
    return store.create_player(Player(name=name, role="Batsman", base_price=base_price))


def test_create_player_starts_clean(player_store):
    pid = player_store.create_player(
        Player(name="Rohit Sharma", role="Batsman", base_price=3_000_000, current_bid=99, is_sold=True, sold_to_team="X")
    )
    player = player_store.get_player(pid)
    assert player.current_bid == 0
    assert player.is_sold is False
    assert player.sold_to_team is None
    assert player.created_at


def test_get_player_missing(player_store):
    assert player_store.get_player(12345) is None


def test_lookups_beyond_integer_range_find_nothing(player_store):
    _add(player_store, "Rohit Sharma")
    assert player_store.get_player(MAX_INTEGER + 1) is None
    assert player_store.list_bids(MAX_INTEGER + 1) == []
    assert player_store.get_player(MAX_INTEGER) is None


def test_list_players_ordering_and_filters(player_store):
    a = _add(player_store, "A")
    b = _add(player_store, "B")
    c = _add(player_store, "C")
    d = _add(player_store, "D")
    player_store.apply_bid(b, buyer_id=1, team_name="T1", amount=5_000_000)
    player_store.apply_bid(c, buyer_id=1, team_name="T1", amount=9_000_000)
    player_store.mark_sold(c)

    assert [p.id for p in player_store.list_players()] == [c, b, a, d]
    assert [p.id for p in player_store.list_players("unsold")] == [b, a, d]
    assert [p.id for p in player_store.list_players("sold")] == [c]


def test_list_players_rejects_unknown_status(player_store):
    with pytest.raises(ValueError):
        player_store.list_players("pending")


def test_apply_bid_updates_player_and_logs(player_store):
    pid = _add(player_store, "Jasprit Bumrah")
    assert player_store.apply_bid(pid, buyer_id=4, team_name="Mumbai Indians", amount=2_500_000)

    player = player_store.get_player(pid)
    assert player.current_bid == 2_500_000
    assert player.sold_to_team == "Mumbai Indians"

    bids = player_store.list_bids(pid)
    assert len(bids) == 1
    assert bids[0].buyer_id == 4
    assert bids[0].bid_amount == 2_500_000
    assert bids[0].team_name == "Mumbai Indians"


def test_apply_bid_rejects_equal_and_lower_without_writing(player_store):
    pid = _add(player_store, "KL Rahul")
    player_store.apply_bid(pid, buyer_id=1, team_name="T1", amount=4_000_000)

    assert player_store.apply_bid(pid, buyer_id=2, team_name="T2", amount=4_000_000) is False
    assert player_store.apply_bid(pid, buyer_id=2, team_name="T2", amount=3_000_000) is False

    player = player_store.get_player(pid)
    assert player.current_bid == 4_000_000
    assert player.sold_to_team == "T1"
    assert len(player_store.list_bids(pid)) == 1


def test_apply_bid_rejected_once_sold(player_store):
    pid = _add(player_store, "MS Dhoni")
    player_store.apply_bid(pid, buyer_id=1, team_name="T1", amount=4_000_000)
    assert player_store.mark_sold(pid)

    assert player_store.apply_bid(pid, buyer_id=2, team_name="T2", amount=9_000_000) is False
    player = player_store.get_player(pid)
    assert player.current_bid == 4_000_000
    assert player.sold_to_team == "T1"


def test_apply_bid_unknown_player(player_store):
    assert player_store.apply_bid(999, buyer_id=1, team_name="T1", amount=1) is False
    assert player_store.list_bids(999) == []


def test_mark_sold_requires_a_bid(player_store):
    pid = _add(player_store, "Chris Gayle")
    assert player_store.mark_sold(pid) is False
    assert player_store.get_player(pid).is_sold is False


def test_mark_sold_only_once(player_store):
    pid = _add(player_store, "David Warner")
    player_store.apply_bid(pid, buyer_id=1, team_name="T1", amount=1)
    assert player_store.mark_sold(pid) is True
    assert player_store.mark_sold(pid) is False
    assert player_store.get_player(pid).is_sold is True


def test_bid_history_is_oldest_first(player_store):
    pid = _add(player_store, "Hardik Pandya")
    for amount in (1_000, 2_000, 3_000):
        player_store.apply_bid(pid, buyer_id=1, team_name="T1", amount=amount)
    assert [b.bid_amount for b in player_store.list_bids(pid)] == [1_000, 2_000, 3_000]
