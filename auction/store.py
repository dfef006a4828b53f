"""
auction/store.py -- SQLAlchemy-backed Player Registry and bid log.

Uses SQLAlchemy Core (not ORM) so the dataclasses in auction/models.py remain
the authoritative domain representation. Swapping SQLite for PostgreSQL is a
connection string change.

Pattern: Repository + Data Mapper. PlayerStore is the repository; the _row_to_*
functions are the mappers. Route handlers never touch SQL directly.

Authorization is NOT checked here. Callers (the bid engine and the admin-only
routes) must establish the caller's role before invoking a mutation.

Concurrency: the two mutations are conditional updates. apply_bid() only
succeeds while the player is unsold and the new amount is strictly above the
stored current_bid, checked by the database in the same statement that writes
it. Two racing bids can therefore never leave the lower one in place.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = PlayerStore()                               # SQLite default
    store = PlayerStore("postgresql://user:pw@host/db") # PostgreSQL
    player_id = store.create_player(Player(name="MS Dhoni", role="Wicket-Keeper", base_price=2_000_000))
    store.apply_bid(player_id, buyer_id=3, team_name="Chennai", amount=2_500_000)
    store.mark_sold(player_id)
    store.close()
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, event
from sqlalchemy.engine import Engine

from auction.models import Bid, Player

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).parent / 'auction.db'}"

STATUS_ALL = "all"
STATUS_UNSOLD = "unsold"
STATUS_SOLD = "sold"

# Largest value a SQLite INTEGER column holds. Amounts and ids above it can
# never be stored, so lookups treat such ids as missing.
MAX_INTEGER = 2**63 - 1

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_players = Table(
    "players",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("role", String(30), nullable=False),
    Column("base_price", Integer, nullable=False),
    Column("current_bid", Integer, nullable=False, server_default="0"),
    Column("is_sold", Integer, nullable=False, server_default="0"),  # boolean stored as 0/1
    Column("sold_to_team", String(255)),
    Column("created_at", String(32), nullable=False),
)

_bids = Table(
    "bids",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("player_id", Integer, nullable=False, index=True),
    Column("buyer_id", Integer, nullable=False),
    Column("team_name", String(255), nullable=False),
    Column("bid_amount", Integer, nullable=False),
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode. Set per-connection because SQLite PRAGMAs are
    not inherited by new connections from the pool."""
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PlayerStore:
    def __init__(self, db_url: str = _DEFAULT_DB_URL) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            # Route handlers run in a thread pool; the same pooled connection
            # may be used from more than one thread.
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    def create_player(self, player: Player) -> int:
        """Insert a new player with no bids and return its ID.

        Any current_bid / is_sold / sold_to_team on the passed dataclass is
        ignored: every player enters the auction unsold with no bids.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _players.insert().values(
                    name=player.name,
                    role=player.role,
                    base_price=player.base_price,
                    current_bid=0,
                    is_sold=0,
                    sold_to_team=None,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_player(self, player_id: int) -> Optional[Player]:
        """Fetch a single player by ID. Returns None if not found."""
        if not 0 < player_id <= MAX_INTEGER:
            return None
        with self.engine.connect() as conn:
            row = conn.execute(_players.select().where(_players.c.id == player_id)).fetchone()
        return _row_to_player(row) if row is not None else None

    def list_players(self, status: str = STATUS_ALL) -> list[Player]:
        """Return players filtered by sale status, highest current bid first.

        Ties on current_bid fall back to creation order (ascending id).
        """
        query = _players.select()
        if status == STATUS_UNSOLD:
            query = query.where(_players.c.is_sold == 0)
        elif status == STATUS_SOLD:
            query = query.where(_players.c.is_sold == 1)
        elif status != STATUS_ALL:
            raise ValueError(f"Unknown player status filter: {status!r}")
        query = query.order_by(_players.c.current_bid.desc(), _players.c.id.asc())
        with self.engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_player(r) for r in rows]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply_bid(self, player_id: int, buyer_id: int, team_name: str, amount: int) -> bool:
        """Raise the player's current bid and append the audit record.

        Compare-and-swap: the UPDATE only matches while the player is unsold
        and amount > current_bid. Returns False (nothing written) when it does
        not match; the caller re-reads the player to find out why.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _players.update()
                .where(
                    (_players.c.id == player_id) & (_players.c.is_sold == 0) & (_players.c.current_bid < amount)
                )
                .values(current_bid=amount, sold_to_team=team_name)
            )
            if result.rowcount == 0:
                conn.rollback()
                return False
            conn.execute(
                _bids.insert().values(
                    player_id=player_id,
                    buyer_id=buyer_id,
                    team_name=team_name,
                    bid_amount=amount,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
        return True

    def mark_sold(self, player_id: int) -> bool:
        """Lock the player's outcome.

        Only matches an unsold player holding at least one bid. Returns False
        when nothing was updated.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _players.update()
                .where((_players.c.id == player_id) & (_players.c.is_sold == 0) & (_players.c.current_bid > 0))
                .values(is_sold=1)
            )
            conn.commit()
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Bid log
    # ------------------------------------------------------------------

    def list_bids(self, player_id: int) -> list[Bid]:
        """Return the bid history for a player, oldest first."""
        if not 0 < player_id <= MAX_INTEGER:
            return []
        with self.engine.connect() as conn:
            rows = conn.execute(
                _bids.select().where(_bids.c.player_id == player_id).order_by(_bids.c.id.asc())
            ).fetchall()
        return [_row_to_bid(r) for r in rows]

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_player(row) -> Player:
    return Player(
        id=row.id,
        name=row.name,
        role=row.role,
        base_price=row.base_price,
        current_bid=row.current_bid,
        is_sold=bool(row.is_sold),
        sold_to_team=row.sold_to_team,
        created_at=row.created_at,
    )


def _row_to_bid(row) -> Bid:
    return Bid(
        id=row.id,
        player_id=row.player_id,
        buyer_id=row.buyer_id,
        team_name=row.team_name,
        bid_amount=row.bid_amount,
        created_at=row.created_at,
    )
