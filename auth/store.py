"""
auth/store.py -- SQLAlchemy Core persistence layer for auction accounts.

Pattern: Repository + Data Mapper (same as auction/store.py).
CredentialStore is the repository; _row_to_admin / _row_to_buyer are the
mappers. Route and service code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.
  Only bcrypt hashes are stored; plaintext passwords never reach this module.

Usernames are unique per table: an admin and a buyer may share a username.

DB path: auth/auction_auth.db (sibling to auction/auction.db).

Layer rule: no imports from api/ or auction/.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, event
from sqlalchemy.engine import Engine

from auth.models import Admin, Buyer

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).parent / 'auction_auth.db'}"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_admins = Table(
    "admins",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("hashed_password", Text, nullable=False),
    Column("created_at", String(32), nullable=False),
)

_buyers = Table(
    "buyers",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("hashed_password", Text, nullable=False),
    Column("team_name", String(255), nullable=False),
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode. Set per-connection because SQLite PRAGMAs are
    not inherited by new connections from the pool."""
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CredentialStore:
    """Repository for Admin and Buyer accounts.

    Usage:
        store = CredentialStore()
        admin_id = store.create_admin(Admin(username="root", hashed_password=hash_password("secret")))
        admin = store.get_admin_by_username("root")
        store.close()
    """

    def __init__(self, db_url: str = _DEFAULT_DB_URL) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        _metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Admins
    # ------------------------------------------------------------------

    def create_admin(self, admin: Admin) -> int:
        """Insert an admin and return its ID.

        Raises sqlalchemy.exc.IntegrityError if the username already exists.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _admins.insert().values(
                    username=admin.username,
                    hashed_password=admin.hashed_password,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_admin_by_username(self, username: str) -> Admin | None:
        """Exact, case-sensitive match. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_admins.select().where(_admins.c.username == username)).fetchone()
        return _row_to_admin(row) if row is not None else None

    def get_admin_by_id(self, admin_id: int) -> Admin | None:
        with self.engine.connect() as conn:
            row = conn.execute(_admins.select().where(_admins.c.id == admin_id)).fetchone()
        return _row_to_admin(row) if row is not None else None

    # ------------------------------------------------------------------
    # Buyers
    # ------------------------------------------------------------------

    def create_buyer(self, buyer: Buyer) -> int:
        """Insert a buyer and return its ID.

        Raises sqlalchemy.exc.IntegrityError if the username already exists.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _buyers.insert().values(
                    username=buyer.username,
                    hashed_password=buyer.hashed_password,
                    team_name=buyer.team_name,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_buyer_by_username(self, username: str) -> Buyer | None:
        """Exact, case-sensitive match. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_buyers.select().where(_buyers.c.username == username)).fetchone()
        return _row_to_buyer(row) if row is not None else None

    def get_buyer_by_id(self, buyer_id: int) -> Buyer | None:
        with self.engine.connect() as conn:
            row = conn.execute(_buyers.select().where(_buyers.c.id == buyer_id)).fetchone()
        return _row_to_buyer(row) if row is not None else None

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_admin(row) -> Admin:
    return Admin(
        id=row.id,
        username=row.username,
        hashed_password=row.hashed_password,
        created_at=row.created_at,
    )


def _row_to_buyer(row) -> Buyer:
    return Buyer(
        id=row.id,
        username=row.username,
        hashed_password=row.hashed_password,
        team_name=row.team_name,
        created_at=row.created_at,
    )
