"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores and routes do the
work; these only own the shape.

Identity is a tagged union rather than one payload with an optional team name:
an AdminIdentity never has a team, a BuyerIdentity always has one.

Layer rule: no imports from api/ or auction/.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

ROLE_ADMIN = "admin"
ROLE_BUYER = "buyer"


@dataclass
class Admin:
    """An auction administrator. Never mutated after registration."""

    username: str
    hashed_password: str
    id: int | None = None
    created_at: str | None = None


@dataclass
class Buyer:
    """A team account that bids on players. team_name is stamped on won players."""

    username: str
    hashed_password: str
    team_name: str
    id: int | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class AdminIdentity:
    admin_id: int
    role: str = ROLE_ADMIN


@dataclass(frozen=True)
class BuyerIdentity:
    buyer_id: int
    team_name: str
    role: str = ROLE_BUYER


Identity = Union[AdminIdentity, BuyerIdentity]
