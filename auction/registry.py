"""
auction/registry.py -- Player creation, including the demo-data generator.

Precondition for every function here: the caller has already established that
the acting identity is an admin. The registry trusts its caller and does not
re-check roles (the admin-only route enforces it with require_admin).
"""

from __future__ import annotations

import logging
import random

from auction.models import PLAYER_ROLES, Player
from auction.store import MAX_INTEGER, PlayerStore
from core.errors import InternalError, ValidationError

logger = logging.getLogger("auction.registry")

PLAYER_NAMES: tuple[str, ...] = (
    "Virat Kohli",
    "MS Dhoni",
    "Rohit Sharma",
    "KL Rahul",
    "Jasprit Bumrah",
    "Hardik Pandya",
    "Ravindra Jadeja",
    "AB de Villiers",
    "Chris Gayle",
    "David Warner",
)

# Inclusive range for generated base prices: 2 Cr to 20 Cr.
MIN_BASE_PRICE = 2_000_000
MAX_BASE_PRICE = 20_000_000


def create_player(store: PlayerStore, name: str, role: str, base_price: int) -> Player:
    """Persist a new unsold player with no bids and return it."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Player name is required.")
    if role not in PLAYER_ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(PLAYER_ROLES)}.")
    if base_price < 0:
        raise ValidationError("Base price must not be negative.")
    if base_price > MAX_INTEGER:
        raise ValidationError(f"Base price must not exceed {MAX_INTEGER}.")

    player_id = store.create_player(Player(name=name, role=role, base_price=base_price))
    created = store.get_player(player_id)
    if created is None:
        raise InternalError("Player not found after write.")
    logger.info("Player created (id=%d, name=%s, role=%s, base_price=%d)", player_id, name, role, base_price)
    return created


def random_player_fields(rng: random.Random | None = None) -> tuple[str, str, int]:
    """Pick (name, role, base_price) uniformly from the fixed roster.

    Names repeat: the roster is a demo-data pool, not a uniqueness constraint.
    """
    rng = rng or random.Random()
    name = rng.choice(PLAYER_NAMES)
    role = rng.choice(PLAYER_ROLES)
    base_price = rng.randint(MIN_BASE_PRICE, MAX_BASE_PRICE)
    return name, role, base_price


def generate_random_player(store: PlayerStore, rng: random.Random | None = None) -> Player:
    """Create a player with a random roster name, role and base price."""
    name, role, base_price = random_player_fields(rng)
    return create_player(store, name, role, base_price)
