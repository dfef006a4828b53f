#!/usr/bin/env python3
"""
Player Auction -- operator CLI.

Usage:
  python main.py serve [--host 127.0.0.1] [--port 8000]
  python main.py register-admin alice s3cret
  python main.py register-buyer csk-owner s3cret "Chennai Super Kings"
  python main.py generate-player
  python main.py generate-player --name "MS Dhoni" --role Wicket-Keeper --base-price 2000000
  python main.py list-players --status unsold

Environment variables (see core/config.py):
  SECRET_KEY       Token signing key (>= 32 chars). Required unless DEBUG=true.
  AUTH_DB_URL      SQLAlchemy URL for accounts. Default: auth/auction_auth.db
  AUCTION_DB_URL   SQLAlchemy URL for players and bids. Default: auction/auction.db
"""

import argparse
import sys

from auction.models import PLAYER_ROLES
from auction.queries import PlayerStatus, list_players
from auction.registry import create_player, generate_random_player
from auction.store import PlayerStore
from auth.accounts import register_admin, register_buyer
from auth.store import CredentialStore
from core.config import get_settings
from core.errors import AuctionError


def _credential_store() -> CredentialStore:
    url = get_settings().auth_db_url
    return CredentialStore(url) if url else CredentialStore()


def _player_store() -> PlayerStore:
    url = get_settings().auction_db_url
    return PlayerStore(url) if url else PlayerStore()


def _format_money(amount: int) -> str:
    """Render minor units in crore, the way auction boards show prices."""
    return f"{amount / 1_000_000:.2f} Cr"


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _cmd_register_admin(args: argparse.Namespace) -> int:
    store = _credential_store()
    try:
        admin = register_admin(store, args.username, args.password)
    finally:
        store.close()
    print(f"  Admin '{admin.username}' registered (id={admin.id})")
    return 0


def _cmd_register_buyer(args: argparse.Namespace) -> int:
    store = _credential_store()
    try:
        buyer = register_buyer(store, args.username, args.password, args.team_name)
    finally:
        store.close()
    print(f"  Buyer '{buyer.username}' registered for {buyer.team_name} (id={buyer.id})")
    return 0


def _cmd_generate_player(args: argparse.Namespace) -> int:
    store = _player_store()
    try:
        if args.name:
            if not args.role or args.base_price is None:
                print("  [!] --name requires --role and --base-price")
                return 2
            player = create_player(store, args.name, args.role, args.base_price)
        else:
            player = generate_random_player(store)
    finally:
        store.close()
    print(f"  #{player.id} {player.name} ({player.role}) base {_format_money(player.base_price)}")
    return 0


def _cmd_list_players(args: argparse.Namespace) -> int:
    store = _player_store()
    try:
        players = list_players(store, PlayerStatus(args.status))
    finally:
        store.close()
    if not players:
        print("  No players.")
        return 0
    for p in players:
        if p.is_sold:
            state = f"SOLD to {p.sold_to_team}"
        elif p.current_bid:
            state = f"leading: {p.sold_to_team}"
        else:
            state = "no bids"
        print(
            f"  #{p.id:<4} {p.name:<18} {p.role:<14} base {_format_money(p.base_price):>10}"
            f"  bid {_format_money(p.current_bid):>10}  {state}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="auction", description="Player auction operator CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=_cmd_serve)

    reg_admin = sub.add_parser("register-admin", help="Create an admin account")
    reg_admin.add_argument("username")
    reg_admin.add_argument("password")
    reg_admin.set_defaults(func=_cmd_register_admin)

    reg_buyer = sub.add_parser("register-buyer", help="Create a team buyer account")
    reg_buyer.add_argument("username")
    reg_buyer.add_argument("password")
    reg_buyer.add_argument("team_name")
    reg_buyer.set_defaults(func=_cmd_register_buyer)

    gen = sub.add_parser("generate-player", help="Add a player (random unless --name is given)")
    gen.add_argument("--name")
    gen.add_argument("--role", choices=PLAYER_ROLES)
    gen.add_argument("--base-price", type=int)
    gen.set_defaults(func=_cmd_generate_player)

    ls = sub.add_parser("list-players", help="Show the auction board")
    ls.add_argument("--status", choices=[s.value for s in PlayerStatus], default=PlayerStatus.all.value)
    ls.set_defaults(func=_cmd_list_players)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except AuctionError as exc:
        print(f"  [!] {exc.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
