"""Tests for the operator CLI in main.py, against throwaway SQLite files."""

import pytest

import main
from auth.store import CredentialStore
from auction.store import PlayerStore


@pytest.fixture
def cli_dbs(tmp_path, monkeypatch):
    auth_url = f"sqlite:///{tmp_path / 'auth.db'}"
    auction_url = f"sqlite:///{tmp_path / 'auction.db'}"
    monkeypatch.setattr(main, "_credential_store", lambda: CredentialStore(auth_url))
    monkeypatch.setattr(main, "_player_store", lambda: PlayerStore(auction_url))
    return auth_url, auction_url


def test_register_admin_and_duplicate(cli_dbs, capsys):
    assert main.main(["register-admin", "root", "s3cretpass"]) == 0
    assert "registered" in capsys.readouterr().out

    assert main.main(["register-admin", "root", "otherpass"]) == 1
    assert "already exists" in capsys.readouterr().out


def test_register_buyer(cli_dbs, capsys):
    assert main.main(["register-buyer", "csk", "yellow123", "Chennai Super Kings"]) == 0
    assert "Chennai Super Kings" in capsys.readouterr().out


def test_generate_and_list(cli_dbs, capsys):
    assert main.main(["generate-player", "--name", "MS Dhoni", "--role", "Wicket-Keeper", "--base-price", "2000000"]) == 0
    assert main.main(["generate-player"]) == 0
    capsys.readouterr()

    assert main.main(["list-players"]) == 0
    out = capsys.readouterr().out
    assert "MS Dhoni" in out
    assert "2.00 Cr" in out
    assert "no bids" in out

    assert main.main(["list-players", "--status", "sold"]) == 0
    assert "No players." in capsys.readouterr().out


def test_generate_with_name_needs_role_and_price(cli_dbs, capsys):
    assert main.main(["generate-player", "--name", "MS Dhoni"]) == 2
