"""Tests for the administration commands."""
import pytest

from storefront.cli import main
from storefront.config import AuthSettings
from storefront.database import create_db_engine, create_session_factory
from storefront.repositories.user_repository import SQLUserRepository
from storefront.utils.security import build_password_context


@pytest.fixture
def auth_env(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTH_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("AUTH_PASSWORD_HASH_ROUNDS", "4")
    return AuthSettings()


def test_create_user_then_authenticate(auth_env):
    exit_code = main([
        "create-user",
        "--username", "admin",
        "--email", "admin@example.com",
        "--password", "admin-password",
    ])

    assert exit_code == 0

    engine = create_db_engine(auth_env.DATABASE_URL)
    repository = SQLUserRepository(
        create_session_factory(engine),
        build_password_context(auth_env.PASSWORD_HASH_ROUNDS),
    )
    user = repository.authenticate("admin@example.com", "admin-password")
    assert user.nickname == "admin"
    engine.dispose()


def test_create_duplicate_user_fails(auth_env, capsys):
    args = ["create-user", "--username", "a", "--email", "a@example.com", "--password", "pw"]

    assert main(args) == 0
    assert main(args) == 1
    assert "already exist" in capsys.readouterr().err


def test_create_tables(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_DATABASE_URL", f"sqlite:///{tmp_path / 'catalog.db'}")

    assert main(["create-tables", "--service", "catalog"]) == 0
    assert (tmp_path / "catalog.db").exists()
