"""Configuration: env aliases, URL normalization, and bind address parsing."""

import pytest
from pydantic import ValidationError

from mailing_list.config import Settings, split_bind_address


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "MAILINGLST_DB", "MAILINGLST_DATABASE_URL", "MAILINGLST_BIND_JSON",
        "MAILINGLST_BIND_RPC", "MAILINGLST_BIND_GRPC", "MAILINGLST_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite+aiosqlite:///data.sqlite"
    assert settings.bind_json == ":8080"
    assert settings.bind_rpc == ":8081"


def test_short_db_alias_with_bare_path(monkeypatch):
    monkeypatch.setenv("MAILINGLST_DB", "list.sqlite")
    assert Settings(_env_file=None).database_url == "sqlite+aiosqlite:///list.sqlite"


def test_postgres_url_gets_asyncpg_driver(monkeypatch):
    monkeypatch.setenv("MAILINGLST_DATABASE_URL", "postgresql://u:p@db/list")
    assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@db/list"


def test_grpc_bind_alias(monkeypatch):
    monkeypatch.setenv("MAILINGLST_BIND_GRPC", "127.0.0.1:9001")
    assert Settings(_env_file=None).bind_rpc == "127.0.0.1:9001"


def test_invalid_bind_rejected(monkeypatch):
    monkeypatch.setenv("MAILINGLST_BIND_JSON", "localhost")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("bind,expected", [
    (":8080", ("0.0.0.0", 8080)),
    ("127.0.0.1:9000", ("127.0.0.1", 9000)),
    ("[::1]:8081", ("::1", 8081)),
])
def test_split_bind_address(bind, expected):
    assert split_bind_address(bind) == expected


@pytest.mark.parametrize("bind", ["8080", "host:http", ":0", ":70000"])
def test_split_bind_address_rejects_malformed(bind):
    with pytest.raises(ValueError):
        split_bind_address(bind)
